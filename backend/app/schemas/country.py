from __future__ import annotations
from typing import Optional


from app.schemas.base import CamelModel


class CountryResponse(CamelModel):
    # Canonical country name as stored, not an ISO code
    code: str
    name: str
    flag: Optional[str] = None
