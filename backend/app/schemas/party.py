from __future__ import annotations
from typing import Optional


from app.schemas.base import CamelModel
from app.services.ideology import Ideology


class PartyResponse(CamelModel):
    id: str
    name: str
    short_name: str
    econ_freedom: float
    personal_freedom: float
    ideology: Ideology
    description: str
    website: Optional[str] = None
    founded: Optional[int] = None
