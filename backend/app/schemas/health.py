from __future__ import annotations

from pydantic import BaseModel


class StoreStatus(BaseModel):
    kind: str
    states: dict[str, str]


class HealthResponse(BaseModel):
    status: str
    store: StoreStatus
