from __future__ import annotations
from typing import Literal, Optional


from app.schemas.base import CamelModel
from app.services.ideology import Ideology

Impact = Literal["high", "medium", "low"]


class PolicyAnalysisResponse(CamelModel):
    policy_text: str
    short_name: str
    impact: Impact = "medium"
    categories: list[str] = []
    explanation: str = ""
    econ_freedom: Optional[float] = None
    personal_freedom: Optional[float] = None


class PositionEstimateResponse(CamelModel):
    party_id: str
    econ_freedom: Optional[float] = None
    personal_freedom: Optional[float] = None
    ideology: Optional[Ideology] = None
    policy_count: int = 0
