from app.models.base import Base
from app.models.llm_response import LLMResponse
from app.models.party import Party

__all__ = [
    "Base",
    "LLMResponse",
    "Party",
]
