from __future__ import annotations
from typing import Optional


from sqlalchemy import Float, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import Base


class LLMResponse(Base):
    """One policy extracted from a chunk of a party's programme."""

    __tablename__ = "llm_responses"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    party_id: Mapped[str] = mapped_column(String(64), index=True)
    country: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    timestamp: Mapped[Optional[str]] = mapped_column(String(40), nullable=True)
    chunk_index: Mapped[int] = mapped_column(Integer, default=0)
    policy_id: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    policy_text: Mapped[Optional[str]] = mapped_column("policy", Text, nullable=True)
    short_name: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)
    impact: Mapped[Optional[str]] = mapped_column(String(10), nullable=True)
    impact_explanation: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    # JSON-encoded list of category strings
    category: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    explanation: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    econ_freedom: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    personal_freedom: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    weight: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    error: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
