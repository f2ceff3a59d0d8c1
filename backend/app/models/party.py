from __future__ import annotations
from typing import Optional


from sqlalchemy import Float, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import Base


class Party(Base):
    __tablename__ = "parties"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str] = mapped_column(String(200))
    type: Mapped[str] = mapped_column(String(100))
    country: Mapped[str] = mapped_column(String(100), index=True)
    founded: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    website: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    econ_freedom: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    personal_freedom: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
