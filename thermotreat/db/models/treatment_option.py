# ./thermotreat/db/models/treatment_option.py

from __future__ import annotations
from typing import Optional

from sqlalchemy import Boolean, Float, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, IntIdMixin, TimestampMixin


class TreatmentOption(IntIdMixin, TimestampMixin, Base):
    __tablename__ = "treatment_option"
    __table_args__ = (
        # 후보 조회 정렬 순서 (min_heat_capacity, diameter)
        Index("ix_treatment_option_heat_diameter", "min_heat_capacity", "diameter"),
    )

    type: Mapped[str] = mapped_column(String(20), nullable=False)
    diameter: Mapped[float] = mapped_column(Float, nullable=False)
    length: Mapped[float] = mapped_column(Float, nullable=False)
    design_pressure: Mapped[int] = mapped_column(Integer, nullable=False)
    min_heat_capacity: Mapped[int] = mapped_column(Integer, nullable=False)
    notes: Mapped[Optional[str]] = mapped_column(Text())
    deleted: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
