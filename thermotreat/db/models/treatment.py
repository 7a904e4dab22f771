# ./thermotreat/db/models/treatment.py

from __future__ import annotations
from typing import List, Optional

from sqlalchemy import Boolean, Float, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, IntIdMixin, TimestampMixin


class Treatment(IntIdMixin, TimestampMixin, Base):
    __tablename__ = "treatment"

    name: Mapped[str] = mapped_column(String(100), index=True, nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text())
    type: Mapped[str] = mapped_column(String(20), nullable=False)
    method: Mapped[str] = mapped_column(String(20), nullable=False, default="detailed")

    # --- design inputs ---
    total_flow: Mapped[float] = mapped_column(Float, nullable=False)
    water_fraction: Mapped[float] = mapped_column(Float, nullable=False)
    inlet_temperature: Mapped[float] = mapped_column(Float, nullable=False)
    target_temperature: Mapped[float] = mapped_column(Float, nullable=False)
    ambient_temperature: Mapped[float] = mapped_column(Float, nullable=False)
    oil_retention_time: Mapped[float] = mapped_column(Float, nullable=False)
    water_retention_time: Mapped[float] = mapped_column(Float, nullable=False)
    wind_speed: Mapped[float] = mapped_column(Float, nullable=False)
    api_gravity: Mapped[float] = mapped_column(Float, nullable=False)

    # --- calculated ---
    calculated_oil_flow: Mapped[float] = mapped_column(Float, default=0.0)
    calculated_water_flow: Mapped[float] = mapped_column(Float, default=0.0)
    oil_retention_volume: Mapped[float] = mapped_column(Float, default=0.0)
    water_retention_volume: Mapped[float] = mapped_column(Float, default=0.0)
    required_heat: Mapped[float] = mapped_column(Float, default=0.0)
    heat_loss: Mapped[float] = mapped_column(Float, default=0.0)
    total_heat: Mapped[float] = mapped_column(Float, default=0.0)
    selected_diameter: Mapped[float] = mapped_column(Float, default=0.0)
    selected_length: Mapped[float] = mapped_column(Float, default=0.0)
    design_pressure: Mapped[float] = mapped_column(Float, default=0.0)

    selected_option_id: Mapped[Optional[int]] = mapped_column(
        ForeignKey("treatment_option.id", ondelete="SET NULL"), nullable=True
    )
    deleted: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    evaluations: Mapped[List["Evaluation"]] = relationship(back_populates="treatment")
