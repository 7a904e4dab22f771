# ./thermotreat/db/models/evaluation.py

from __future__ import annotations
from datetime import datetime
from typing import List, Optional

from sqlalchemy import Boolean, DateTime, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, IntIdMixin, TimestampMixin


class Evaluation(IntIdMixin, TimestampMixin, Base):
    __tablename__ = "evaluation"

    evaluation_type: Mapped[str] = mapped_column(String(20), nullable=False, default="internal")
    evaluation_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    comments: Mapped[Optional[str]] = mapped_column(Text())

    approved: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    score: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    critical_failures: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    average_compliance: Mapped[float] = mapped_column(Float, default=0.0, nullable=False)
    deleted: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    treatment_id: Mapped[Optional[int]] = mapped_column(
        ForeignKey("treatment.id", ondelete="SET NULL"), index=True, nullable=True
    )
    treatment: Mapped[Optional["Treatment"]] = relationship(back_populates="evaluations")

    criteria: Mapped[List["EvaluationCriterion"]] = relationship(
        back_populates="evaluation",
        cascade="all, delete-orphan",
        order_by="EvaluationCriterion.id",
    )


class EvaluationCriterion(IntIdMixin, Base):
    __tablename__ = "evaluation_criterion"

    evaluation_id: Mapped[int] = mapped_column(
        ForeignKey("evaluation.id", ondelete="CASCADE"), index=True
    )

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str] = mapped_column(Text(), default="")
    required_value: Mapped[float] = mapped_column(Float, nullable=False)
    actual_value: Mapped[float] = mapped_column(Float, nullable=False)
    max_value: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    approved: Mapped[bool] = mapped_column(Boolean, nullable=False)
    compliance_margin: Mapped[float] = mapped_column(Float, nullable=False)
    is_critical: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    weight: Mapped[float] = mapped_column(Float, default=1.0, nullable=False)
    unit: Mapped[Optional[str]] = mapped_column(String(20))

    evaluation: Mapped["Evaluation"] = relationship(back_populates="criteria")
