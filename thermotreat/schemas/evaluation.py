# thermotreat/schemas/evaluation.py
from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import AliasChoices, Field

from .common import AppBaseModel, FrozenModel


class EvaluationType(str, Enum):
    INTERNAL = "internal"
    EXTERNAL = "external"


# =============================================================================
# Scorer contracts
# =============================================================================
class CalculationCriteria(FrozenModel):
    approved: bool
    compliance_margin: float = Field(
        ..., validation_alias=AliasChoices("compliance_margin", "complianceMargin")
    )
    is_critical: Optional[bool] = Field(
        default=None, validation_alias=AliasChoices("is_critical", "isCritical")
    )
    weight: Optional[float] = Field(default=None, ge=0, le=100)


class EvaluationCalculationResult(FrozenModel):
    approved: bool
    score: Optional[float] = None
    critical_failures: int
    average_compliance: float


# =============================================================================
# Persisted evaluations
# =============================================================================
class CriterionIn(AppBaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    description: str = Field(default="")
    required_value: float = Field(
        ..., ge=0, validation_alias=AliasChoices("required_value", "requiredValue")
    )
    actual_value: float = Field(
        ..., validation_alias=AliasChoices("actual_value", "actualValue")
    )
    max_value: Optional[float] = Field(
        default=None, validation_alias=AliasChoices("max_value", "maxValue")
    )
    is_critical: bool = Field(
        default=False, validation_alias=AliasChoices("is_critical", "isCritical")
    )
    weight: float = Field(default=1, ge=1, le=100)
    unit: Optional[str] = Field(default=None, max_length=20)


class EvaluationCreate(AppBaseModel):
    evaluation_type: EvaluationType = Field(
        default=EvaluationType.INTERNAL,
        validation_alias=AliasChoices("evaluation_type", "evaluationType"),
    )
    treatment_id: Optional[int] = Field(
        default=None, validation_alias=AliasChoices("treatment_id", "treatmentId")
    )
    evaluation_date: Optional[datetime] = Field(
        default=None,
        validation_alias=AliasChoices("evaluation_date", "evaluationDate"),
    )
    comments: Optional[str] = None
    criteria: List[CriterionIn] = Field(..., min_length=1)


class EvaluationUpdate(AppBaseModel):
    comments: Optional[str] = None
    approved: Optional[bool] = None
    # 주어지면 기존 기준 전체를 교체하고 종합 결과를 다시 계산
    criteria: Optional[List[CriterionIn]] = Field(default=None, min_length=1)


class CriterionOut(AppBaseModel):
    id: int
    name: str
    description: str
    required_value: float
    actual_value: float
    max_value: Optional[float] = None
    approved: bool
    compliance_margin: float
    is_critical: bool
    weight: float
    unit: Optional[str] = None


class EvaluationOut(AppBaseModel):
    id: int
    evaluation_type: EvaluationType
    evaluation_date: datetime
    treatment_id: Optional[int] = None
    comments: Optional[str] = None
    approved: bool
    score: Optional[float] = None
    critical_failures: int
    average_compliance: float
    criteria: List[CriterionOut] = Field(default_factory=list)
    created_at: Optional[datetime] = None


class EvaluationSort(str, Enum):
    ID = "id"
    EVALUATION_DATE = "evaluation_date"
    SCORE = "score"
    CREATED_AT = "created_at"
