# thermotreat/schemas/treatment_option.py
from enum import Enum
from typing import Optional

from pydantic import AliasChoices, Field

from .common import AppBaseModel, TreaterType


class TreatmentOptionSpec(AppBaseModel):
    type: TreaterType = Field(..., description="vertical | horizontal")
    diameter: float = Field(..., ge=1, le=20, description="Outside diameter (ft)")
    length: float = Field(..., ge=5, le=40, description="Standard seam length (ft)")
    design_pressure: int = Field(
        ...,
        ge=10,
        le=5000,
        validation_alias=AliasChoices("design_pressure", "designPressure"),
        description="Design pressure (psig)",
    )
    min_heat_capacity: int = Field(
        ...,
        ge=10000,
        le=5000000,
        validation_alias=AliasChoices("min_heat_capacity", "minHeatCapacity"),
        description="Minimum firebox capacity (BTU/hr)",
    )
    notes: Optional[str] = None


class TreatmentOptionUpdate(AppBaseModel):
    type: Optional[TreaterType] = None
    diameter: Optional[float] = Field(default=None, ge=1, le=20)
    length: Optional[float] = Field(default=None, ge=5, le=40)
    design_pressure: Optional[int] = Field(
        default=None,
        ge=10,
        le=5000,
        validation_alias=AliasChoices("design_pressure", "designPressure"),
    )
    min_heat_capacity: Optional[int] = Field(
        default=None,
        ge=10000,
        le=5000000,
        validation_alias=AliasChoices("min_heat_capacity", "minHeatCapacity"),
    )
    notes: Optional[str] = None


class TreatmentOptionOut(TreatmentOptionSpec):
    id: int
    # 응답에서는 검증 범위를 다시 적용하지 않음 (레거시 행 허용)
    diameter: float
    length: float
    design_pressure: int
    min_heat_capacity: int


class TreatmentOptionSort(str, Enum):
    ID = "id"
    MIN_HEAT_CAPACITY = "min_heat_capacity"
    DIAMETER = "diameter"
    LENGTH = "length"
    DESIGN_PRESSURE = "design_pressure"
