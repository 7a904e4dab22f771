# thermotreat/schemas/treatment.py
from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import AliasChoices, Field

from .common import AppBaseModel, FrozenModel, SizingMethodName, TreaterType


# =============================================================================
# Calculation request / result
# =============================================================================
class CalculateTreatmentInput(FrozenModel):
    total_flow: float = Field(
        ...,
        ge=100,
        validation_alias=AliasChoices("total_flow", "totalFlow"),
        description="Total emulsion flow (bbl/day)",
        examples=[500],
    )
    water_fraction: float = Field(
        ...,
        ge=0,
        le=100,
        validation_alias=AliasChoices("water_fraction", "waterFraction"),
        description="Water fraction (%)",
        examples=[20],
    )
    inlet_temperature: float = Field(
        ...,
        ge=60,
        le=300,
        validation_alias=AliasChoices(
            "inlet_temperature", "inletTemperature", "inputTemperature"
        ),
        description="Inlet temperature (°F)",
        examples=[75],
    )
    target_temperature: float = Field(
        ...,
        ge=100,
        le=250,
        validation_alias=AliasChoices(
            "target_temperature", "targetTemperature", "treatmentTemperature"
        ),
        description="Treating temperature (°F)",
        examples=[140],
    )
    ambient_temperature: float = Field(
        ...,
        ge=-40,
        le=120,
        validation_alias=AliasChoices("ambient_temperature", "ambientTemperature"),
        description="Ambient temperature (°F)",
        examples=[30],
    )
    oil_retention_time: float = Field(
        ...,
        ge=10,
        le=300,
        validation_alias=AliasChoices("oil_retention_time", "oilRetentionTime"),
        description="Oil retention time (min)",
        examples=[60],
    )
    water_retention_time: float = Field(
        ...,
        ge=5,
        le=150,
        validation_alias=AliasChoices("water_retention_time", "waterRetentionTime"),
        description="Water retention time (min)",
        examples=[30],
    )
    wind_speed: float = Field(
        ...,
        ge=0,
        le=50,
        validation_alias=AliasChoices("wind_speed", "windSpeed"),
        description="Wind speed (mph)",
        examples=[15],
    )
    api_gravity: float = Field(
        ...,
        ge=10,
        le=50,
        validation_alias=AliasChoices("api_gravity", "apiGravity"),
        description="Crude API gravity",
        examples=[18],
    )
    method: Optional[SizingMethodName] = Field(
        default=None,
        description='"detailed" (API-12L) | "simplified"; server default when omitted',
    )


class TreatmentCalculations(FrozenModel):
    method: SizingMethodName
    calculated_oil_flow: float
    calculated_water_flow: float
    oil_retention_volume: float
    water_retention_volume: float
    required_heat_capacity: float
    heat_loss: float
    total_heat: float
    recommended_diameter: float
    recommended_length: float
    recommended_pressure: float
    recommended_treaters: List[str] = Field(default_factory=list)
    selected_option_id: Optional[int] = None
    required_retention_volume: float
    estimated_residence_time: float


# =============================================================================
# Persisted treatments
# =============================================================================
class TreatmentCreate(CalculateTreatmentInput):
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = None
    type: TreaterType = TreaterType.HORIZONTAL


class TreatmentUpdate(AppBaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    description: Optional[str] = None
    type: Optional[TreaterType] = None


class TreatmentOut(AppBaseModel):
    id: int
    name: str
    description: Optional[str] = None
    type: TreaterType
    method: SizingMethodName

    total_flow: float
    water_fraction: float
    inlet_temperature: float
    target_temperature: float
    ambient_temperature: float
    oil_retention_time: float
    water_retention_time: float
    wind_speed: float
    api_gravity: float

    calculated_oil_flow: float
    calculated_water_flow: float
    oil_retention_volume: float
    water_retention_volume: float
    required_heat: float
    heat_loss: float
    total_heat: float
    selected_diameter: float
    selected_length: float
    design_pressure: float

    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class TreatmentSort(str, Enum):
    ID = "id"
    NAME = "name"
    CREATED_AT = "created_at"
    TOTAL_FLOW = "total_flow"
    REQUIRED_HEAT = "required_heat"
    TOTAL_HEAT = "total_heat"
