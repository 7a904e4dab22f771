# thermotreat/schemas/thermal.py
# =============================================================================
# Thermal treater calculation schemas (Pydantic v2)
#
# - Input accepts both snake_case and the legacy camelCase keys (totalFlow ...).
# - Explicit nulls are dropped so the documented defaults apply. A zero on an
#   optional physical parameter is treated the same way (0 means "not given").
# - Positivity of diameter/length/flow/API is checked by the calculator, not
#   here, so that the core raises ValidationError for direct Python callers too.
# =============================================================================

from __future__ import annotations

from typing import Any, Optional

from pydantic import AliasChoices, Field, model_validator
from pydantic.alias_generators import to_camel

from .common import FrozenModel


# 0 이면 기본값(또는 계산값) 사용
_ZERO_MEANS_DEFAULT = (
    "free_water_removal_percentage",
    "water_drop_size",
    "water_specific_gravity",
    "oil_specific_heat",
    "water_specific_heat",
    "oil_viscosity",
    "factor_k",
    "low_low_water_level",
    "water_oil_interface_level",
    "high_high_oil_level",
)
_ZERO_KEYS = frozenset(_ZERO_MEANS_DEFAULT) | {to_camel(n) for n in _ZERO_MEANS_DEFAULT}


def _drop_unset(obj: Any) -> Any:
    if isinstance(obj, dict):
        return {
            k: v
            for k, v in obj.items()
            if v is not None and not (k in _ZERO_KEYS and v == 0)
        }
    return obj


def _aliased(name: str, default: Any = ..., **kw: Any) -> Any:
    return Field(default, validation_alias=AliasChoices(name, to_camel(name)), **kw)


# =============================================================================
# Defaults (API-12L worksheet)
# =============================================================================
DEFAULT_FREE_WATER_REMOVAL_PCT = 85.0
DEFAULT_WATER_DROP_SIZE_UM = 150.0
DEFAULT_WATER_SPECIFIC_GRAVITY = 1.0
DEFAULT_OIL_VISCOSITY_CP = 15.5
DEFAULT_FACTOR_K = 0.5
DEFAULT_LOW_LOW_WATER_LEVEL_IN = 2.0
DEFAULT_INTERFACE_LEVEL_IN = 12.0
DEFAULT_HIGH_HIGH_OIL_LEVEL_IN = 24.0


class ThermalTreatmentInput(FrozenModel):
    @model_validator(mode="before")
    @classmethod
    def _strip_nulls(cls, data: Any) -> Any:
        return _drop_unset(data)

    # Vessel
    diameter: float = _aliased("diameter", description="Vessel diameter D (ft)")
    length: float = _aliased("length", description="Vessel length L (ft)")

    # Process
    total_flow: float = _aliased("total_flow", description="Total emulsion flow (bpd)")
    water_fraction: float = _aliased(
        "water_fraction", ge=0, le=100, description="Water and sediment (%)"
    )
    api_gravity: float = _aliased("api_gravity", description="Crude API gravity")
    inlet_temperature: float = _aliased("inlet_temperature", description="T1 (°F)")
    ambient_temperature: float = _aliased("ambient_temperature", description="T3 (°F)")
    operating_pressure: float = _aliased(
        "operating_pressure", description="Operating pressure (psig)"
    )

    # Optional physical parameters
    free_water_removal_percentage: float = _aliased(
        "free_water_removal_percentage", DEFAULT_FREE_WATER_REMOVAL_PCT
    )
    water_drop_size: float = _aliased("water_drop_size", DEFAULT_WATER_DROP_SIZE_UM)
    water_specific_gravity: float = _aliased(
        "water_specific_gravity", DEFAULT_WATER_SPECIFIC_GRAVITY
    )
    oil_specific_heat: Optional[float] = _aliased(
        "oil_specific_heat", None, description="BTU/(lb·°F); computed when absent"
    )
    water_specific_heat: Optional[float] = _aliased(
        "water_specific_heat", None, description="BTU/(lb·°F); computed when absent"
    )
    oil_density: Optional[float] = _aliased(
        "oil_density", None, description="lb/ft³ (informational)"
    )
    water_density: Optional[float] = _aliased(
        "water_density", None, description="lb/ft³ (informational)"
    )
    oil_viscosity: float = _aliased("oil_viscosity", DEFAULT_OIL_VISCOSITY_CP)
    factor_k: float = _aliased("factor_k", DEFAULT_FACTOR_K)

    # Level markers (inches from vessel bottom)
    low_low_water_level: float = _aliased(
        "low_low_water_level", DEFAULT_LOW_LOW_WATER_LEVEL_IN
    )
    water_oil_interface_level: float = _aliased(
        "water_oil_interface_level", DEFAULT_INTERFACE_LEVEL_IN
    )
    high_high_oil_level: float = _aliased(
        "high_high_oil_level", DEFAULT_HIGH_HIGH_OIL_LEVEL_IN
    )


class ThermalCalculationResults(FrozenModel):
    # Water split
    free_water_and_sediment_percentage: float
    emulsified_water_percentage: float
    volumetric_flow_rate: float

    # Gas phase
    gas_density: float
    gas_molecular_weight: float

    # Geometry
    total_vessel_area: float
    low_water_area: float
    water_area: float
    oil_area: float
    oil_retention_volume: float
    water_retention_volume: float

    # Flows
    water_flow_rate: float
    dry_oil_flow_rate: float
    estimated_retention_time: float

    # Gas sizing
    free_height_for_gas: float
    gas_area: float
    allowable_gas_velocity: float
    required_gas_area: float

    # Dehydration
    water_leaving_with_oil: float
    water_cut_leaving_treater: float
    dehydration_percentage: float

    # Mass flows and settling
    oil_mass_flow: float
    water_mass_flow: float
    heavy_phase_settling_velocity: float
    heavy_phase_settling_time: float
    light_phase_settling_time: float

    # Heat
    total_heat_required: float

    # Water handling
    free_water_flow_entering: float
    emulsified_water_flow_entering: float
    total_water_to_be_handled: float
    volumetric_water_fraction: float

    # Fluid properties
    oil_specific_gravity: float
    calculated_oil_density: float
    calculated_water_density: float
