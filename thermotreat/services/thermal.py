# thermotreat/services/thermal.py
# ✅ API-12L thermal treater worksheet (Table 4-2 equations)
# - 입력 하나로 모든 열/수력 계산을 한 번에 수행
# - 순서 고정: 뒤 단계가 앞 단계의 파생값을 재사용

from __future__ import annotations

import math
from typing import Any, Dict

from loguru import logger

from thermotreat.core.exceptions import ValidationError
from thermotreat.schemas.thermal import ThermalCalculationResults, ThermalTreatmentInput
from thermotreat.services import geometry, properties

FREE_HEIGHT_FOR_GAS_FT = 0.5
MINUTES_PER_DAY = 24 * 60


def _div(num: float, den: float) -> float:
    """IEEE-754 division: x/0 gives +-inf (or nan for 0/0) instead of raising."""
    if den == 0:
        if num == 0 or math.isnan(num):
            return math.nan
        return math.copysign(math.inf, num) * math.copysign(1.0, den)
    return num / den


def _sqrt(x: float) -> float:
    return math.sqrt(x) if x >= 0 else math.nan


class ThermalCalculator:
    """
    [Thermal Calculator]
    - ThermalTreatmentInput -> ThermalCalculationResults (pure, no I/O)
    - 사전 검증 실패 시 ValidationError, 이후 산술은 항상 끝까지 수행
    """

    def calculate(self, data: ThermalTreatmentInput) -> ThermalCalculationResults:
        self._validate(data)
        r: Dict[str, Any] = {}

        # 1. Fluid properties (eq. 1.32 - 1.36)
        sg = properties.oil_specific_gravity(data.api_gravity)
        r["oil_specific_gravity"] = sg
        r["calculated_oil_density"] = properties.oil_density(sg, data.inlet_temperature)
        r["calculated_water_density"] = properties.water_density(data.inlet_temperature)

        oil_cp = data.oil_specific_heat or properties.oil_specific_heat(
            sg, data.inlet_temperature
        )
        water_cp = data.water_specific_heat or properties.water_specific_heat(
            data.inlet_temperature
        )

        # 2. Free / emulsified water (eq. 1.26, 1.27)
        fws_pct = data.water_fraction * data.free_water_removal_percentage / 100
        r["free_water_and_sediment_percentage"] = fws_pct
        r["emulsified_water_percentage"] = data.water_fraction - fws_pct
        r["volumetric_flow_rate"] = data.total_flow

        # 3. Gas phase (eq. 1.31)
        r["gas_density"] = properties.gas_density(
            data.operating_pressure, data.inlet_temperature
        )
        r["gas_molecular_weight"] = properties.GAS_MOLECULAR_WEIGHT

        # 4. Cross-section areas (eq. 1.4, 1.9, 1.10, 1.17)
        areas = geometry.phase_areas(
            data.diameter,
            data.low_low_water_level,
            data.water_oil_interface_level,
            data.high_high_oil_level,
        )
        r["total_vessel_area"] = areas.total
        r["low_water_area"] = areas.low_water
        r["water_area"] = areas.water
        r["oil_area"] = areas.oil

        # 5. Retention volumes (eq. 1.5, 1.12)
        r["oil_retention_volume"] = areas.oil * data.length
        r["water_retention_volume"] = areas.water * data.length

        # 6. Flow split (eq. 1.6, 1.7)
        water_flow = data.total_flow * (data.water_fraction / 100)
        dry_oil_flow = data.total_flow - water_flow
        r["water_flow_rate"] = water_flow
        r["dry_oil_flow_rate"] = dry_oil_flow

        # 7. Estimated retention time, minutes (eq. 1.8)
        r["estimated_retention_time"] = _div(
            properties.ft3_to_bbl(r["oil_retention_volume"]) * MINUTES_PER_DAY,
            dry_oil_flow,
        )

        # 8. Gas sizing (eq. 1.11, 1.14, 1.15)
        r["free_height_for_gas"] = FREE_HEIGHT_FOR_GAS_FT
        r["gas_area"] = geometry.segment_area(
            data.diameter,
            FREE_HEIGHT_FOR_GAS_FT * geometry.INCHES_PER_FT,
            areas.total,
            name="free_height_for_gas",
        )
        velocity = data.factor_k * _sqrt(
            _div(r["calculated_oil_density"] - r["gas_density"], r["gas_density"])
        )
        r["allowable_gas_velocity"] = velocity
        # Simplified form of eq. 1.15: the gas flow rate and compressibility
        # terms are not part of the input, so the worksheet constant is kept.
        r["required_gas_area"] = _div(1.7 * 0.994, velocity * 24 * 3600)

        # 9. Dehydration, mass flow, settling (eq. 1.13, 1.18 - 1.24)
        water_leaving = water_flow * (100 - fws_pct) / 100
        r["water_leaving_with_oil"] = water_leaving
        r["water_cut_leaving_treater"] = _div(water_leaving, water_leaving + dry_oil_flow) * 100
        r["dehydration_percentage"] = _div(
            100 * properties.ft3_to_bbl(r["water_retention_volume"]),
            water_flow * fws_pct / 100,
        )

        r["oil_mass_flow"] = properties.bpd_to_lb_per_hr(dry_oil_flow, sg)
        r["water_mass_flow"] = properties.bpd_to_lb_per_hr(
            water_flow, data.water_specific_gravity
        )

        settling_velocity = _div(
            18.4663
            * data.water_drop_size**2
            * (r["calculated_water_density"] - r["calculated_oil_density"]),
            data.oil_viscosity,
        )
        r["heavy_phase_settling_velocity"] = settling_velocity
        r["heavy_phase_settling_time"] = _div(
            (data.high_high_oil_level - data.water_oil_interface_level)
            / geometry.INCHES_PER_FT,
            settling_velocity,
        )
        r["light_phase_settling_time"] = r["heavy_phase_settling_time"] / 60

        # 10. Total heat duty, BTU/h
        delta_t = data.inlet_temperature - data.ambient_temperature
        oil_flow = data.total_flow * (100 - data.water_fraction) / 100
        water_flow_heat = data.total_flow * data.water_fraction / 100
        r["total_heat_required"] = (oil_flow * oil_cp + water_flow_heat * water_cp) * delta_t

        # 11. Water entering the treater (eq. 1.26 - 1.29)
        free_water_entering = (
            water_flow
            * (100 - fws_pct)
            * (100 - data.free_water_removal_percentage)
            / (100 * 100)
        )
        r["free_water_flow_entering"] = free_water_entering
        r["emulsified_water_flow_entering"] = water_flow - free_water_entering
        r["total_water_to_be_handled"] = (
            free_water_entering + r["emulsified_water_flow_entering"]
        )
        r["volumetric_water_fraction"] = (
            r["total_water_to_be_handled"] / r["volumetric_flow_rate"]
        )

        logger.debug(
            f"[Thermal] D={data.diameter}ft L={data.length}ft W={data.total_flow}bpd "
            f"-> Q={r['total_heat_required']:.1f} BTU/h, t_ret={r['estimated_retention_time']:.2f} min"
        )
        return ThermalCalculationResults(**r)

    @staticmethod
    def _validate(data: ThermalTreatmentInput) -> None:
        for name in ("diameter", "length", "total_flow", "api_gravity"):
            value = getattr(data, name)
            if not value or value <= 0:
                raise ValidationError(
                    f"{name} must be greater than 0", field=name, value=value
                )

        for name in (
            "low_low_water_level",
            "water_oil_interface_level",
            "high_high_oil_level",
        ):
            geometry.validate_level(data.diameter, getattr(data, name), name)

        geometry.validate_level(
            data.diameter,
            FREE_HEIGHT_FOR_GAS_FT * geometry.INCHES_PER_FT,
            "free_height_for_gas",
        )


def calculate_thermal_results(data: ThermalTreatmentInput) -> ThermalCalculationResults:
    return ThermalCalculator().calculate(data)
