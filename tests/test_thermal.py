# tests/test_thermal.py
from __future__ import annotations

import math

import pytest

from thermotreat.core.exceptions import ValidationError
from thermotreat.schemas.thermal import ThermalCalculationResults, ThermalTreatmentInput
from thermotreat.services import properties
from thermotreat.services.geometry import segment_area
from thermotreat.services.thermal import ThermalCalculator, calculate_thermal_results


@pytest.fixture()
def scenario(thermal_payload) -> ThermalTreatmentInput:
    return ThermalTreatmentInput(**thermal_payload)


def test_input_accepts_camel_and_snake_case(thermal_payload):
    camel = ThermalTreatmentInput(**thermal_payload)
    snake = ThermalTreatmentInput(
        diameter=4,
        length=10,
        total_flow=500,
        water_fraction=20,
        api_gravity=18,
        inlet_temperature=75,
        ambient_temperature=30,
        operating_pressure=50,
    )
    assert camel == snake


def test_input_defaults_and_null_stripping(thermal_payload):
    data = ThermalTreatmentInput(**{**thermal_payload, "oilViscosity": None})
    assert data.oil_viscosity == 15.5
    assert data.free_water_removal_percentage == 85
    assert data.water_drop_size == 150
    assert data.factor_k == 0.5
    assert (data.low_low_water_level, data.water_oil_interface_level, data.high_high_oil_level) == (2, 12, 24)
    assert data.oil_specific_heat is None


def test_scenario_reference_values(scenario):
    r = calculate_thermal_results(scenario)

    assert r.oil_specific_gravity == pytest.approx(0.9459, abs=1e-3)
    assert r.total_vessel_area == pytest.approx(math.pi * 4, abs=1e-3)

    assert r.free_water_and_sediment_percentage == pytest.approx(17.0)
    assert r.emulsified_water_percentage == pytest.approx(3.0)
    assert r.volumetric_flow_rate == 500
    assert r.water_flow_rate == pytest.approx(100.0)
    assert r.dry_oil_flow_rate == pytest.approx(400.0)
    assert r.water_leaving_with_oil == pytest.approx(83.0)
    assert r.water_cut_leaving_treater == pytest.approx(83.0 / 483.0 * 100)
    assert r.free_water_flow_entering == pytest.approx(12.45)
    assert r.emulsified_water_flow_entering == pytest.approx(87.55)
    assert r.total_water_to_be_handled == pytest.approx(100.0)
    assert r.volumetric_water_fraction == pytest.approx(0.2)
    assert r.free_height_for_gas == 0.5
    assert r.gas_molecular_weight == 20.0


def test_scenario_all_fields_finite(scenario):
    r = calculate_thermal_results(scenario)
    dumped = r.model_dump()
    assert len(dumped) == 34
    for name, value in dumped.items():
        assert value is not None, name
        assert math.isfinite(value), name


def test_derived_formulas(scenario):
    r = calculate_thermal_results(scenario)
    sg = properties.oil_specific_gravity(18)

    assert r.gas_area == pytest.approx(segment_area(4, 6))
    assert r.oil_retention_volume == pytest.approx(r.oil_area * 10)
    assert r.estimated_retention_time == pytest.approx(
        (r.oil_retention_volume / 5.6146) * 1440 / 400
    )
    assert r.allowable_gas_velocity == pytest.approx(
        0.5 * math.sqrt((r.calculated_oil_density - r.gas_density) / r.gas_density)
    )
    assert r.required_gas_area == pytest.approx(
        1.7 * 0.994 / (r.allowable_gas_velocity * 24 * 3600)
    )
    assert r.dehydration_percentage == pytest.approx(
        100 * (r.water_retention_volume / 5.6146) / (100 * 17 / 100)
    )
    assert r.oil_mass_flow == pytest.approx(14.58 * 400 * sg)
    assert r.water_mass_flow == pytest.approx(14.58 * 100 * 1.0)
    assert r.heavy_phase_settling_velocity == pytest.approx(
        18.4663 * 150**2 * (r.calculated_water_density - r.calculated_oil_density) / 15.5
    )
    assert r.heavy_phase_settling_time == pytest.approx(
        ((24 - 12) / 12) / r.heavy_phase_settling_velocity
    )
    assert r.light_phase_settling_time == pytest.approx(r.heavy_phase_settling_time / 60)

    oil_cp = properties.oil_specific_heat(sg, 75)
    water_cp = properties.water_specific_heat(75)
    assert r.total_heat_required == pytest.approx((400 * oil_cp + 100 * water_cp) * 45)


def test_specific_heat_overrides_are_used(thermal_payload):
    data = ThermalTreatmentInput(
        **{**thermal_payload, "oilSpecificHeat": 0.5, "waterSpecificHeat": 1.0}
    )
    r = calculate_thermal_results(data)
    assert r.total_heat_required == pytest.approx((400 * 0.5 + 100 * 1.0) * 45)


def test_calculation_is_pure(scenario):
    first = calculate_thermal_results(scenario)
    second = ThermalCalculator().calculate(scenario)
    assert isinstance(first, ThermalCalculationResults)
    assert first.model_dump() == second.model_dump()


@pytest.mark.parametrize("field", ["diameter", "length", "totalFlow", "apiGravity"])
@pytest.mark.parametrize("bad", [0, -1])
def test_non_positive_inputs_raise(thermal_payload, field, bad):
    data = ThermalTreatmentInput(**{**thermal_payload, field: bad})
    with pytest.raises(ValidationError) as ei:
        calculate_thermal_results(data)
    assert ei.value.code == "INVALID_INPUT"


def test_level_above_vessel_raises(thermal_payload):
    data = ThermalTreatmentInput(**{**thermal_payload, "highHighOilLevel": 60})
    with pytest.raises(ValidationError) as ei:
        calculate_thermal_results(data)
    assert ei.value.field == "high_high_oil_level"


def test_zero_free_water_completes_without_raising(thermal_payload):
    # 0 나눗셈이 생겨도 산술은 끝까지 수행됨
    data = ThermalTreatmentInput(**{**thermal_payload, "waterFraction": 0})
    r = calculate_thermal_results(data)
    assert r.water_flow_rate == 0
    assert math.isinf(r.dehydration_percentage)


@pytest.mark.parametrize(
    "field",
    [
        "freeWaterRemovalPercentage",
        "water_drop_size",
        "oilViscosity",
        "factorK",
        "lowLowWaterLevel",
        "water_oil_interface_level",
        "highHighOilLevel",
        "oilSpecificHeat",
    ],
)
def test_zero_optional_parameter_uses_default(thermal_payload, scenario, field):
    data = ThermalTreatmentInput(**{**thermal_payload, field: 0})
    assert data == scenario
    r = calculate_thermal_results(data)
    assert r.free_water_and_sediment_percentage == pytest.approx(20 * 85 / 100)
    assert math.isfinite(r.dehydration_percentage)
