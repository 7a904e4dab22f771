# tests/test_sizing.py
from __future__ import annotations

import pytest
from pydantic import ValidationError as PydanticValidationError

from thermotreat.core.exceptions import InvalidArgumentError
from thermotreat.schemas.treatment import CalculateTreatmentInput
from thermotreat.services.properties import oil_specific_gravity
from thermotreat.services.sizing import (
    DetailedSizing,
    SimplifiedSizing,
    get_sizing_method,
    wind_constant,
)


@pytest.fixture()
def data(sizing_payload) -> CalculateTreatmentInput:
    return CalculateTreatmentInput(**sizing_payload)


@pytest.mark.parametrize(
    "wind, k",
    [(0, 8.5), (5, 8.5), (5.1, 10.2), (10, 10.2), (15, 13.2), (20, 16.8), (20.5, 21.0), (50, 21.0)],
)
def test_wind_constant_steps(wind, k):
    assert wind_constant(wind) == k


def test_flow_split_and_retention_volumes(data):
    method = DetailedSizing()
    split = method.flows(data)
    assert split.oil == pytest.approx(400.0)
    assert split.water == pytest.approx(100.0)

    volumes = method.retention_volumes(data)
    assert volumes.oil == pytest.approx(400 * 60 / 1440)
    assert volumes.water == pytest.approx(100 * 30 / 1440)
    assert volumes.required == volumes.oil


def test_detailed_required_heat(data):
    assert DetailedSizing().required_heat(data) == pytest.approx(
        500 * (6.44 + 8.14 * 20 / 100) * (140 - 75)
    )


def test_simplified_required_heat(data):
    sg = oil_specific_gravity(18)
    expected = 15 * 400 * 65 * (0.5 * sg + 0.1) + 15 * 100 * 65
    assert SimplifiedSizing().required_heat(data) == pytest.approx(expected)


def test_variants_differ(data):
    assert DetailedSizing().required_heat(data) != pytest.approx(
        SimplifiedSizing().required_heat(data)
    )


def test_heat_loss_is_per_candidate(data):
    method = DetailedSizing()
    assert method.heat_loss(data, 6, 10) == pytest.approx(13.2 * 6 * 10 * 110)
    assert method.heat_loss(data, 8, 20) == pytest.approx(13.2 * 8 * 20 * 110)


def test_get_sizing_method():
    assert isinstance(get_sizing_method("detailed"), DetailedSizing)
    assert isinstance(get_sizing_method("simplified"), SimplifiedSizing)
    with pytest.raises(InvalidArgumentError):
        get_sizing_method("exact")


@pytest.mark.parametrize(
    "field, value",
    [
        ("totalFlow", 99),
        ("waterFraction", 101),
        ("inletTemperature", 59),
        ("targetTemperature", 251),
        ("ambientTemperature", -41),
        ("oilRetentionTime", 9),
        ("waterRetentionTime", 151),
        ("windSpeed", 51),
        ("apiGravity", 9),
    ],
)
def test_request_ranges(sizing_payload, field, value):
    with pytest.raises(PydanticValidationError):
        CalculateTreatmentInput(**{**sizing_payload, field: value})
