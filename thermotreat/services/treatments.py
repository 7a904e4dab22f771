# thermotreat/services/treatments.py
from __future__ import annotations

from typing import Optional, Union

from loguru import logger

from thermotreat.core.config import settings
from thermotreat.schemas.common import SizingMethodName
from thermotreat.schemas.treatment import CalculateTreatmentInput, TreatmentCalculations
from thermotreat.services.catalog import (
    CatalogReader,
    TreaterCatalogMatcher,
    treater_label,
)
from thermotreat.services.sizing import MINUTES_PER_DAY, get_sizing_method


def calculate_treatment_parameters(
    data: CalculateTreatmentInput,
    catalog: CatalogReader,
    method: Optional[Union[SizingMethodName, str]] = None,
) -> TreatmentCalculations:
    """
    [Treatment sizing]
    1) oil/water split, 2) retention volumes, 3) required burner duty,
    4) catalog match (per-candidate shell loss), 5) residence time.

    method 우선순위: 인자 > 요청의 method > 설정(DEFAULT_SIZING_METHOD)
    """
    chosen = method or data.method or settings.DEFAULT_SIZING_METHOD
    sizing = get_sizing_method(chosen)

    split = sizing.flows(data)
    volumes = sizing.retention_volumes(data)
    required_heat = sizing.required_heat(data)

    match = TreaterCatalogMatcher(catalog).match(
        required_heat,
        [volumes.oil, volumes.water],
        lambda d, l: sizing.heat_loss(data, d, l),
    )

    residence_time = volumes.required * MINUTES_PER_DAY / data.total_flow
    best = match.best

    if best is None:
        logger.warning(
            "⚠️ No feasible treater: heat={:.0f} BTU/hr volume={:.2f} bbl",
            required_heat,
            volumes.required,
        )

    return TreatmentCalculations(
        method=SizingMethodName(sizing.name),
        calculated_oil_flow=split.oil,
        calculated_water_flow=split.water,
        oil_retention_volume=volumes.oil,
        water_retention_volume=volumes.water,
        required_heat_capacity=required_heat,
        heat_loss=best.heat_loss if best else 0.0,
        total_heat=best.total_heat if best else required_heat,
        recommended_diameter=best.option.diameter if best else 0.0,
        recommended_length=best.option.length if best else 0.0,
        recommended_pressure=best.option.design_pressure if best else 0.0,
        recommended_treaters=[treater_label(c.option) for c in match.feasible],
        selected_option_id=best.option.id if best else None,
        required_retention_volume=volumes.required,
        estimated_residence_time=residence_time,
    )
