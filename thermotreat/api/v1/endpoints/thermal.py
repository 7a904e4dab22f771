# thermotreat/api/v1/endpoints/thermal.py
from __future__ import annotations

from fastapi import APIRouter
from loguru import logger

from thermotreat.schemas.thermal import ThermalCalculationResults, ThermalTreatmentInput
from thermotreat.services.thermal import calculate_thermal_results

router = APIRouter()


@router.post("/calculate", response_model=ThermalCalculationResults)
def calculate_thermal(payload: ThermalTreatmentInput) -> ThermalCalculationResults:
    """
    Full thermal/hydraulic sizing of one vessel.
    입력 오류(ValidationError)는 전역 핸들러에서 400으로 변환됩니다.
    """
    logger.info(
        "🔥 Thermal calculation: D={}ft L={}ft Q={}bpd water={}%",
        payload.diameter,
        payload.length,
        payload.total_flow,
        payload.water_fraction,
    )
    return calculate_thermal_results(payload)
