# thermotreat/services/sizing/base.py
from abc import ABC, abstractmethod
from dataclasses import dataclass

from thermotreat.schemas.treatment import CalculateTreatmentInput

MINUTES_PER_DAY = 1440.0


def wind_constant(wind_speed_mph: float) -> float:
    """Shell heat-loss coefficient K for a given wind speed (API-12L)."""
    if wind_speed_mph <= 5:
        return 8.5
    if wind_speed_mph <= 10:
        return 10.2
    if wind_speed_mph <= 15:
        return 13.2
    if wind_speed_mph <= 20:
        return 16.8
    return 21.0


@dataclass(frozen=True)
class FlowSplit:
    oil: float
    water: float


@dataclass(frozen=True)
class RetentionVolumes:
    oil: float
    water: float

    @property
    def required(self) -> float:
        return max(self.oil, self.water)


class SizingMethod(ABC):
    """
    처리기 용량 계산식의 공통 부모 클래스 (Strategy 인터페이스).
    유량 분배, 체류 부피, 열손실은 공통이고 필요 열량 식만 변형별로 다릅니다.
    """

    name: str

    def flows(self, data: CalculateTreatmentInput) -> FlowSplit:
        return FlowSplit(
            oil=data.total_flow * (100 - data.water_fraction) / 100,
            water=data.total_flow * data.water_fraction / 100,
        )

    def retention_volumes(self, data: CalculateTreatmentInput) -> RetentionVolumes:
        split = self.flows(data)
        return RetentionVolumes(
            oil=split.oil * (data.oil_retention_time / MINUTES_PER_DAY),
            water=split.water * (data.water_retention_time / MINUTES_PER_DAY),
        )

    @abstractmethod
    def required_heat(self, data: CalculateTreatmentInput) -> float:
        """Burner duty needed to raise the emulsion to the treating temperature (BTU/hr)."""

    def heat_loss(
        self, data: CalculateTreatmentInput, diameter: float, length: float
    ) -> float:
        """Shell loss of one candidate vessel: K * D * L * (T_target - T_ambient)."""
        k = wind_constant(data.wind_speed)
        return k * diameter * length * (data.target_temperature - data.ambient_temperature)
