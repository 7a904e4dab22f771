# thermotreat/services/sizing/detailed.py
from __future__ import annotations

from thermotreat.schemas.treatment import CalculateTreatmentInput
from thermotreat.services.sizing.base import SizingMethod


class DetailedSizing(SizingMethod):
    """
    [API-12L]
    Q = W * (6.44 + 8.14 * X/100) * (T2 - T1)
    - W: total emulsion flow (bpd), X: water fraction (%)
    - 6.44 / 8.14: oil and water heat terms per bpd·°F
    """

    name = "detailed"

    def required_heat(self, data: CalculateTreatmentInput) -> float:
        return (
            data.total_flow
            * (6.44 + (8.14 * data.water_fraction / 100))
            * (data.target_temperature - data.inlet_temperature)
        )
