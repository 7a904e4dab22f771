# thermotreat/services/sizing/simplified.py
from __future__ import annotations

from thermotreat.schemas.treatment import CalculateTreatmentInput
from thermotreat.services.properties import oil_specific_gravity
from thermotreat.services.sizing.base import SizingMethod


class SimplifiedSizing(SizingMethod):
    """
    [Rule of thumb]
    Q = 15 * Wo * dT * (0.5 * SGo + 0.1) + 15 * Ww * dT
    - Wo / Ww: oil / water flow (bpd), dT = T2 - T1
    - 15 ~ 350 lb/bbl / 24 h, oil Cp ~ 0.5, +0.1 covers a 10% loss allowance
    - oil gravity comes from the API gravity of the request
    """

    name = "simplified"

    def required_heat(self, data: CalculateTreatmentInput) -> float:
        split = self.flows(data)
        delta_t = data.target_temperature - data.inlet_temperature
        sg = oil_specific_gravity(data.api_gravity)

        oil_term = 15.0 * split.oil * delta_t * (0.5 * sg + 0.1)
        water_term = 15.0 * split.water * delta_t
        return oil_term + water_term
