# thermotreat/services/properties.py
from __future__ import annotations

import math

# 상수
STANDARD_TEMPERATURE_F = 60.0      # °F
STANDARD_PRESSURE_PSIA = 14.7      # psia
RANKINE_OFFSET = 459.67            # °F -> °R
GAS_CONSTANT = 10.7316             # psia·ft³/(lbmol·°R)
GAS_MOLECULAR_WEIGHT = 20.0        # lb/lbmol, natural gas average
WATER_DENSITY_STD = 62.4           # lb/ft³ @ 60°F
FT3_PER_BBL = 5.6146
LB_PER_HR_PER_BPD = 14.58          # 350 lb/bbl / 24 h


# ---- 원유 물성 ----
def oil_specific_gravity(api_gravity: float) -> float:
    return 141.5 / (api_gravity + 131.5)


def oil_density(specific_gravity: float, temperature_f: float) -> float:
    # lb/ft³, thermal expansion about 60°F
    return (specific_gravity * WATER_DENSITY_STD) / (
        1 + 0.00065 * (temperature_f - STANDARD_TEMPERATURE_F)
    )


def oil_specific_heat(specific_gravity: float, temperature_f: float) -> float:
    # BTU/(lb·°F)
    return (0.388 + 0.00045 * temperature_f) / math.sqrt(specific_gravity)


# ---- 물 물성 ----
def water_density(temperature_f: float) -> float:
    return WATER_DENSITY_STD - 0.013 * (temperature_f - STANDARD_TEMPERATURE_F)


def water_specific_heat(temperature_f: float) -> float:
    return 1.0 - 0.000117 * (temperature_f - STANDARD_TEMPERATURE_F)


# ---- 가스 물성 (이상기체) ----
def gas_density(
    pressure_psig: float,
    temperature_f: float,
    molecular_weight: float = GAS_MOLECULAR_WEIGHT,
) -> float:
    absolute_pressure = pressure_psig + STANDARD_PRESSURE_PSIA
    absolute_temperature = temperature_f + RANKINE_OFFSET
    return (absolute_pressure * molecular_weight) / (GAS_CONSTANT * absolute_temperature)


# ---- 단위 변환 ----
def ft3_to_bbl(volume_ft3: float) -> float:
    return volume_ft3 / FT3_PER_BBL


def bpd_to_lb_per_hr(flow_bpd: float, specific_gravity: float) -> float:
    return LB_PER_HR_PER_BPD * flow_bpd * specific_gravity
