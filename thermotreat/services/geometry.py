# thermotreat/services/geometry.py
"""
Horizontal vessel cross-section geometry.

Liquid levels are measured in inches from the vessel bottom, diameters and
lengths in feet. A level h cuts a circular segment whose area is

    ratio = 2h / (12 D)
    angle = 2 acos(1 - ratio)
    A_seg = (angle - sin(angle)) * A_total / (2 pi)

Phase areas are obtained by stacking segments: the water band is the interface
segment minus the low-low water segment, the oil band is the high-high oil
segment minus both of those.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

from thermotreat.core.exceptions import ValidationError

INCHES_PER_FT = 12.0
FT3_TO_BBL_FACTOR = 0.1781


@dataclass(frozen=True)
class PhaseAreas:
    total: float
    low_water: float
    water: float
    oil: float


def total_vessel_area(diameter_ft: float) -> float:
    """Full circular cross-section (ft²)."""
    return (math.pi * diameter_ft**2) / 4


def validate_level(diameter_ft: float, level_in: float, name: str) -> None:
    max_level = diameter_ft * INCHES_PER_FT
    if not (0.0 <= level_in <= max_level):
        raise ValidationError(
            f"{name} must be between 0 and {max_level:g} in for a {diameter_ft:g} ft vessel",
            field=name,
            value=level_in,
        )


def segment_area(
    diameter_ft: float,
    level_in: float,
    total_area: Optional[float] = None,
    *,
    name: str = "level",
) -> float:
    """Area (ft²) between the vessel bottom and a liquid level (in)."""
    validate_level(diameter_ft, level_in, name)
    if total_area is None:
        total_area = total_vessel_area(diameter_ft)

    ratio = (2 * level_in) / (diameter_ft * INCHES_PER_FT)
    angle = 2 * math.acos(1 - ratio)
    return (angle - math.sin(angle)) * total_area / (2 * math.pi)


def phase_areas(
    diameter_ft: float,
    low_low_water_in: float,
    interface_in: float,
    high_high_oil_in: float,
) -> PhaseAreas:
    total = total_vessel_area(diameter_ft)
    low = segment_area(diameter_ft, low_low_water_in, total, name="low_low_water_level")
    interface = segment_area(
        diameter_ft, interface_in, total, name="water_oil_interface_level"
    )
    high = segment_area(diameter_ft, high_high_oil_in, total, name="high_high_oil_level")

    water = interface - low
    oil = high - water - low
    return PhaseAreas(total=total, low_water=low, water=water, oil=oil)


def internal_volume_bbl(diameter_ft: float, length_ft: float) -> float:
    """Shell volume of a treater converted to barrels."""
    return math.pi * (diameter_ft / 2) ** 2 * length_ft * FT3_TO_BBL_FACTOR
