from __future__ import annotations

from typing import Dict, Union

from thermotreat.core.exceptions import InvalidArgumentError
from thermotreat.schemas.common import SizingMethodName
from thermotreat.services.sizing.base import (
    MINUTES_PER_DAY,
    FlowSplit,
    RetentionVolumes,
    SizingMethod,
    wind_constant,
)
from thermotreat.services.sizing.detailed import DetailedSizing
from thermotreat.services.sizing.simplified import SimplifiedSizing

SIZING_METHODS: Dict[SizingMethodName, SizingMethod] = {
    SizingMethodName.DETAILED: DetailedSizing(),
    SizingMethodName.SIMPLIFIED: SimplifiedSizing(),
}


def get_sizing_method(name: Union[SizingMethodName, str]) -> SizingMethod:
    try:
        return SIZING_METHODS[SizingMethodName(name)]
    except ValueError:
        raise InvalidArgumentError(
            f"Unknown sizing method: {name}", field="method", value=name
        ) from None


__all__ = [
    "MINUTES_PER_DAY",
    "FlowSplit",
    "RetentionVolumes",
    "SizingMethod",
    "DetailedSizing",
    "SimplifiedSizing",
    "SIZING_METHODS",
    "get_sizing_method",
    "wind_constant",
]
