# thermotreat/core/exceptions.py
from __future__ import annotations

from typing import Any

__all__ = [
    "CalculationError",
    "ValidationError",
    "InvalidArgumentError",
    "EmptyInputError",
]


class CalculationError(ValueError):
    """계산 코어에서 발생하는 모든 입력 오류의 부모 클래스."""

    code = "CALCULATION_ERROR"

    def __init__(self, message: str, *, field: str | None = None, value: Any = None):
        super().__init__(message)
        self.message = message
        self.field = field
        self.value = value

    def to_detail(self) -> dict[str, Any] | None:
        if self.field is None:
            return None
        return {"field": self.field, "value": self.value}


class ValidationError(CalculationError):
    """Non-positive vessel/flow inputs or a liquid level outside the vessel."""

    code = "INVALID_INPUT"


class InvalidArgumentError(CalculationError):
    """Comparison mode that cannot be evaluated with the given arguments."""

    code = "INVALID_ARGUMENT"


class EmptyInputError(CalculationError):
    """No criteria were supplied to the evaluation scorer."""

    code = "EMPTY_INPUT"
