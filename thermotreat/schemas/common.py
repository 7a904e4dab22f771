# thermotreat/schemas/common.py
from enum import Enum

from pydantic import BaseModel, ConfigDict


class AppBaseModel(BaseModel):
    """모든 모델의 부모 클래스: V2 설정 적용"""

    model_config = ConfigDict(
        populate_by_name=True,
        extra="ignore",
        from_attributes=True,
    )


class FrozenModel(AppBaseModel):
    """계산 입력/결과용 불변 값 객체."""

    model_config = ConfigDict(
        populate_by_name=True,
        extra="ignore",
        from_attributes=True,
        frozen=True,
    )


class TreaterType(str, Enum):
    VERTICAL = "vertical"
    HORIZONTAL = "horizontal"


class SizingMethodName(str, Enum):
    DETAILED = "detailed"
    SIMPLIFIED = "simplified"


class ComparisonMode(str, Enum):
    MIN = "min"
    MAX = "max"
    RANGE = "range"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


class MessageOut(AppBaseModel):
    message: str
