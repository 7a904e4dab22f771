# ./thermotreat/db/models/__init__.py

from .base import Base, IntIdMixin, TimestampMixin
from .treatment_option import TreatmentOption
from .treatment import Treatment
from .evaluation import Evaluation, EvaluationCriterion

__all__ = [
    "Base", "IntIdMixin", "TimestampMixin",
    "TreatmentOption", "Treatment", "Evaluation", "EvaluationCriterion",
]
