# thermotreat/services/evaluation.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple, Union

from loguru import logger

from thermotreat.core.exceptions import EmptyInputError, InvalidArgumentError
from thermotreat.schemas.common import ComparisonMode
from thermotreat.schemas.evaluation import (
    CalculationCriteria,
    CriterionIn,
    EvaluationCalculationResult,
)


@dataclass(frozen=True)
class ScoredCriterion:
    """CriterionIn plus the approval and margin derived for it."""

    source: CriterionIn
    approved: bool
    compliance_margin: float


class EvaluationScorer:
    # ==========================================================================
    # per-criterion
    # ==========================================================================
    def calculate_compliance_margin(self, actual: float, required: float) -> float:
        """actual / required * 100; required == 0 counts as full compliance."""
        if required == 0:
            return 100.0
        return actual / required * 100.0

    def is_criteria_approved(
        self,
        actual: float,
        required: float,
        mode: Union[ComparisonMode, str] = ComparisonMode.MIN,
        max_value: Optional[float] = None,
    ) -> bool:
        try:
            mode = ComparisonMode(mode)
        except ValueError:
            raise InvalidArgumentError(
                f"Invalid comparison operator: {mode}", field="mode", value=mode
            ) from None

        if mode is ComparisonMode.MIN:
            return actual >= required
        if mode is ComparisonMode.MAX:
            return actual <= required

        if max_value is None:
            raise InvalidArgumentError(
                "max_value is required for range comparison", field="max_value"
            )
        return required <= actual <= max_value

    # ==========================================================================
    # aggregation
    # ==========================================================================
    def calculate_evaluation_result(
        self, criteria: Sequence[CalculationCriteria]
    ) -> EvaluationCalculationResult:
        if not criteria:
            raise EmptyInputError("No criteria provided for calculation")

        criteria = [
            c if isinstance(c, CalculationCriteria) else CalculationCriteria.model_validate(c)
            for c in criteria
        ]
        processed = [
            (
                c.approved,
                c.compliance_margin,
                bool(c.is_critical) if c.is_critical is not None else False,
                c.weight if c.weight is not None else 1.0,
            )
            for c in criteria
        ]

        critical_failures = sum(
            1 for approved, _, critical, _ in processed if critical and not approved
        )
        average_compliance = sum(m for _, m, _, _ in processed) / len(processed)

        score: Optional[float] = None
        if any(w > 0 for _, _, _, w in processed):
            total_weight = sum(w for _, _, _, w in processed)
            weighted = sum(m * w for _, m, _, w in processed)
            score = weighted / total_weight if total_weight > 0 else 0.0

        return EvaluationCalculationResult(
            approved=critical_failures == 0,
            score=score,
            critical_failures=critical_failures,
            average_compliance=average_compliance,
        )

    def score_criteria(
        self, inputs: Iterable[CriterionIn]
    ) -> Tuple[List[ScoredCriterion], EvaluationCalculationResult]:
        """
        Raw measured criteria -> per-criterion approval/margin + aggregate.
        Range comparison applies when max_value is set and non-zero, otherwise min.
        """
        scored: List[ScoredCriterion] = []
        for c in inputs:
            mode = ComparisonMode.RANGE if c.max_value else ComparisonMode.MIN
            scored.append(
                ScoredCriterion(
                    source=c,
                    approved=self.is_criteria_approved(
                        c.actual_value, c.required_value, mode, c.max_value
                    ),
                    compliance_margin=self.calculate_compliance_margin(
                        c.actual_value, c.required_value
                    ),
                )
            )

        result = self.calculate_evaluation_result(
            [
                CalculationCriteria(
                    approved=s.approved,
                    compliance_margin=s.compliance_margin,
                    is_critical=s.source.is_critical,
                    weight=s.source.weight,
                )
                for s in scored
            ]
        )
        logger.debug(
            "evaluation scored: criteria={} approved={} critical_failures={}",
            len(scored),
            result.approved,
            result.critical_failures,
        )
        return scored, result


_scorer = EvaluationScorer()


def calculate_compliance_margin(actual: float, required: float) -> float:
    return _scorer.calculate_compliance_margin(actual, required)


def is_criteria_approved(
    actual: float,
    required: float,
    mode: Union[ComparisonMode, str] = ComparisonMode.MIN,
    max_value: Optional[float] = None,
) -> bool:
    return _scorer.is_criteria_approved(actual, required, mode, max_value)


def calculate_evaluation_result(
    criteria: Sequence[CalculationCriteria],
) -> EvaluationCalculationResult:
    return _scorer.calculate_evaluation_result(criteria)


def score_criteria(inputs: Iterable[CriterionIn]):
    return _scorer.score_criteria(inputs)
