# tests/test_evaluation.py
from __future__ import annotations

import pytest

from thermotreat.core.exceptions import EmptyInputError, InvalidArgumentError
from thermotreat.schemas.evaluation import CalculationCriteria, CriterionIn
from thermotreat.services.evaluation import (
    EvaluationScorer,
    calculate_compliance_margin,
    calculate_evaluation_result,
    is_criteria_approved,
    score_criteria,
)


def crit(approved, margin, **kw) -> CalculationCriteria:
    return CalculationCriteria(approved=approved, compliance_margin=margin, **kw)


# -----------------------------------------------------------------------------
# compliance margin / approval
# -----------------------------------------------------------------------------
def test_compliance_margin():
    assert calculate_compliance_margin(60, 60) == 100
    assert calculate_compliance_margin(62.5, 60) == pytest.approx(104.1667, abs=1e-4)
    for actual in (-5, 0, 12.3, 1e9):
        assert calculate_compliance_margin(actual, 0) == 100


def test_is_criteria_approved_modes():
    assert is_criteria_approved(60, 60, "min") is True
    assert is_criteria_approved(59.9, 60, "min") is False
    assert is_criteria_approved(60, 60) is True
    assert is_criteria_approved(40, 60, "max") is True
    assert is_criteria_approved(61, 60, "max") is False
    assert is_criteria_approved(70, 60, "range", 80) is True
    assert is_criteria_approved(81, 60, "range", 80) is False


def test_range_without_max_value_raises():
    with pytest.raises(InvalidArgumentError):
        is_criteria_approved(100, 60, "range")


def test_unknown_mode_raises():
    with pytest.raises(InvalidArgumentError) as ei:
        EvaluationScorer().is_criteria_approved(1, 1, "between")
    assert ei.value.code == "INVALID_ARGUMENT"


# -----------------------------------------------------------------------------
# aggregation
# -----------------------------------------------------------------------------
def test_empty_criteria_raises():
    with pytest.raises(EmptyInputError) as ei:
        calculate_evaluation_result([])
    assert ei.value.code == "EMPTY_INPUT"


def test_single_critical_failure():
    r = calculate_evaluation_result([crit(False, 50, is_critical=True, weight=30)])
    assert r.approved is False
    assert r.critical_failures == 1
    assert r.average_compliance == 50
    assert r.score == 50


def test_defaults_apply_when_missing():
    r = calculate_evaluation_result([crit(False, 80), crit(True, 120)])
    # is_critical 기본값 False → 승인, weight 기본값 1 → 단순 평균
    assert r.approved is True
    assert r.critical_failures == 0
    assert r.average_compliance == pytest.approx(100)
    assert r.score == pytest.approx(100)


def test_weighted_score():
    r = calculate_evaluation_result(
        [crit(True, 100, weight=3), crit(True, 60, weight=1), crit(False, 90, is_critical=False)]
    )
    assert r.score == pytest.approx((300 + 60 + 90) / 5)
    assert r.average_compliance == pytest.approx(250 / 3)


def test_score_absent_when_all_weights_zero():
    r = calculate_evaluation_result([crit(True, 100, weight=0), crit(True, 80, weight=0)])
    assert r.score is None
    assert r.average_compliance == 90


def test_result_is_order_independent():
    items = [
        crit(True, 110, weight=5, is_critical=True),
        crit(False, 70, weight=2),
        crit(False, 40, weight=1, is_critical=True),
    ]
    forward = calculate_evaluation_result(items)
    backward = calculate_evaluation_result(list(reversed(items)))
    assert forward.approved == backward.approved is False
    assert forward.critical_failures == backward.critical_failures == 1
    assert forward.score == pytest.approx(backward.score)
    assert forward.average_compliance == pytest.approx(backward.average_compliance)


def test_accepts_camel_case_dicts():
    r = calculate_evaluation_result(
        [{"approved": False, "complianceMargin": 50, "isCritical": True, "weight": 30}]
    )
    assert r.critical_failures == 1


# -----------------------------------------------------------------------------
# score_criteria
# -----------------------------------------------------------------------------
def test_score_criteria_derives_approval_and_margin():
    scored, result = score_criteria(
        [
            CriterionIn(name="Oil retention", required_value=60, actual_value=62.5, is_critical=True, weight=30),
            CriterionIn(name="Water cut", required_value=0, actual_value=0.4, max_value=1.0, weight=10),
            CriterionIn(name="Outlet BS&W", required_value=1.0, actual_value=0.5),
        ]
    )
    assert [s.approved for s in scored] == [True, True, False]
    assert scored[0].compliance_margin == pytest.approx(62.5 / 60 * 100)
    assert scored[1].compliance_margin == 100
    assert scored[2].compliance_margin == pytest.approx(50)

    assert result.approved is True
    assert result.critical_failures == 0
    assert result.score == pytest.approx(
        (62.5 / 60 * 100 * 30 + 100 * 10 + 50 * 1) / 41
    )


def test_score_criteria_critical_range_failure():
    _, result = score_criteria(
        [CriterionIn(name="Temp", required_value=120, actual_value=150, max_value=140, is_critical=True)]
    )
    assert result.approved is False
    assert result.critical_failures == 1


def test_score_criteria_zero_max_value_compares_as_min():
    scored, result = score_criteria(
        [CriterionIn(name="Pressure", required_value=10, actual_value=20, max_value=0, is_critical=True)]
    )
    assert scored[0].approved is True
    assert result.critical_failures == 0
