# thermotreat/api/v1/endpoints/evaluations.py
from __future__ import annotations

from datetime import datetime, timezone
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, status
from loguru import logger
from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from thermotreat.db.models import Evaluation, EvaluationCriterion, Treatment
from thermotreat.db.session import get_db
from thermotreat.schemas.common import MessageOut, SortOrder
from thermotreat.schemas.evaluation import (
    CalculationCriteria,
    CriterionIn,
    EvaluationCalculationResult,
    EvaluationCreate,
    EvaluationOut,
    EvaluationSort,
    EvaluationUpdate,
)
from thermotreat.services.evaluation import EvaluationScorer, ScoredCriterion

router = APIRouter()
scorer = EvaluationScorer()


# -----------------------------------------------------------------------------
# Helpers
# -----------------------------------------------------------------------------
def _get_evaluation(db: Session, evaluation_id: int) -> Evaluation:
    stmt = (
        select(Evaluation)
        .options(selectinload(Evaluation.criteria))
        .where(Evaluation.id == evaluation_id, Evaluation.deleted.is_(False))
    )
    row = db.scalars(stmt).first()
    if row is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Evaluation {evaluation_id} not found",
        )
    return row


def _apply_result(row: Evaluation, result: EvaluationCalculationResult) -> None:
    row.approved = result.approved
    row.score = result.score
    row.critical_failures = result.critical_failures
    row.average_compliance = result.average_compliance


def _criterion_rows(scored: List[ScoredCriterion]) -> List[EvaluationCriterion]:
    return [
        EvaluationCriterion(
            name=s.source.name,
            description=s.source.description,
            required_value=s.source.required_value,
            actual_value=s.source.actual_value,
            max_value=s.source.max_value,
            is_critical=s.source.is_critical,
            weight=s.source.weight,
            unit=s.source.unit,
            approved=s.approved,
            compliance_margin=s.compliance_margin,
        )
        for s in scored
    ]


# -----------------------------------------------------------------------------
# Scoring (no persistence)
# -----------------------------------------------------------------------------
@router.post("/calculate", response_model=EvaluationCalculationResult)
def calculate_evaluation(criteria: List[CalculationCriteria]):
    """빈 목록은 EmptyInputError → 400 EMPTY_INPUT."""
    return scorer.calculate_evaluation_result(criteria)


# -----------------------------------------------------------------------------
# CRUD
# -----------------------------------------------------------------------------
@router.post("", response_model=EvaluationOut, status_code=status.HTTP_201_CREATED)
def create_evaluation(payload: EvaluationCreate, db: Session = Depends(get_db)):
    if payload.treatment_id is not None:
        treatment = db.get(Treatment, payload.treatment_id)
        if treatment is None or treatment.deleted:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"Treatment {payload.treatment_id} not found",
            )

    scored, result = scorer.score_criteria(payload.criteria)

    row = Evaluation(
        evaluation_type=payload.evaluation_type.value,
        evaluation_date=payload.evaluation_date or datetime.now(timezone.utc),
        comments=payload.comments,
        treatment_id=payload.treatment_id,
    )
    _apply_result(row, result)
    row.criteria = _criterion_rows(scored)

    db.add(row)
    db.commit()
    logger.info(
        "✅ Evaluation created: id={} approved={} score={}",
        row.id,
        row.approved,
        row.score,
    )
    return _get_evaluation(db, row.id)


@router.get("", response_model=List[EvaluationOut])
def list_evaluations(
    treatment_id: int | None = Query(default=None),
    sort: EvaluationSort = Query(default=EvaluationSort.ID),
    order: SortOrder = Query(default=SortOrder.ASC),
    limit: int = Query(default=100, ge=1, le=500),
    db: Session = Depends(get_db),
):
    column = getattr(Evaluation, sort.value)
    stmt = (
        select(Evaluation)
        .options(selectinload(Evaluation.criteria))
        .where(Evaluation.deleted.is_(False))
    )
    if treatment_id is not None:
        stmt = stmt.where(Evaluation.treatment_id == treatment_id)
    stmt = stmt.order_by(
        column.desc() if order is SortOrder.DESC else column.asc()
    ).limit(limit)
    return list(db.scalars(stmt))


@router.get("/{evaluation_id}", response_model=EvaluationOut)
def get_evaluation(evaluation_id: int, db: Session = Depends(get_db)):
    return _get_evaluation(db, evaluation_id)


@router.patch("/{evaluation_id}", response_model=EvaluationOut)
def update_evaluation(
    evaluation_id: int, payload: EvaluationUpdate, db: Session = Depends(get_db)
):
    row = _get_evaluation(db, evaluation_id)
    changes = payload.model_dump(exclude_unset=True, exclude={"criteria"})
    for key, value in changes.items():
        if value is None and key != "comments":
            continue
        setattr(row, key, value)

    # 기준 교체 시 종합 결과가 수동 approved 값보다 우선
    if payload.criteria is not None:
        scored, result = scorer.score_criteria(payload.criteria)
        row.criteria = _criterion_rows(scored)
        _apply_result(row, result)

    db.commit()
    logger.info(
        "✏️ Evaluation updated: id={} approved={} criteria_replaced={}",
        row.id,
        row.approved,
        payload.criteria is not None,
    )
    return _get_evaluation(db, evaluation_id)


@router.post("/{evaluation_id}/recalculate", response_model=EvaluationOut)
def recalculate_evaluation(evaluation_id: int, db: Session = Depends(get_db)):
    """저장된 측정값으로 기준별 승인/마진과 종합 결과를 다시 계산."""
    row = _get_evaluation(db, evaluation_id)
    inputs = [
        CriterionIn(
            name=c.name,
            description=c.description or "",
            required_value=c.required_value,
            actual_value=c.actual_value,
            max_value=c.max_value,
            is_critical=c.is_critical,
            weight=c.weight,
            unit=c.unit,
        )
        for c in row.criteria
    ]
    scored, result = scorer.score_criteria(inputs)

    for criterion, s in zip(row.criteria, scored):
        criterion.approved = s.approved
        criterion.compliance_margin = s.compliance_margin
    _apply_result(row, result)

    db.commit()
    logger.info("🔁 Evaluation recalculated: id={} approved={}", row.id, row.approved)
    return _get_evaluation(db, evaluation_id)


@router.delete("/{evaluation_id}", response_model=MessageOut)
def delete_evaluation(evaluation_id: int, db: Session = Depends(get_db)):
    row = _get_evaluation(db, evaluation_id)
    row.deleted = True
    db.commit()
    logger.info("🗑️ Evaluation soft-deleted: id={}", evaluation_id)
    return MessageOut(message=f"Evaluation {evaluation_id} deleted")
