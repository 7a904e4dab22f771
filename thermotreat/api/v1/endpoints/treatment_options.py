# thermotreat/api/v1/endpoints/treatment_options.py
from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, status
from loguru import logger
from sqlalchemy import select
from sqlalchemy.orm import Session

from thermotreat.db.catalog import SqlTreatmentOptionCatalog
from thermotreat.db.models import TreatmentOption
from thermotreat.db.session import get_db
from thermotreat.schemas.common import MessageOut, SortOrder, TreaterType
from thermotreat.schemas.treatment_option import (
    TreatmentOptionOut,
    TreatmentOptionSort,
    TreatmentOptionSpec,
    TreatmentOptionUpdate,
)

router = APIRouter()


def _get_active(db: Session, option_id: int) -> TreatmentOption:
    row = db.get(TreatmentOption, option_id)
    if row is None or row.deleted:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Treatment option {option_id} not found",
        )
    return row


@router.get("", response_model=List[TreatmentOptionOut])
def list_options(
    type: TreaterType | None = Query(default=None),
    sort: TreatmentOptionSort = Query(default=TreatmentOptionSort.MIN_HEAT_CAPACITY),
    order: SortOrder = Query(default=SortOrder.ASC),
    limit: int = Query(default=100, ge=1, le=500),
    db: Session = Depends(get_db),
):
    column = getattr(TreatmentOption, sort.value)
    stmt = select(TreatmentOption).where(TreatmentOption.deleted.is_(False))
    if type is not None:
        stmt = stmt.where(TreatmentOption.type == type.value)
    stmt = stmt.order_by(
        column.desc() if order is SortOrder.DESC else column.asc(),
        TreatmentOption.id.asc(),
    ).limit(limit)
    return list(db.scalars(stmt))


@router.get("/candidates", response_model=List[TreatmentOptionOut])
def list_candidates(
    heat: float = Query(..., ge=0, description="Required burner duty (BTU/hr)"),
    db: Session = Depends(get_db),
):
    """min_heat_capacity >= heat, ordered by (min_heat_capacity, diameter)."""
    return SqlTreatmentOptionCatalog(db).find_candidate_treaters(heat)


@router.get("/{option_id}", response_model=TreatmentOptionOut)
def get_option(option_id: int, db: Session = Depends(get_db)):
    return _get_active(db, option_id)


@router.post("", response_model=TreatmentOptionOut, status_code=status.HTTP_201_CREATED)
def create_option(payload: TreatmentOptionSpec, db: Session = Depends(get_db)):
    data = payload.model_dump()
    data["type"] = payload.type.value
    row = TreatmentOption(**data)
    db.add(row)
    db.commit()
    db.refresh(row)
    logger.info("✅ Treatment option created: id={} ({} {}ft)", row.id, row.type, row.diameter)
    return row


@router.patch("/{option_id}", response_model=TreatmentOptionOut)
def update_option(
    option_id: int, payload: TreatmentOptionUpdate, db: Session = Depends(get_db)
):
    row = _get_active(db, option_id)
    for key, value in payload.model_dump(exclude_unset=True).items():
        if value is None and key != "notes":
            continue
        setattr(row, key, getattr(value, "value", value))
    db.commit()
    db.refresh(row)
    return row


@router.delete("/{option_id}", response_model=MessageOut)
def delete_option(option_id: int, db: Session = Depends(get_db)):
    row = _get_active(db, option_id)
    row.deleted = True
    db.commit()
    logger.info("🗑️ Treatment option soft-deleted: id={}", option_id)
    return MessageOut(message=f"Treatment option {option_id} deleted")
