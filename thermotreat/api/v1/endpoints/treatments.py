# thermotreat/api/v1/endpoints/treatments.py
from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, status
from loguru import logger
from sqlalchemy import select
from sqlalchemy.orm import Session

from thermotreat.db.catalog import SqlTreatmentOptionCatalog
from thermotreat.db.models import Treatment
from thermotreat.db.session import get_db
from thermotreat.schemas.common import MessageOut, SortOrder
from thermotreat.schemas.treatment import (
    CalculateTreatmentInput,
    TreatmentCalculations,
    TreatmentCreate,
    TreatmentOut,
    TreatmentSort,
    TreatmentUpdate,
)
from thermotreat.services.treatments import calculate_treatment_parameters

router = APIRouter()

_INPUT_FIELDS = tuple(
    name for name in CalculateTreatmentInput.model_fields if name != "method"
)


# -----------------------------------------------------------------------------
# Helpers
# -----------------------------------------------------------------------------
def _get_active(db: Session, treatment_id: int) -> Treatment:
    row = db.get(Treatment, treatment_id)
    if row is None or row.deleted:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Treatment {treatment_id} not found",
        )
    return row


def _apply_calculations(row: Treatment, calc: TreatmentCalculations) -> None:
    row.method = calc.method.value
    row.calculated_oil_flow = calc.calculated_oil_flow
    row.calculated_water_flow = calc.calculated_water_flow
    row.oil_retention_volume = calc.oil_retention_volume
    row.water_retention_volume = calc.water_retention_volume
    row.required_heat = calc.required_heat_capacity
    row.heat_loss = calc.heat_loss
    row.total_heat = calc.total_heat
    row.selected_diameter = calc.recommended_diameter
    row.selected_length = calc.recommended_length
    row.design_pressure = calc.recommended_pressure
    row.selected_option_id = calc.selected_option_id


# -----------------------------------------------------------------------------
# Calculation (no persistence)
# -----------------------------------------------------------------------------
@router.post("/calculate", response_model=TreatmentCalculations)
def calculate_treatment(
    payload: CalculateTreatmentInput, db: Session = Depends(get_db)
) -> TreatmentCalculations:
    result = calculate_treatment_parameters(payload, SqlTreatmentOptionCatalog(db))
    logger.info(
        "Treatment sizing [{}]: heat={:.0f} BTU/hr -> {}ft x {}ft",
        result.method.value,
        result.required_heat_capacity,
        result.recommended_diameter,
        result.recommended_length,
    )
    return result


# -----------------------------------------------------------------------------
# CRUD
# -----------------------------------------------------------------------------
@router.post("", response_model=TreatmentOut, status_code=status.HTTP_201_CREATED)
def create_treatment(payload: TreatmentCreate, db: Session = Depends(get_db)):
    calc = calculate_treatment_parameters(payload, SqlTreatmentOptionCatalog(db))

    row = Treatment(
        name=payload.name,
        description=payload.description,
        type=payload.type.value,
        **{name: getattr(payload, name) for name in _INPUT_FIELDS},
    )
    _apply_calculations(row, calc)

    db.add(row)
    db.commit()
    db.refresh(row)
    logger.info("✅ Treatment created: id={} name={}", row.id, row.name)
    return row


@router.get("", response_model=List[TreatmentOut])
def list_treatments(
    sort: TreatmentSort = Query(default=TreatmentSort.ID),
    order: SortOrder = Query(default=SortOrder.ASC),
    limit: int = Query(default=100, ge=1, le=500),
    db: Session = Depends(get_db),
):
    column = getattr(Treatment, sort.value)
    stmt = (
        select(Treatment)
        .where(Treatment.deleted.is_(False))
        .order_by(column.desc() if order is SortOrder.DESC else column.asc())
        .limit(limit)
    )
    return list(db.scalars(stmt))


@router.get("/{treatment_id}", response_model=TreatmentOut)
def get_treatment(treatment_id: int, db: Session = Depends(get_db)):
    return _get_active(db, treatment_id)


@router.patch("/{treatment_id}", response_model=TreatmentOut)
def update_treatment(
    treatment_id: int, payload: TreatmentUpdate, db: Session = Depends(get_db)
):
    row = _get_active(db, treatment_id)
    # 설명용 필드만 수정 가능 (계산 입력 변경은 새 treatment 생성)
    changes = payload.model_dump(exclude_unset=True)
    for key, value in changes.items():
        if value is None and key != "description":
            continue
        setattr(row, key, getattr(value, "value", value))

    db.commit()
    db.refresh(row)
    return row


@router.delete("/{treatment_id}", response_model=MessageOut)
def delete_treatment(treatment_id: int, db: Session = Depends(get_db)):
    row = _get_active(db, treatment_id)
    row.deleted = True
    db.commit()
    logger.info("🗑️ Treatment soft-deleted: id={}", treatment_id)
    return MessageOut(message=f"Treatment {treatment_id} deleted")
