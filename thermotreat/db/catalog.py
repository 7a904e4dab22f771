# ./thermotreat/db/catalog.py

from __future__ import annotations
from typing import List

from sqlalchemy import select
from sqlalchemy.orm import Session

from thermotreat.db.models import TreatmentOption


class SqlTreatmentOptionCatalog:
    """CatalogReader backed by the treatment_option table (SELECT only)."""

    def __init__(self, db: Session):
        self.db = db

    def find_candidate_treaters(
        self, min_heat_capacity: float, exclude_deleted: bool = True
    ) -> List[TreatmentOption]:
        stmt = select(TreatmentOption).where(
            TreatmentOption.min_heat_capacity >= min_heat_capacity
        )
        if exclude_deleted:
            stmt = stmt.where(TreatmentOption.deleted.is_(False))
        stmt = stmt.order_by(
            TreatmentOption.min_heat_capacity.asc(),
            TreatmentOption.diameter.asc(),
            TreatmentOption.id.asc(),
        )
        return list(self.db.scalars(stmt))
