# tests/test_catalog.py
from __future__ import annotations

import pytest

from thermotreat.data.treatment_options import standard_catalog, standard_treatment_options
from thermotreat.db.catalog import SqlTreatmentOptionCatalog
from thermotreat.db.models import TreatmentOption
from thermotreat.schemas.common import SizingMethodName
from thermotreat.schemas.treatment import CalculateTreatmentInput
from thermotreat.services.catalog import (
    CatalogOption,
    InMemoryCatalog,
    TreaterCatalogMatcher,
    treater_label,
)
from thermotreat.services.geometry import internal_volume_bbl
from thermotreat.services.treatments import calculate_treatment_parameters


def _opt(kind, d, l, heat, id=None, deleted=False):
    return CatalogOption(
        type=kind, diameter=d, length=l, design_pressure=50,
        min_heat_capacity=heat, id=id, deleted=deleted,
    )


def _no_loss(d, l):
    return 0.0


# -----------------------------------------------------------------------------
# catalog readers
# -----------------------------------------------------------------------------
def test_standard_catalog_contents():
    rows = standard_treatment_options()
    assert len(rows) == 22
    assert sum(1 for r in rows if r["type"] == "vertical") == 10
    assert rows[0]["notes"] == "LSS 10"
    assert max(r["min_heat_capacity"] for r in rows) == 3200000


def test_in_memory_catalog_ordering_and_filters():
    catalog = InMemoryCatalog(
        [
            _opt("horizontal", 8, 20, 750000, id=1),
            _opt("vertical", 6, 12, 500000, id=2),
            _opt("horizontal", 4, 10, 500000, id=3),
            _opt("horizontal", 3, 10, 150000, id=4),
            _opt("vertical", 10, 20, 1250000, id=5, deleted=True),
        ]
    )
    rows = catalog.find_candidate_treaters(400000)
    assert [o.id for o in rows] == [3, 2, 1]

    with_deleted = catalog.find_candidate_treaters(400000, exclude_deleted=False)
    assert [o.id for o in with_deleted] == [3, 2, 1, 5]


def test_sql_catalog_ordering(db_session):
    rows = SqlTreatmentOptionCatalog(db_session).find_candidate_treaters(262210)
    keys = [(r.min_heat_capacity, r.diameter) for r in rows]
    assert keys == sorted(keys)
    assert len(rows) == 11
    assert all(r.min_heat_capacity >= 262210 for r in rows)


def test_sql_catalog_excludes_deleted(db_session):
    top = db_session.query(TreatmentOption).filter_by(min_heat_capacity=3200000).one()
    top.deleted = True
    db_session.commit()

    catalog = SqlTreatmentOptionCatalog(db_session)
    assert catalog.find_candidate_treaters(3000000) == []
    assert len(catalog.find_candidate_treaters(3000000, exclude_deleted=False)) == 1


# -----------------------------------------------------------------------------
# matcher
# -----------------------------------------------------------------------------
def test_matcher_filters_by_internal_volume():
    small = _opt("horizontal", 3, 10, 500000, id=1)
    big = _opt("horizontal", 6, 10, 500000, id=2)
    required = internal_volume_bbl(3, 10) + 1

    result = TreaterCatalogMatcher(InMemoryCatalog([small, big])).match(
        100000, [required, 1.0], _no_loss
    )
    assert result.found
    assert result.best.option.id == 2
    assert [c.option.id for c in result.feasible] == [2]


def test_matcher_picks_minimum_total_heat():
    options = [
        _opt("vertical", 6, 20, 500000, id=1),
        _opt("horizontal", 6, 10, 500000, id=2),
        _opt("horizontal", 8, 20, 750000, id=3),
    ]
    result = TreaterCatalogMatcher(InMemoryCatalog(options)).match(
        300000, [10.0], lambda d, l: 100 * d * l
    )
    assert result.best.option.id == 2
    assert result.best.heat_loss == pytest.approx(6000)
    assert result.best.total_heat == pytest.approx(306000)


def test_matcher_tie_keeps_first_in_catalog_order():
    a = _opt("horizontal", 4, 10, 250000, id=1)
    b = _opt("horizontal", 5, 8, 250000, id=2)
    # 입력 순서와 무관하게 (heat, diameter) 순 첫 후보 선택
    for options in ([a, b], [b, a]):
        matcher = TreaterCatalogMatcher(InMemoryCatalog(options))
        picks = {matcher.match(200000, [1.0], lambda d, l: d * l).best.option.id for _ in range(3)}
        assert picks == {1}


def test_matcher_no_feasible_candidate():
    result = TreaterCatalogMatcher(InMemoryCatalog([_opt("vertical", 3, 10, 100000)])).match(
        500000, [1.0], _no_loss
    )
    assert not result.found
    assert result.best is None
    assert result.feasible == []


def test_treater_label():
    assert treater_label(_opt("horizontal", 12, 30, 3200000)) == (
        "Treater horizontal 12ft - LSS 30 - 3200000 BTU/hr"
    )
    assert treater_label(_opt("vertical", 4.5, 10, 250000)) == (
        "Treater vertical 4.5ft - LSS 10 - 250000 BTU/hr"
    )


# -----------------------------------------------------------------------------
# calculate_treatment_parameters
# -----------------------------------------------------------------------------
def test_treatment_parameters_detailed(sizing_payload):
    data = CalculateTreatmentInput(**sizing_payload)
    r = calculate_treatment_parameters(data, InMemoryCatalog(standard_catalog()))

    required = 500 * (6.44 + 8.14 * 0.2) * 65
    assert r.method is SizingMethodName.DETAILED
    assert r.calculated_oil_flow == pytest.approx(400)
    assert r.calculated_water_flow == pytest.approx(100)
    assert r.required_heat_capacity == pytest.approx(required)
    assert (r.recommended_diameter, r.recommended_length, r.recommended_pressure) == (6, 10, 50)
    assert r.heat_loss == pytest.approx(13.2 * 6 * 10 * 110)
    assert r.total_heat == pytest.approx(required + r.heat_loss)
    assert r.required_retention_volume == pytest.approx(400 * 60 / 1440)
    assert r.estimated_residence_time == pytest.approx(48.0)
    assert len(r.recommended_treaters) == 11
    assert r.recommended_treaters[0] == "Treater vertical 6ft - LSS 12 - 500000 BTU/hr"


def test_treatment_parameters_method_selection(sizing_payload):
    catalog = InMemoryCatalog(standard_catalog())
    data = CalculateTreatmentInput(**{**sizing_payload, "method": "simplified"})

    from_request = calculate_treatment_parameters(data, catalog)
    assert from_request.method is SizingMethodName.SIMPLIFIED

    overridden = calculate_treatment_parameters(data, catalog, method="detailed")
    assert overridden.method is SizingMethodName.DETAILED
    assert overridden.required_heat_capacity != pytest.approx(
        from_request.required_heat_capacity
    )


def test_treatment_parameters_without_candidate(sizing_payload):
    data = CalculateTreatmentInput(**sizing_payload)
    r = calculate_treatment_parameters(data, InMemoryCatalog([]))

    assert r.recommended_treaters == []
    assert r.selected_option_id is None
    assert (r.recommended_diameter, r.recommended_length, r.recommended_pressure) == (0, 0, 0)
    assert r.heat_loss == 0
    assert r.total_heat == pytest.approx(r.required_heat_capacity)
