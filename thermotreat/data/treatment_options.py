# thermotreat/data/treatment_options.py
# API-12L standard treater catalog
# (diameter ft, seam length ft, design pressure psig, min heat capacity BTU/hr)
from typing import Dict, List, Tuple

from thermotreat.services.catalog import CatalogOption

_VERTICAL: List[Tuple[float, float, int, int]] = [
    (3, 10, 50, 100000),
    (3, 12, 50, 100000),
    (3, 15, 50, 100000),
    (4, 10, 50, 250000),
    (4, 12, 50, 250000),
    (4, 20, 50, 250000),
    (6, 12, 50, 500000),
    (6, 20, 50, 500000),
    (8, 20, 40, 1000000),
    (10, 20, 40, 1250000),
]

_HORIZONTAL: List[Tuple[float, float, int, int]] = [
    (3, 10, 50, 150000),
    (3, 12, 50, 150000),
    (3, 15, 50, 150000),
    (4, 10, 50, 250000),
    (4, 12, 50, 250000),
    (6, 10, 50, 500000),
    (6, 15, 50, 500000),
    (6, 20, 50, 500000),
    (8, 15, 50, 750000),
    (8, 20, 50, 750000),
    (10, 20, 50, 2000000),
    (12, 30, 50, 3200000),
]


def standard_treatment_options() -> List[Dict]:
    """Seed rows, vertical first then horizontal."""
    rows: List[Dict] = []
    for kind, table in (("vertical", _VERTICAL), ("horizontal", _HORIZONTAL)):
        for diameter, length, pressure, heat in table:
            rows.append(
                {
                    "type": kind,
                    "diameter": float(diameter),
                    "length": float(length),
                    "design_pressure": pressure,
                    "min_heat_capacity": heat,
                    "notes": f"LSS {length}",
                }
            )
    return rows


def standard_catalog() -> List[CatalogOption]:
    return [CatalogOption(**row) for row in standard_treatment_options()]
