# ./thermotreat/cli.py

from __future__ import annotations
import json
from typing import Optional

import typer

from thermotreat.schemas.common import SizingMethodName
from thermotreat.schemas.thermal import ThermalTreatmentInput
from thermotreat.schemas.treatment import CalculateTreatmentInput
from thermotreat.services.catalog import InMemoryCatalog
from thermotreat.services.thermal import calculate_thermal_results
from thermotreat.services.treatments import calculate_treatment_parameters
from thermotreat.data.treatment_options import standard_catalog

app = typer.Typer(help="ThermoTreat: API-12L thermal treater calculations")


def _load(json_path: str) -> dict:
    with open(json_path, "r", encoding="utf-8") as f:
        return json.load(f)


@app.command("thermal")
def thermal(json_path: str, pretty: bool = True):
    """Full thermal/hydraulic sizing of one vessel."""
    payload = ThermalTreatmentInput(**_load(json_path))
    out = calculate_thermal_results(payload)
    print(out.model_dump_json(indent=2 if pretty else None))


@app.command("size")
def size(
    json_path: str,
    method: Optional[SizingMethodName] = typer.Option(None, "--method", "-m"),
    pretty: bool = True,
):
    """Treatment sizing against the built-in API-12L catalog."""
    payload = CalculateTreatmentInput(**_load(json_path))
    out = calculate_treatment_parameters(
        payload, InMemoryCatalog(standard_catalog()), method=method
    )
    print(out.model_dump_json(indent=2 if pretty else None))


@app.command("init-db")
def init_db_cmd(seed: bool = typer.Option(True, help="Seed the catalog when empty")):
    """Create tables on settings.DB_URL."""
    from thermotreat.db.session import init_db

    init_db(seed=seed)
    typer.echo("database initialised")


@app.command("seed-catalog")
def seed_catalog(force: bool = typer.Option(False, help="Insert even if rows exist")):
    """Insert the API-12L standard treater catalog."""
    from thermotreat.db.models import Base
    from thermotreat.db.session import SessionLocal, engine, seed_treatment_options

    Base.metadata.create_all(bind=engine)
    with SessionLocal() as db:
        n = seed_treatment_options(db, force=force)
    typer.echo(f"seeded {n} treatment options")


if __name__ == "__main__":
    app()
