# tests/conftest.py
from __future__ import annotations

import os
import tempfile

# 앱 import 전에 테스트 환경 고정 (인메모리 DB, 임시 로그 디렉터리)
os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("DB_URL", "sqlite://")
os.environ.setdefault("LOG_DIR", tempfile.mkdtemp(prefix="thermotreat-logs-"))
os.environ.setdefault("LOG_LEVEL", "WARNING")

from typing import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from thermotreat.db.session import get_db, init_db
from thermotreat.main import app


@pytest.fixture()
def engine():
    eng = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        future=True,
    )
    init_db(eng, seed=True)
    yield eng
    eng.dispose()


@pytest.fixture()
def db_session(engine) -> Generator[Session, None, None]:
    factory = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False, future=True)
    with factory() as session:
        yield session


@pytest.fixture()
def override_db(engine):
    factory = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False, future=True)

    def _get_db():
        db = factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = _get_db
    yield
    app.dependency_overrides.pop(get_db, None)


@pytest.fixture()
def client(override_db) -> Generator[TestClient, None, None]:
    with TestClient(app) as c:
        yield c


# -----------------------------------------------------------------------------
# shared payloads
# -----------------------------------------------------------------------------
@pytest.fixture()
def thermal_payload() -> dict:
    return {
        "diameter": 4,
        "length": 10,
        "totalFlow": 500,
        "waterFraction": 20,
        "apiGravity": 18,
        "inletTemperature": 75,
        "ambientTemperature": 30,
        "operatingPressure": 50,
    }


@pytest.fixture()
def sizing_payload() -> dict:
    return {
        "totalFlow": 500,
        "waterFraction": 20,
        "apiGravity": 18,
        "inletTemperature": 75,
        "targetTemperature": 140,
        "ambientTemperature": 30,
        "oilRetentionTime": 60,
        "waterRetentionTime": 30,
        "windSpeed": 15,
    }
