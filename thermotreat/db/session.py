# ./thermotreat/db/session.py

from __future__ import annotations
from typing import Generator
from pathlib import Path

from loguru import logger
from sqlalchemy import create_engine, select, func
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

from thermotreat.core.config import settings
from thermotreat.db.models import Base, TreatmentOption
from thermotreat.data.treatment_options import standard_treatment_options


def _ensure_sqlite_dir(url: str) -> None:
    """sqlite:///path/to/db.sqlite 형태에서 폴더 자동 생성"""
    if not url.startswith("sqlite"):
        return
    # sqlite:///./.data/thermotreat.db → "./.data/thermotreat.db"
    path_part = url.split("///", 1)[1] if "///" in url else ""
    path_part = path_part.split("?", 1)[0]
    if not path_part or path_part == ":memory:":
        return
    Path(path_part).parent.mkdir(parents=True, exist_ok=True)


def build_engine(url: str) -> Engine:
    if not url.startswith("sqlite"):
        return create_engine(url, future=True, pool_pre_ping=True)

    _ensure_sqlite_dir(url)
    in_memory = url in ("sqlite://", "sqlite:///:memory:")
    kwargs = {"connect_args": {"check_same_thread": False}, "future": True}
    if in_memory:
        # 인메모리 DB는 커넥션 하나를 공유해야 테이블이 유지됨
        kwargs["poolclass"] = StaticPool
    return create_engine(url, **kwargs)


engine = build_engine(settings.DB_URL)

SessionLocal = sessionmaker(
    bind=engine,
    autoflush=False,
    autocommit=False,
    future=True,
    expire_on_commit=False,
)


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def seed_treatment_options(db: Session, *, force: bool = False) -> int:
    """표준 카탈로그 삽입. 테이블이 비어 있을 때만 (force=True면 항상)."""
    existing = db.scalar(select(func.count()).select_from(TreatmentOption)) or 0
    if existing and not force:
        return 0

    rows = [TreatmentOption(**row) for row in standard_treatment_options()]
    db.add_all(rows)
    db.commit()
    logger.info("🌱 Seeded {} treatment options", len(rows))
    return len(rows)


def init_db(bind: Engine | None = None, *, seed: bool | None = None) -> None:
    bind = bind or engine
    Base.metadata.create_all(bind=bind)

    if seed is None:
        seed = settings.SEED_CATALOG_ON_STARTUP
    if not seed:
        return

    factory = sessionmaker(bind=bind, autoflush=False, future=True)
    with factory() as db:
        seed_treatment_options(db)
