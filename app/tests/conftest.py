"""Shared fixtures: an in-memory SQLite store and an API client bound to it."""

from __future__ import annotations

import os

os.environ.setdefault("DATABASE_URL", "sqlite://")

from typing import Any, Callable, Dict, Iterator  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.engine import Engine  # noqa: E402
from sqlalchemy.orm import Session, sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from app import models  # noqa: E402,F401
from app.db.base import Base  # noqa: E402
from app.db.session import enable_sqlite_savepoints, get_db  # noqa: E402
from app.main import app  # noqa: E402
from app.schemas.raw import RawRecordCreate  # noqa: E402
from app.services.normalization import stage_raw_records  # noqa: E402


@pytest.fixture()
def engine() -> Iterator[Engine]:
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_savepoints(engine)
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(bind=engine, autoflush=False, autocommit=False, class_=Session)


@pytest.fixture()
def db(session_factory: sessionmaker) -> Iterator[Session]:
    with session_factory() as session:
        yield session


@pytest.fixture()
def stage(db: Session) -> Callable[..., None]:
    """Stage raw rows given as keyword dictionaries and commit them."""

    def _stage(*rows: Dict[str, Any]) -> None:
        stage_raw_records(db, [RawRecordCreate(**row) for row in rows])
        db.commit()

    return _stage


@pytest.fixture()
def client(session_factory: sessionmaker) -> Iterator[TestClient]:
    def override_get_db() -> Iterator[Session]:
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
