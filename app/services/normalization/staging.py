"""Append-only access to the raw staging table."""

from __future__ import annotations

import logging
from typing import Iterable, List

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.models import RawRecord
from app.schemas.raw import RawRecordCreate

LOGGER = logging.getLogger(__name__)


def stage_raw_records(session: Session, rows: Iterable[RawRecordCreate]) -> int:
    """Insert rows into the staging table exactly as given; returns the row count."""

    staged = 0
    for row in rows:
        session.add(RawRecord(**row.staging_fields()))
        staged += 1
    session.flush()
    LOGGER.info("Staged %s raw records", staged)
    return staged


def load_raw_records(session: Session) -> List[RawRecord]:
    return list(session.execute(select(RawRecord).order_by(RawRecord.id)).scalars())
