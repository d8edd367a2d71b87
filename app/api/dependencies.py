"""Shared API dependencies for FastAPI routes."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.orm import Session

from app.core.config import get_settings
from app.db.session import get_db
from app.services.normalization import FeeSchedule


def get_fee_schedule() -> FeeSchedule:
    """Fee schedule from the configured JSON override, or the built-in defaults."""

    return FeeSchedule.load(get_settings().fee_schedule_path)


DbSession = Annotated[Session, Depends(get_db)]
FeeScheduleDep = Annotated[FeeSchedule, Depends(get_fee_schedule)]
