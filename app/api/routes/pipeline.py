"""Staging and pipeline execution endpoints."""

from __future__ import annotations

import logging
from dataclasses import asdict
from typing import List

from fastapi import APIRouter, status

from app import schemas
from app.api.dependencies import DbSession, FeeScheduleDep
from app.services.normalization import run_pipeline, stage_raw_records

router = APIRouter(prefix="/pipeline", tags=["pipeline"])

logger = logging.getLogger(__name__)


@router.post(
    "/raw-records",
    status_code=status.HTTP_201_CREATED,
    response_model=schemas.StageResponse,
)
def stage_records(payload: List[schemas.RawRecordCreate], db: DbSession) -> schemas.StageResponse:
    """Append rows to the staging table without any transformation."""

    staged = stage_raw_records(db, payload)
    db.commit()
    return schemas.StageResponse(staged=staged)


@router.post("/run", response_model=schemas.PipelineRunRead)
def run(db: DbSession, fee_schedule: FeeScheduleDep) -> schemas.PipelineRunRead:
    """Normalize staged rows and derive maintenance obligations."""

    summary = run_pipeline(db, fee_schedule)
    logger.info("Pipeline run via API: %s", asdict(summary))
    return schemas.PipelineRunRead(**asdict(summary))
