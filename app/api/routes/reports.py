"""Portfolio maintenance reports."""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, HTTPException, Query, status

from app import schemas
from app.api.dependencies import DbSession
from app.services import reporting

router = APIRouter(prefix="/reports", tags=["reports"])


@router.get("/schedule", response_model=List[schemas.ScheduleRow])
def maintenance_schedule(db: DbSession) -> List[schemas.ScheduleRow]:
    """Maintenance fee schedule for every patent with deadlines."""

    return reporting.maintenance_schedule(db)


@router.get("/revenue", response_model=List[schemas.RevenueRow])
def revenue(db: DbSession) -> List[schemas.RevenueRow]:
    """Expected maintenance fees by due year and jurisdiction."""

    return reporting.revenue_by_year_and_jurisdiction(db)


@router.get("/expiring", response_model=List[schemas.ExpiryRow])
def expiring(
    db: DbSession,
    start_year: int = Query(..., description="First expiry year to include."),
    end_year: int = Query(..., description="Last expiry year to include."),
) -> List[schemas.ExpiryRow]:
    """Patents whose term ends inside the inclusive year window."""

    try:
        return reporting.expiring_patents(db, start_year, end_year)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc


@router.get("/summary", response_model=schemas.PortfolioSummary)
def summary(db: DbSession) -> schemas.PortfolioSummary:
    """Row counts and deadline type distribution."""

    return reporting.portfolio_summary(db)
