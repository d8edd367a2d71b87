"""Read-only reporting queries over the normalized portfolio."""

from __future__ import annotations

from typing import Dict, List, Optional

from sqlalchemy import and_, func, literal_column, select
from sqlalchemy.orm import Session

from app import models, schemas
from app.core.config import get_settings

UNKNOWN_JURISDICTION = "Unknown"


def maintenance_schedule(db: Session) -> List[schemas.ScheduleRow]:
    """Deadlines per patent, by patent number and then chronologically."""

    stmt = (
        select(
            models.Patent.patent_number,
            models.Patent.title,
            models.Patent.grant_year,
            models.Deadline.deadline_type,
            models.Deadline.due_year,
        )
        .join(
            models.Deadline,
            and_(
                models.Deadline.asset_type == models.ASSET_TYPE_PATENT,
                models.Deadline.asset_id == models.Patent.id,
            ),
        )
        .order_by(models.Patent.patent_number.asc(), models.Deadline.due_year.asc())
    )
    return [schemas.ScheduleRow(**row._mapping) for row in db.execute(stmt)]


def revenue_by_year_and_jurisdiction(db: Session) -> List[schemas.RevenueRow]:
    """Expected maintenance fees summed per due year and jurisdiction.

    Patents without a jurisdiction, or with a blank name, fall under
    ``Unknown``.
    """

    # Literal SQL keeps the SELECT and GROUP BY expressions textually identical.
    label = func.coalesce(
        func.nullif(models.Jurisdiction.name, literal_column("''")),
        literal_column(f"'{UNKNOWN_JURISDICTION}'"),
    ).label("jurisdiction")
    total = func.sum(models.Cost.amount).label("total_amount")

    stmt = (
        select(models.Cost.due_year, label, total)
        .select_from(models.Cost)
        .join(
            models.Patent,
            and_(
                models.Cost.asset_type == models.ASSET_TYPE_PATENT,
                models.Cost.asset_id == models.Patent.id,
            ),
        )
        .outerjoin(
            models.Jurisdiction,
            models.Patent.jurisdiction_id == models.Jurisdiction.id,
        )
        .group_by(models.Cost.due_year, label)
        .order_by(models.Cost.due_year.asc(), total.desc())
    )
    return [schemas.RevenueRow(**row._mapping) for row in db.execute(stmt)]


def expiring_patents(
    db: Session,
    start_year: int,
    end_year: int,
    term_years: Optional[int] = None,
) -> List[schemas.ExpiryRow]:
    """Patents whose term, counted from the filing year, ends inside [start_year, end_year]."""

    if start_year > end_year:
        raise ValueError(f"start_year {start_year} is after end_year {end_year}")
    term = term_years if term_years is not None else get_settings().patent_term_years

    expiry = (models.Patent.filing_year + term).label("expiry_year")
    stmt = (
        select(
            models.Patent.patent_number,
            models.Patent.title,
            models.Patent.filing_year,
            expiry,
            models.Client.client_name,
            models.Jurisdiction.name.label("jurisdiction"),
        )
        .select_from(models.Patent)
        .outerjoin(models.Client, models.Patent.client_id == models.Client.id)
        .outerjoin(
            models.Jurisdiction,
            models.Patent.jurisdiction_id == models.Jurisdiction.id,
        )
        .where(
            models.Patent.filing_year.is_not(None),
            (models.Patent.filing_year + term).between(start_year, end_year),
        )
        .order_by(expiry, models.Patent.patent_number)
    )
    return [schemas.ExpiryRow(**row._mapping) for row in db.execute(stmt)]


def table_counts(db: Session) -> Dict[str, int]:
    counted = {
        "raw_records": models.RawRecord,
        "clients": models.Client,
        "jurisdictions": models.Jurisdiction,
        "patents": models.Patent,
        "deadlines": models.Deadline,
        "costs": models.Cost,
    }
    return {
        name: db.execute(select(func.count()).select_from(model)).scalar_one()
        for name, model in counted.items()
    }


def deadline_type_distribution(db: Session) -> List[schemas.DeadlineTypeCount]:
    stmt = (
        select(models.Deadline.deadline_type, func.count().label("count"))
        .group_by(models.Deadline.deadline_type)
        .order_by(models.Deadline.deadline_type)
    )
    return [schemas.DeadlineTypeCount(**row._mapping) for row in db.execute(stmt)]


def portfolio_summary(db: Session) -> schemas.PortfolioSummary:
    return schemas.PortfolioSummary(
        table_counts=table_counts(db),
        deadline_types=deadline_type_distribution(db),
    )
