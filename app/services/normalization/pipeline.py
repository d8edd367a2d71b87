"""Single-pass normalization of staged USPTO rows into the portfolio model."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from sqlalchemy import exists, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.config import get_settings
from app.models import ASSET_TYPE_PATENT, Deadline, Patent
from app.services.normalization.collapse import PatentCollapser, group_raw_records
from app.services.normalization.fee_schedule import FeeSchedule
from app.services.normalization.obligations import ObligationDeriver
from app.services.normalization.references import ReferenceResolver
from app.services.normalization.staging import load_raw_records

LOGGER = logging.getLogger(__name__)


@dataclass
class PipelineSummary:
    raw_records: int = 0
    skipped_missing_number: int = 0
    clients_created: int = 0
    jurisdictions_created: int = 0
    patents_created: int = 0
    patents_existing: int = 0
    patents_without_grant_year: int = 0
    deadlines_created: int = 0
    costs_created: int = 0


def run_pipeline(
    session: Session,
    fee_schedule: Optional[FeeSchedule] = None,
    commit: bool = True,
) -> PipelineSummary:
    """Resolve references, collapse patents and derive obligations.

    Each patent together with its deadlines and costs is written inside its
    own savepoint, so a patent is never visible with a partial set of
    obligations. Running again over unchanged staging data creates nothing.
    """

    if fee_schedule is None:
        fee_schedule = FeeSchedule.load(get_settings().fee_schedule_path)

    summary = PipelineSummary()
    records = load_raw_records(session)
    summary.raw_records = len(records)

    resolver = ReferenceResolver(session)
    resolver.resolve_all(records)

    groups = group_raw_records(records)
    summary.skipped_missing_number = summary.raw_records - sum(len(rows) for rows in groups.values())
    if summary.skipped_missing_number:
        LOGGER.info("Skipped %s raw records without a patent number", summary.skipped_missing_number)

    collapser = PatentCollapser(session, resolver)
    deriver = ObligationDeriver(session, fee_schedule)

    for patent_number, rows in groups.items():
        try:
            with session.begin_nested():
                patent = collapser.collapse(rows)
                if patent is None:
                    summary.patents_existing += 1
                    continue
                summary.patents_created += 1
                if patent.grant_year is None:
                    summary.patents_without_grant_year += 1
                deadlines, costs = deriver.derive(patent)
                summary.deadlines_created += len(deadlines)
                summary.costs_created += len(costs)
        except IntegrityError:
            LOGGER.warning("Patent %s was written concurrently; treating it as existing", patent_number)
            resolver.invalidate()
            collapser.mark_existing(patent_number)
            summary.patents_existing += 1

    # Patents stored by an earlier, interrupted run may still lack obligations.
    pending = session.execute(
        select(Patent)
        .where(
            Patent.grant_year.is_not(None),
            ~exists().where(
                Deadline.asset_type == ASSET_TYPE_PATENT, Deadline.asset_id == Patent.id
            ),
        )
        .order_by(Patent.patent_number)
    ).scalars().all()
    for patent in pending:
        with session.begin_nested():
            deadlines, costs = deriver.derive(patent)
        summary.deadlines_created += len(deadlines)
        summary.costs_created += len(costs)

    summary.clients_created = resolver.clients_created
    summary.jurisdictions_created = resolver.jurisdictions_created

    if commit:
        session.commit()
    LOGGER.info(
        "Pipeline finished: %s patents created, %s already present, %s deadlines, %s costs",
        summary.patents_created,
        summary.patents_existing,
        summary.deadlines_created,
        summary.costs_created,
    )
    return summary
