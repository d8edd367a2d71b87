"""Derive maintenance deadlines and their costs from canonical patents."""

from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.models import ASSET_TYPE_PATENT, DEADLINE_STATUS_OPEN, Cost, Deadline, Patent
from app.services.normalization.fee_schedule import FeeSchedule

LOGGER = logging.getLogger(__name__)


class ObligationDeriver:
    """Generate one Deadline and one paired Cost per fee schedule offset."""

    def __init__(self, session: Session, schedule: Optional[FeeSchedule] = None) -> None:
        self.session = session
        self.schedule = schedule or FeeSchedule()

    def has_deadlines(self, patent_id: int) -> bool:
        stmt = (
            select(Deadline.id)
            .where(Deadline.asset_type == ASSET_TYPE_PATENT, Deadline.asset_id == patent_id)
            .limit(1)
        )
        return self.session.execute(stmt).scalar() is not None

    def derive(self, patent: Patent) -> Tuple[List[Deadline], List[Cost]]:
        """Create the patent's deadlines and costs.

        Returns empty lists when the patent has no grant year or already has
        deadlines.
        """

        if patent.grant_year is None:
            LOGGER.debug("Patent %s has no grant year; no deadlines derived", patent.patent_number)
            return [], []
        if self.has_deadlines(patent.id):
            return [], []

        deadlines: List[Deadline] = []
        costs: List[Cost] = []
        for offset in self.schedule.offsets:
            deadline = Deadline(
                asset_type=ASSET_TYPE_PATENT,
                asset_id=patent.id,
                deadline_type=self.schedule.label(offset),
                due_year=patent.grant_year + offset,
                status=DEADLINE_STATUS_OPEN,
            )
            cost = Cost(
                asset_type=ASSET_TYPE_PATENT,
                asset_id=patent.id,
                jurisdiction_id=patent.jurisdiction_id,
                fee_type=self.schedule.fee_type,
                amount=self.schedule.amount_for(offset),
                currency=self.schedule.currency,
                due_year=deadline.due_year,
                deadline=deadline,
            )
            deadlines.append(deadline)
            costs.append(cost)

        self.session.add_all(deadlines)
        self.session.add_all(costs)
        self.session.flush()
        return deadlines, costs
