"""Collapse duplicated staging rows into one canonical patent per number."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence, Set, TypeVar

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.models import PATENT_STATUS_GRANTED, Patent, RawRecord
from app.services.normalization.references import ReferenceResolver, clean_text

LOGGER = logging.getLogger(__name__)

T = TypeVar("T", str, int)


@dataclass(frozen=True)
class CollapsedPatent:
    """Field values chosen for a patent number across all of its rows."""

    patent_number: str
    title: Optional[str]
    filing_year: Optional[int]
    grant_year: Optional[int]
    assignee: Optional[str]
    country: Optional[str]


def pick_max(values: Iterable[Optional[T]]) -> Optional[T]:
    """Largest non-null value under its natural order, or None.

    Strings compare by code point and years numerically, so the choice does
    not depend on row order.
    """

    candidates = [value for value in values if value is not None]
    if not candidates:
        return None
    return max(candidates)


def group_raw_records(records: Iterable[RawRecord]) -> Dict[str, List[RawRecord]]:
    """Group rows by patent number, sorted by number; unkeyed rows are dropped."""

    groups: Dict[str, List[RawRecord]] = {}
    for record in records:
        number = clean_text(record.patent_number)
        if number is None:
            LOGGER.debug("Skipping raw record %s without patent number", record.id)
            continue
        groups.setdefault(number, []).append(record)
    return {number: groups[number] for number in sorted(groups)}


def collapse_group(records: Sequence[RawRecord]) -> CollapsedPatent:
    if not records:
        raise ValueError("Cannot collapse an empty group of raw records")

    numbers = {clean_text(record.patent_number) for record in records}
    if len(numbers) != 1 or None in numbers:
        raise ValueError(f"Raw records do not share one patent number: {sorted(map(str, numbers))}")

    return CollapsedPatent(
        patent_number=numbers.pop(),
        title=pick_max(clean_text(record.first_wipo_field_title) for record in records),
        filing_year=pick_max(record.application_year for record in records),
        grant_year=pick_max(record.grant_year for record in records),
        assignee=pick_max(clean_text(record.assignee) for record in records),
        country=pick_max(clean_text(record.country) for record in records),
    )


class PatentCollapser:
    """Persist one Patent per patent number; existing numbers are left alone."""

    def __init__(self, session: Session, resolver: ReferenceResolver) -> None:
        self.session = session
        self.resolver = resolver
        self._existing: Optional[Set[str]] = None

    def exists(self, patent_number: str) -> bool:
        if self._existing is None:
            self._existing = set(self.session.execute(select(Patent.patent_number)).scalars())
        return patent_number in self._existing

    def collapse(self, records: Sequence[RawRecord]) -> Optional[Patent]:
        """Create the canonical patent for a group, or None if it is already stored."""

        collapsed = collapse_group(records)
        if self.exists(collapsed.patent_number):
            LOGGER.debug("Patent %s already present; skipping", collapsed.patent_number)
            return None

        patent = Patent(
            patent_number=collapsed.patent_number,
            title=collapsed.title,
            filing_year=collapsed.filing_year,
            grant_year=collapsed.grant_year,
            status=PATENT_STATUS_GRANTED,
            client_id=self.resolver.resolve_client(collapsed.assignee),
            jurisdiction_id=self.resolver.resolve_jurisdiction(collapsed.country),
        )
        self.session.add(patent)
        self.session.flush()
        self._existing.add(collapsed.patent_number)
        return patent

    def mark_existing(self, patent_number: str) -> None:
        if self._existing is not None:
            self._existing.add(patent_number)
