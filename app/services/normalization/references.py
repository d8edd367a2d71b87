"""Lookup-or-create resolution of clients and jurisdictions."""

from __future__ import annotations

import logging
from typing import Dict, Iterable, Optional, Tuple, Type, Union

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import InstrumentedAttribute, Session

from app.models import Client, Jurisdiction, RawRecord

LOGGER = logging.getLogger(__name__)

ReferenceModel = Union[Type[Client], Type[Jurisdiction]]


def clean_text(value: Optional[str]) -> Optional[str]:
    """Trim whitespace; blank strings become None."""

    if value is None:
        return None
    text = str(value).strip()
    return text or None


class ReferenceResolver:
    """Map natural keys (client name, jurisdiction code) to surrogate ids.

    The mapping is loaded from the store on first use and extended as new
    values are inserted. Insertion happens inside a savepoint so a uniqueness
    violation raised by another writer is absorbed and resolved to the row
    that writer created.
    """

    def __init__(self, session: Session) -> None:
        self.session = session
        self._client_ids: Optional[Dict[str, int]] = None
        self._jurisdiction_ids: Optional[Dict[str, int]] = None
        self.clients_created = 0
        self.jurisdictions_created = 0

    def resolve_client(self, name: Optional[str]) -> Optional[int]:
        key = clean_text(name)
        if key is None:
            return None
        if self._client_ids is None:
            self._client_ids = self._load(Client, Client.client_name)
        if key in self._client_ids:
            return self._client_ids[key]

        client_id, created = self._insert_if_absent(
            Client, Client.client_name, key, client_name=key, contact_email=None
        )
        self._client_ids[key] = client_id
        if created:
            self.clients_created += 1
        return client_id

    def resolve_jurisdiction(self, code: Optional[str]) -> Optional[int]:
        key = clean_text(code)
        if key is None:
            return None
        if self._jurisdiction_ids is None:
            self._jurisdiction_ids = self._load(Jurisdiction, Jurisdiction.code)
        if key in self._jurisdiction_ids:
            return self._jurisdiction_ids[key]

        jurisdiction_id, created = self._insert_if_absent(
            Jurisdiction, Jurisdiction.code, key, code=key, name=key
        )
        self._jurisdiction_ids[key] = jurisdiction_id
        if created:
            self.jurisdictions_created += 1
        return jurisdiction_id

    def resolve_all(self, records: Iterable[RawRecord]) -> None:
        """Resolve every distinct assignee and country of the staging rows.

        Values are resolved in sorted order so surrogate ids do not depend on
        the order rows were staged in.
        """

        assignees = set()
        countries = set()
        for record in records:
            assignee = clean_text(record.assignee)
            country = clean_text(record.country)
            if assignee:
                assignees.add(assignee)
            if country:
                countries.add(country)

        for code in sorted(countries):
            self.resolve_jurisdiction(code)
        for name in sorted(assignees):
            self.resolve_client(name)
        LOGGER.info(
            "Resolved %s jurisdictions (%s new) and %s clients (%s new)",
            len(countries),
            self.jurisdictions_created,
            len(assignees),
            self.clients_created,
        )

    def invalidate(self) -> None:
        """Drop cached ids so they are reloaded from the store."""

        self._client_ids = None
        self._jurisdiction_ids = None

    def _load(self, model: ReferenceModel, column: InstrumentedAttribute) -> Dict[str, int]:
        rows = self.session.execute(select(column, model.id)).all()
        return {key: ident for key, ident in rows}

    def _lookup(
        self, model: ReferenceModel, column: InstrumentedAttribute, value: str
    ) -> Optional[int]:
        return self.session.execute(select(model.id).where(column == value)).scalar_one_or_none()

    def _insert_if_absent(
        self, model: ReferenceModel, column: InstrumentedAttribute, value: str, **fields: object
    ) -> Tuple[int, bool]:
        existing = self._lookup(model, column, value)
        if existing is not None:
            return existing, False

        try:
            with self.session.begin_nested():
                entity = model(**fields)
                self.session.add(entity)
                self.session.flush()
        except IntegrityError:
            LOGGER.warning(
                "%s %r was created concurrently; reusing the stored row", model.__name__, value
            )
            existing = self._lookup(model, column, value)
            if existing is None:
                raise
            return existing, False
        return entity.id, True
