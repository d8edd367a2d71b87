"""Reference resolution: lookup-or-create semantics for clients and jurisdictions."""

from __future__ import annotations

import pytest
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from app.models import Client, Jurisdiction, RawRecord
from app.services.normalization import ReferenceResolver, clean_text


def _count(db: Session, model) -> int:
    return db.execute(select(func.count()).select_from(model)).scalar_one()


def test_clean_text_treats_blank_as_missing():
    assert clean_text(None) is None
    assert clean_text("") is None
    assert clean_text("   ") is None
    assert clean_text(" Acme Corp ") == "Acme Corp"


def test_resolve_client_is_idempotent(db: Session):
    resolver = ReferenceResolver(db)

    first = resolver.resolve_client("Acme Corp")
    second = resolver.resolve_client("Acme Corp")

    assert first == second
    assert _count(db, Client) == 1
    assert resolver.clients_created == 1
    client = db.get(Client, first)
    assert client.client_name == "Acme Corp"
    assert client.contact_email is None


def test_resolve_jurisdiction_uses_code_as_name(db: Session):
    resolver = ReferenceResolver(db)

    jurisdiction_id = resolver.resolve_jurisdiction("JP")

    jurisdiction = db.get(Jurisdiction, jurisdiction_id)
    assert jurisdiction.code == "JP"
    assert jurisdiction.name == "JP"


@pytest.mark.parametrize("value", [None, "", "  "])
def test_blank_values_are_not_resolved(db: Session, value):
    resolver = ReferenceResolver(db)

    assert resolver.resolve_client(value) is None
    assert resolver.resolve_jurisdiction(value) is None
    assert _count(db, Client) == 0
    assert _count(db, Jurisdiction) == 0


def test_existing_rows_are_reused_by_a_fresh_resolver(db: Session):
    db.add(Client(client_name="Globex", contact_email="ip@globex.example"))
    db.commit()

    resolver = ReferenceResolver(db)
    client_id = resolver.resolve_client("Globex")

    assert resolver.clients_created == 0
    assert db.get(Client, client_id).contact_email == "ip@globex.example"


def test_row_inserted_after_cache_load_is_found(db: Session):
    resolver = ReferenceResolver(db)
    resolver.resolve_client("Initech")
    db.add(Client(client_name="Umbrella"))
    db.flush()

    client_id = resolver.resolve_client("Umbrella")

    assert resolver.clients_created == 1
    assert db.get(Client, client_id).client_name == "Umbrella"
    assert _count(db, Client) == 2


def test_unique_violation_resolves_to_existing_row(db: Session, monkeypatch: pytest.MonkeyPatch):
    db.add(Jurisdiction(code="DE", name="DE"))
    db.commit()
    existing_id = db.execute(select(Jurisdiction.id)).scalar_one()

    resolver = ReferenceResolver(db)
    resolver._jurisdiction_ids = {}
    real_lookup = resolver._lookup
    calls = []

    def stale_lookup(model, column, value):
        calls.append(value)
        if len(calls) == 1:
            return None
        return real_lookup(model, column, value)

    monkeypatch.setattr(resolver, "_lookup", stale_lookup)

    resolved = resolver.resolve_jurisdiction("DE")

    assert resolved == existing_id
    assert resolver.jurisdictions_created == 0
    assert _count(db, Jurisdiction) == 1


def test_resolve_all_assigns_ids_in_sorted_order(db: Session):
    records = [
        RawRecord(patent_number="1", assignee="Zeta", country="US"),
        RawRecord(patent_number="2", assignee="Alpha", country=""),
        RawRecord(patent_number="3", assignee=None, country="CN"),
        RawRecord(patent_number="4", assignee="Alpha", country="US"),
    ]

    resolver = ReferenceResolver(db)
    resolver.resolve_all(records)

    clients = db.execute(select(Client.client_name).order_by(Client.id)).scalars().all()
    codes = db.execute(select(Jurisdiction.code).order_by(Jurisdiction.id)).scalars().all()
    assert clients == ["Alpha", "Zeta"]
    assert codes == ["CN", "US"]
    assert resolver.clients_created == 2
    assert resolver.jurisdictions_created == 2
