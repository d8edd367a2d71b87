"""ORM models for the normalized patent portfolio."""

from __future__ import annotations

from decimal import Decimal
from typing import Optional

from sqlalchemy import (
    CheckConstraint,
    ForeignKey,
    Integer,
    Numeric,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base

ASSET_TYPE_PATENT = "patent"
PATENT_STATUS_GRANTED = "Granted"
DEADLINE_STATUS_OPEN = "open"


class Client(Base):
    """Company or individual owning patents in the portfolio."""

    __tablename__ = "clients"

    id: Mapped[int] = mapped_column("client_id", Integer, primary_key=True, autoincrement=True)
    client_name: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    contact_email: Mapped[Optional[str]] = mapped_column(
        String(255), doc="Not provided by the USPTO dataset; always NULL when derived."
    )

    __table_args__ = (CheckConstraint("client_name <> ''", name="client_name_not_empty"),)


class Jurisdiction(Base):
    """Patent office or country code."""

    __tablename__ = "jurisdictions"

    id: Mapped[int] = mapped_column(
        "jurisdiction_id", Integer, primary_key=True, autoincrement=True
    )
    code: Mapped[str] = mapped_column(String(10), unique=True, nullable=False)
    # The source only carries codes, so the display name mirrors the code.
    name: Mapped[str] = mapped_column(String(100), nullable=False)

    __table_args__ = (CheckConstraint("code <> ''", name="jurisdiction_code_not_empty"),)


class Patent(Base):
    """Canonical patent, one row per patent number."""

    __tablename__ = "patents"

    id: Mapped[int] = mapped_column("patent_id", Integer, primary_key=True, autoincrement=True)
    client_id: Mapped[Optional[int]] = mapped_column(ForeignKey("clients.client_id"))
    jurisdiction_id: Mapped[Optional[int]] = mapped_column(
        ForeignKey("jurisdictions.jurisdiction_id")
    )
    patent_number: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)
    title: Mapped[Optional[str]] = mapped_column(String(500))
    filing_year: Mapped[Optional[int]] = mapped_column(Integer)
    grant_year: Mapped[Optional[int]] = mapped_column(Integer)
    status: Mapped[Optional[str]] = mapped_column(String(50), default=PATENT_STATUS_GRANTED)

    client: Mapped[Optional[Client]] = relationship("Client")
    jurisdiction: Mapped[Optional[Jurisdiction]] = relationship("Jurisdiction")


class Deadline(Base):
    """Maintenance-fee deadline for an asset, at year granularity."""

    __tablename__ = "deadlines"

    id: Mapped[int] = mapped_column("deadline_id", Integer, primary_key=True, autoincrement=True)
    asset_type: Mapped[str] = mapped_column(String(20), nullable=False)
    # References patents.patent_id when asset_type is 'patent'.
    asset_id: Mapped[int] = mapped_column(Integer, index=True, nullable=False)
    deadline_type: Mapped[str] = mapped_column(String(100), nullable=False)
    due_year: Mapped[int] = mapped_column(Integer, nullable=False)
    status: Mapped[Optional[str]] = mapped_column(String(30), default=DEADLINE_STATUS_OPEN)

    cost: Mapped[Optional[Cost]] = relationship("Cost", back_populates="deadline", uselist=False)

    __table_args__ = (
        UniqueConstraint("asset_type", "asset_id", "deadline_type", name="uq_deadline_asset_type"),
    )


class Cost(Base):
    """Monetary amount owed for a deadline."""

    __tablename__ = "costs"

    id: Mapped[int] = mapped_column("cost_id", Integer, primary_key=True, autoincrement=True)
    asset_type: Mapped[str] = mapped_column(String(20), nullable=False)
    asset_id: Mapped[int] = mapped_column(Integer, index=True, nullable=False)
    deadline_id: Mapped[Optional[int]] = mapped_column(
        ForeignKey("deadlines.deadline_id", ondelete="CASCADE"), unique=True
    )
    jurisdiction_id: Mapped[Optional[int]] = mapped_column(
        ForeignKey("jurisdictions.jurisdiction_id")
    )
    fee_type: Mapped[Optional[str]] = mapped_column(String(50))
    amount: Mapped[Optional[Decimal]] = mapped_column(Numeric(12, 2))
    currency: Mapped[Optional[str]] = mapped_column(String(10))
    due_year: Mapped[Optional[int]] = mapped_column(Integer)

    deadline: Mapped[Optional[Deadline]] = relationship("Deadline", back_populates="cost")
