"""Staging table holding USPTO rows exactly as ingested."""

from __future__ import annotations

from typing import Optional

from sqlalchemy import JSON, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base


class RawRecord(Base):
    """One wide source observation; a patent number may repeat across rows."""

    __tablename__ = "raw_uspto_records"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    patent_number: Mapped[Optional[str]] = mapped_column(String(20), index=True)
    grant_year: Mapped[Optional[int]] = mapped_column(Integer)
    application_number: Mapped[Optional[str]] = mapped_column(String(20))
    application_year: Mapped[Optional[int]] = mapped_column(Integer)
    assignee: Mapped[Optional[str]] = mapped_column(String(255))
    country: Mapped[Optional[str]] = mapped_column(String(10))
    city: Mapped[Optional[str]] = mapped_column(String(255))
    state: Mapped[Optional[str]] = mapped_column(String(255))
    first_wipo_field_title: Mapped[Optional[str]] = mapped_column(String(255))
    first_wipo_sector_title: Mapped[Optional[str]] = mapped_column(String(255))
    extra: Mapped[Optional[dict]] = mapped_column(
        JSON, doc="Auxiliary source columns passed through unused."
    )
