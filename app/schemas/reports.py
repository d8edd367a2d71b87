"""Schemas for reporting and pipeline endpoints."""

from __future__ import annotations

from decimal import Decimal
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ScheduleRow(BaseModel):
    patent_number: str
    title: Optional[str]
    grant_year: Optional[int]
    deadline_type: str
    due_year: int


class RevenueRow(BaseModel):
    due_year: int
    jurisdiction: str = Field(..., description="Jurisdiction name, 'Unknown' when unresolved.")
    total_amount: Decimal


class ExpiryRow(BaseModel):
    patent_number: str
    title: Optional[str]
    filing_year: int
    expiry_year: int
    client_name: Optional[str]
    jurisdiction: Optional[str]


class DeadlineTypeCount(BaseModel):
    deadline_type: str
    count: int


class PortfolioSummary(BaseModel):
    """Row counts of the normalized tables plus the deadline type mix."""

    table_counts: Dict[str, int]
    deadline_types: List[DeadlineTypeCount]


class StageResponse(BaseModel):
    staged: int


class PipelineRunRead(BaseModel):
    raw_records: int
    skipped_missing_number: int
    clients_created: int
    jurisdictions_created: int
    patents_created: int
    patents_existing: int
    patents_without_grant_year: int
    deadlines_created: int
    costs_created: int

    model_config = ConfigDict(from_attributes=True)
