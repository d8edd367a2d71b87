"""Pydantic schemas for API payloads."""

from __future__ import annotations

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ClientRead(BaseModel):
    id: int
    client_name: str
    contact_email: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class JurisdictionRead(BaseModel):
    id: int
    code: str = Field(..., description="Country / office code (US, JP, DE, ...).")
    name: str

    model_config = ConfigDict(from_attributes=True)


class PatentRead(BaseModel):
    id: int
    patent_number: str
    title: Optional[str] = None
    filing_year: Optional[int] = None
    grant_year: Optional[int] = None
    status: Optional[str] = None
    client: Optional[ClientRead] = None
    jurisdiction: Optional[JurisdictionRead] = None

    model_config = ConfigDict(from_attributes=True)


class CostRead(BaseModel):
    id: int
    fee_type: Optional[str]
    amount: Optional[Decimal]
    currency: Optional[str]
    due_year: Optional[int]
    jurisdiction_id: Optional[int]

    model_config = ConfigDict(from_attributes=True)


class DeadlineRead(BaseModel):
    id: int
    asset_type: str
    asset_id: int
    deadline_type: str
    due_year: int
    status: Optional[str]
    cost: Optional[CostRead] = None

    model_config = ConfigDict(from_attributes=True)
