"""Pydantic schemas for staging rows."""

from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

STAGED_COLUMNS = (
    "patent_number",
    "grant_year",
    "application_number",
    "application_year",
    "assignee",
    "country",
    "city",
    "state",
    "first_wipo_field_title",
    "first_wipo_sector_title",
)


class RawRecordCreate(BaseModel):
    """One row of the wide USPTO export; unknown columns are kept as extras."""

    patent_number: Optional[str] = Field(None, description="Grant number; may repeat across rows.")
    grant_year: Optional[int] = None
    application_number: Optional[str] = None
    application_year: Optional[int] = Field(None, description="Filing year of the application.")
    assignee: Optional[str] = None
    country: Optional[str] = Field(None, description="Short country / office code.")
    city: Optional[str] = None
    state: Optional[str] = None
    first_wipo_field_title: Optional[str] = Field(
        None, description="Classification title used as the patent title."
    )
    first_wipo_sector_title: Optional[str] = None

    model_config = ConfigDict(extra="allow")

    @field_validator("grant_year", "application_year", mode="before")
    @classmethod
    def blank_year_is_null(cls, value: Any) -> Any:
        if isinstance(value, str):
            value = value.strip()
            if not value:
                return None
            if value.endswith(".0"):
                value = value[:-2]
        return value

    @field_validator("patent_number", "application_number", mode="before")
    @classmethod
    def identifier_as_text(cls, value: Any) -> Any:
        if isinstance(value, int):
            return str(value)
        return value

    def staging_fields(self) -> Dict[str, Any]:
        """Return column values for a RawRecord, with auxiliary columns under ``extra``."""

        values = {name: getattr(self, name) for name in STAGED_COLUMNS}
        values["extra"] = dict(self.model_extra or {}) or None
        return values
