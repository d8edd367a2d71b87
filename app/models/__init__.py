"""ORM model exports."""

from app.models.portfolio import (
	ASSET_TYPE_PATENT,
	DEADLINE_STATUS_OPEN,
	PATENT_STATUS_GRANTED,
	Client,
	Cost,
	Deadline,
	Jurisdiction,
	Patent,
)
from app.models.raw import RawRecord

__all__ = [
	"ASSET_TYPE_PATENT",
	"DEADLINE_STATUS_OPEN",
	"PATENT_STATUS_GRANTED",
	"Client",
	"Cost",
	"Deadline",
	"Jurisdiction",
	"Patent",
	"RawRecord",
]
