"""Schema exports."""

from app.schemas.portfolio import (
	ClientRead,
	CostRead,
	DeadlineRead,
	JurisdictionRead,
	PatentRead,
)
from app.schemas.raw import RawRecordCreate
from app.schemas.reports import (
	DeadlineTypeCount,
	ExpiryRow,
	PipelineRunRead,
	PortfolioSummary,
	RevenueRow,
	ScheduleRow,
	StageResponse,
)

__all__ = [
	"ClientRead",
	"CostRead",
	"DeadlineRead",
	"JurisdictionRead",
	"PatentRead",
	"RawRecordCreate",
	"DeadlineTypeCount",
	"ExpiryRow",
	"PipelineRunRead",
	"PortfolioSummary",
	"RevenueRow",
	"ScheduleRow",
	"StageResponse",
]
