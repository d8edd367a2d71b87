"""Service exports."""

from app.services.normalization import FeeSchedule, PipelineSummary, run_pipeline
from app.services.reporting import (
	expiring_patents,
	maintenance_schedule,
	portfolio_summary,
	revenue_by_year_and_jurisdiction,
)

__all__ = [
	"FeeSchedule",
	"PipelineSummary",
	"run_pipeline",
	"expiring_patents",
	"maintenance_schedule",
	"portfolio_summary",
	"revenue_by_year_and_jurisdiction",
]
