"""Normalization pipeline turning staged USPTO rows into the portfolio model."""

from .collapse import (  # noqa: F401
    CollapsedPatent,
    PatentCollapser,
    collapse_group,
    group_raw_records,
    pick_max,
)
from .fee_schedule import DEFAULT_FEE_SCHEDULE, FeeSchedule, FeeScheduleError  # noqa: F401
from .obligations import ObligationDeriver  # noqa: F401
from .pipeline import PipelineSummary, run_pipeline  # noqa: F401
from .references import ReferenceResolver, clean_text  # noqa: F401
from .staging import load_raw_records, stage_raw_records  # noqa: F401
