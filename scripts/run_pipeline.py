"""Normalize staged USPTO rows and derive maintenance deadlines and costs."""

from __future__ import annotations

import argparse
import json
import logging
from dataclasses import asdict
from pathlib import Path
from typing import List

from app.core.config import get_settings
from app.db.base import Base
from app.db.session import SessionLocal, engine
import app.models  # noqa: F401  register models
from app.services.normalization import FeeSchedule, PipelineSummary, run_pipeline

LOGGER = logging.getLogger("run_pipeline")


def parse_args(argv: List[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the patent normalization pipeline")
    parser.add_argument("--fee-schedule", type=Path, help="Optional JSON file overriding fee offsets and amounts")
    parser.add_argument("--dry-run", action="store_true", help="Run the pipeline and roll back instead of committing")
    parser.add_argument(
        "--log-level",
        default=get_settings().log_level,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity",
    )
    return parser.parse_args(argv)


def configure_logging(level: str) -> None:
    logging.basicConfig(level=getattr(logging, level), format="%(asctime)s %(levelname)s %(message)s")


def main(argv: List[str] | None = None) -> PipelineSummary:
    args = parse_args(argv)
    configure_logging(args.log_level)

    fee_schedule = FeeSchedule.load(args.fee_schedule or get_settings().fee_schedule_path)
    LOGGER.info(
        "Using fee schedule offsets %s (%s)", list(fee_schedule.offsets), fee_schedule.currency
    )

    Base.metadata.create_all(bind=engine)
    with SessionLocal() as session:
        summary = run_pipeline(session, fee_schedule, commit=not args.dry_run)
        if args.dry_run:
            LOGGER.info("Dry run enabled: rolling back pipeline writes")
            session.rollback()

    print(json.dumps(asdict(summary), indent=2))
    return summary


if __name__ == "__main__":
    main()
