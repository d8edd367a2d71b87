"""Print maintenance fee reports over the normalized portfolio."""

from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import List, Sequence

from pydantic import BaseModel

from app.db.session import SessionLocal
from app.services import reporting


def parse_args(argv: List[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Report maintenance fee schedules, revenue and expiries")
    parser.add_argument(
        "--report",
        choices=["schedule", "revenue", "expiring", "summary"],
        default="schedule",
        help="Which report to produce",
    )
    parser.add_argument("--start-year", type=int, help="First expiry year (expiring report)")
    parser.add_argument("--end-year", type=int, help="Last expiry year (expiring report)")
    parser.add_argument("--output", type=Path, help="Optional path to persist the report as JSON")
    args = parser.parse_args(argv)
    if args.report == "expiring" and (args.start_year is None or args.end_year is None):
        parser.error("--start-year and --end-year are required for the expiring report")
    if args.report == "expiring" and args.start_year > args.end_year:
        parser.error("--start-year must not be after --end-year")
    return args


def build_report(args: argparse.Namespace) -> Sequence[BaseModel]:
    with SessionLocal() as session:
        if args.report == "schedule":
            return reporting.maintenance_schedule(session)
        if args.report == "revenue":
            return reporting.revenue_by_year_and_jurisdiction(session)
        if args.report == "expiring":
            return reporting.expiring_patents(session, args.start_year, args.end_year)
        return [reporting.portfolio_summary(session)]


def main(argv: List[str] | None = None) -> None:
    args = parse_args(argv)
    rows = build_report(args)
    payload = [row.model_dump(mode="json") for row in rows]

    if args.output:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        args.output.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        print(f"Wrote {len(payload)} rows to {args.output}")
        return

    for row in payload:
        print(json.dumps(row))


if __name__ == "__main__":
    main()
