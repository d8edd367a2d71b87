"""Load a USPTO annualized patent export into the raw staging table."""

from __future__ import annotations

import argparse
import csv
import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List

from pydantic import ValidationError

from app.core.config import get_settings
from app.db.base import Base
from app.db.session import SessionLocal, engine
from app.schemas.raw import RawRecordCreate
from app.services.normalization import stage_raw_records

LOGGER = logging.getLogger("load_raw_records")


def parse_args(argv: List[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Stage raw USPTO patent rows for normalization")
    parser.add_argument("--input", type=Path, required=True, help="CSV, JSON or JSONL export to stage")
    parser.add_argument("--delimiter", default=",", help="CSV field delimiter")
    parser.add_argument(
        "--log-level",
        default=get_settings().log_level,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity",
    )
    return parser.parse_args(argv)


def configure_logging(level: str) -> None:
    logging.basicConfig(level=getattr(logging, level), format="%(asctime)s %(levelname)s %(message)s")


def read_rows(path: Path, delimiter: str = ",") -> List[Dict[str, Any]]:
    """Read raw dictionaries from a CSV, JSON array or JSONL file."""

    if not path.exists():
        raise FileNotFoundError(f"Input file not found: {path}")

    if path.suffix.lower() == ".csv":
        with path.open("r", encoding="utf-8", newline="") as handle:
            return [dict(row) for row in csv.DictReader(handle, delimiter=delimiter)]

    content = path.read_text(encoding="utf-8").strip()
    if not content:
        return []
    try:
        payload = json.loads(content)
        return payload if isinstance(payload, list) else [payload]
    except json.JSONDecodeError:
        return [json.loads(line) for line in content.splitlines() if line.strip()]


def validate_rows(rows: Iterable[Dict[str, Any]]) -> List[RawRecordCreate]:
    valid: List[RawRecordCreate] = []
    for index, row in enumerate(rows, start=1):
        try:
            valid.append(RawRecordCreate.model_validate(row))
        except ValidationError as exc:
            LOGGER.warning("Skipping malformed row %s: %s", index, exc.errors(include_url=False))
    return valid


def main(argv: List[str] | None = None) -> int:
    args = parse_args(argv)
    configure_logging(args.log_level)

    rows = validate_rows(read_rows(args.input, args.delimiter))
    LOGGER.info("Read %s valid rows from %s", len(rows), args.input)

    Base.metadata.create_all(bind=engine)
    with SessionLocal() as session:
        staged = stage_raw_records(session, rows)
        session.commit()
    LOGGER.info("Staged %s rows", staged)
    return staged


if __name__ == "__main__":
    main()
