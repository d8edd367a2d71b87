"""Command-line loading, pipeline and report scripts."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from sqlalchemy import select

from app.core.config import get_settings
from app.models import Patent, RawRecord
from scripts import load_raw_records, report_maintenance_fees, run_pipeline

CSV_EXPORT = (
    "patent_number,grant_year,application_number,application_year,assignee,country,"
    "first_wipo_field_title,inventor_name1\n"
    "11000001,2023,17000001,2020,Acme Corp,US,Computer technology,Jane Roe\n"
    "11000001,2023,17000001,2020,Acme Corp,US,Audio,Jane Roe\n"
    "11000002,2023,,,,,,\n"
)


def test_read_rows_from_csv(tmp_path: Path):
    path = tmp_path / "uspto.csv"
    path.write_text(CSV_EXPORT, encoding="utf-8")

    rows = load_raw_records.validate_rows(load_raw_records.read_rows(path))

    assert len(rows) == 3
    assert rows[0].patent_number == "11000001"
    assert rows[0].grant_year == 2023
    assert rows[0].staging_fields()["extra"] == {"inventor_name1": "Jane Roe"}
    assert rows[2].application_year is None
    assert rows[2].country == ""


def test_read_rows_from_json_and_jsonl(tmp_path: Path):
    json_path = tmp_path / "rows.json"
    json_path.write_text(json.dumps([{"patent_number": 123, "grant_year": 2019}]), encoding="utf-8")
    jsonl_path = tmp_path / "rows.jsonl"
    jsonl_path.write_text(
        '{"patent_number": "A1", "grant_year": 2019}\n\n{"patent_number": "A2"}\n',
        encoding="utf-8",
    )

    from_json = load_raw_records.validate_rows(load_raw_records.read_rows(json_path))
    from_jsonl = load_raw_records.validate_rows(load_raw_records.read_rows(jsonl_path))

    assert from_json[0].patent_number == "123"
    assert [row.patent_number for row in from_jsonl] == ["A1", "A2"]


def test_malformed_rows_are_skipped():
    rows = load_raw_records.validate_rows(
        [{"patent_number": "US1", "grant_year": "2019"}, {"patent_number": "US2", "grant_year": "n/a"}]
    )
    assert [row.patent_number for row in rows] == ["US1"]


def test_missing_input_file_raises(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        load_raw_records.read_rows(tmp_path / "absent.csv")


def test_load_and_run_scripts_end_to_end(tmp_path: Path, engine, session_factory, monkeypatch):
    path = tmp_path / "uspto.csv"
    path.write_text(CSV_EXPORT, encoding="utf-8")
    for module in (load_raw_records, run_pipeline):
        monkeypatch.setattr(module, "engine", engine)
        monkeypatch.setattr(module, "SessionLocal", session_factory)

    staged = load_raw_records.main(["--input", str(path), "--log-level", "WARNING"])
    summary = run_pipeline.main(["--log-level", "WARNING"])

    assert staged == 3
    assert summary.patents_created == 2
    assert summary.deadlines_created == 6
    with session_factory() as session:
        assert len(session.execute(select(RawRecord)).scalars().all()) == 3
        patent = session.execute(
            select(Patent).where(Patent.patent_number == "11000001")
        ).scalar_one()
        assert patent.title == "Computer technology"


def test_dry_run_leaves_store_unchanged(tmp_path: Path, engine, session_factory, monkeypatch):
    path = tmp_path / "uspto.csv"
    path.write_text(CSV_EXPORT, encoding="utf-8")
    for module in (load_raw_records, run_pipeline):
        monkeypatch.setattr(module, "engine", engine)
        monkeypatch.setattr(module, "SessionLocal", session_factory)

    load_raw_records.main(["--input", str(path)])
    summary = run_pipeline.main(["--dry-run"])

    assert summary.patents_created == 2
    with session_factory() as session:
        assert session.execute(select(Patent)).first() is None


def test_report_script_requires_window_for_expiring():
    with pytest.raises(SystemExit):
        report_maintenance_fees.parse_args(["--report", "expiring", "--start-year", "2025"])


def test_report_script_rejects_inverted_window():
    with pytest.raises(SystemExit):
        report_maintenance_fees.parse_args(
            ["--report", "expiring", "--start-year", "2030", "--end-year", "2025"]
        )


def test_report_script_writes_json(tmp_path: Path, session_factory, stage, db, monkeypatch):
    stage({"patent_number": "US1", "grant_year": 2018, "application_year": 2008, "country": "US"})
    from app.services.normalization import run_pipeline as run

    run(db)
    db.close()
    monkeypatch.setattr(report_maintenance_fees, "SessionLocal", session_factory)
    output = tmp_path / "reports" / "revenue.json"

    report_maintenance_fees.main(["--report", "revenue", "--output", str(output)])

    payload = json.loads(output.read_text(encoding="utf-8"))
    assert [(row["due_year"], row["jurisdiction"], row["total_amount"]) for row in payload] == [
        (2021, "US", "2150.00"),
        (2025, "US", "4040.00"),
        (2029, "US", "8280.00"),
    ]


def test_loader_log_level_defaults_to_settings(tmp_path: Path):
    args = load_raw_records.parse_args(["--input", str(tmp_path / "rows.csv")])

    assert args.log_level == get_settings().log_level
