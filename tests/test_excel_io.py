"""Reader, writer, pipeline and CLI round trips through real workbooks."""

import pandas as pd
import pytest

from spd_scorecard.cli import load_config, main
from spd_scorecard.core import build_report
from spd_scorecard.core.tables import DEFAULT_TABLES
from spd_scorecard.io import (
    MissingColumnsError,
    extract_reporting_period,
    read_activity_workbook,
    validate_columns,
)
from spd_scorecard.pipeline import run_pipeline
from spd_scorecard.report import format_delta, format_metric_value, format_ordinal, write_scorecard_report

METRICS = {m.key: m for m in DEFAULT_TABLES.metrics}


# ── Reader ──────────────────────────────────────────────────────────────

def test_read_activity_workbook(export_path, cohort):
    sheet = read_activity_workbook(export_path)
    assert len(sheet.rows) == len(cohort)
    assert sheet.hours_worked_available is True
    assert sheet.rows[0]["User Name"] == "Person 0"
    assert sheet.source == export_path


def test_missing_hours_column_is_detected(tmp_path, cohort):
    path = tmp_path / "no_hours.xlsx"
    pd.DataFrame(cohort).drop(columns=["Hours Worked"]).to_excel(path, index=False)
    assert read_activity_workbook(path).hours_worked_available is False


def test_missing_required_columns(tmp_path, cohort):
    path = tmp_path / "broken.xlsx"
    pd.DataFrame(cohort).drop(columns=["Sink Trays", "Deliver Scans"]).to_excel(path, index=False)
    with pytest.raises(MissingColumnsError) as exc_info:
        read_activity_workbook(path)
    assert exc_info.value.missing == ["Sink Trays", "Deliver Scans"]
    assert "Missing required columns: Sink Trays, Deliver Scans" in str(exc_info.value)


def test_validate_columns_strips_names(cohort):
    validate_columns([f" {c} " for c in cohort[0]])
    with pytest.raises(ValueError):
        validate_columns(["User ID"])


def test_empty_workbook(tmp_path, cohort):
    path = tmp_path / "empty.xlsx"
    pd.DataFrame(columns=list(cohort[0])).to_excel(path, index=False)
    with pytest.raises(ValueError, match="No data rows"):
        read_activity_workbook(path)


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_activity_workbook(tmp_path / "nope.xlsx")


def test_csv_export(tmp_path, cohort):
    path = tmp_path / "export.csv"
    pd.DataFrame(cohort).to_csv(path, index=False)
    sheet = read_activity_workbook(path)
    assert len(sheet.rows) == len(cohort)
    report = build_report(sheet.rows, hours_worked_available=sheet.hours_worked_available)
    assert [u.name for u in report.users] == [r["User Name"] for r in cohort]


def test_blank_cells_are_filled(tmp_path, cohort):
    rows = [dict(r) for r in cohort[:3]]
    rows[1]["User Name"] = None
    rows[1]["User ID"] = None
    rows[1]["Decon Scans"] = None
    path = tmp_path / "blanks.xlsx"
    pd.DataFrame(rows).to_excel(path, index=False)

    sheet = read_activity_workbook(path)
    assert sheet.rows[1]["User Name"] == ""
    assert sheet.rows[1]["User ID"] == ""
    assert sheet.rows[1]["Decon Scans"] == 0

    user = build_report(sheet.rows).users[1]
    assert user.name == "Tech 2"
    assert user.id == ""
    assert user.metrics["deconScans"] == 0


def test_ids_keep_leading_zeros(tmp_path, make_row):
    path = tmp_path / "ids.csv"
    pd.DataFrame([make_row("00123", "Ada"), make_row("00456", "Lin")]).to_csv(path, index=False)
    sheet = read_activity_workbook(path)
    assert [r["User ID"] for r in sheet.rows] == ["00123", "00456"]
    assert [u.id for u in build_report(sheet.rows).users] == ["00123", "00456"]


def test_numeric_ids_read_as_text(tmp_path, make_row):
    path = tmp_path / "numeric_ids.xlsx"
    pd.DataFrame([make_row(12345, "Ada"), make_row(678, "Lin")]).to_excel(path, index=False)
    assert [r["User ID"] for r in read_activity_workbook(path).rows] == ["12345", "678"]


@pytest.mark.parametrize("name,expected", [
    ("SPD 2026-01-01 - 2026-01-31.xlsx", "Jan 1, 2026 – Jan 31, 2026"),
    ("export 2026.02.01-2026.02.14.xlsx", "Feb 1, 2026 – Feb 14, 2026"),
    ("2025/12/01 - 2025/12/15", "Dec 1, 2025 – Dec 15, 2025"),
    ("bad 2026-13-01 - 2026-13-05.xlsx", "Jan 1, 2027 – Jan 5, 2027"),
    ("2026-02-30 - 2026-13-45.xlsx", "Mar 2, 2026 – Feb 14, 2027"),
    ("2026-00-10 - 2026-01-00.xlsx", "2026-00-10 – 2026-01-00"),
    ("activity.xlsx", None),
])
def test_extract_reporting_period(name, expected):
    assert extract_reporting_period(name) == expected


# ── Formatting ──────────────────────────────────────────────────────────

def test_format_metric_value():
    defect = METRICS["defectRate"]
    missing = METRICS["assemblyMissingInst"]
    hours = METRICS["workedHoursPerUnit"]
    scans = METRICS["deconScans"]
    assert format_metric_value(0.05, defect) == "5.0%"
    assert format_metric_value(3, missing) == "3.00%"
    assert format_metric_value(12.3456, hours) == "12.346"
    assert format_metric_value(140, scans) == "140"


def test_format_delta():
    defect = METRICS["defectRate"]
    scans = METRICS["deconScans"]
    assert format_delta(0.02, defect) == "+2.0%"
    assert format_delta(-0.02, defect) == "-2.0%"
    assert format_delta(3, scans) == "+3"
    assert format_delta(-2, scans) == "-2"
    assert format_delta(0, scans) == "0"


@pytest.mark.parametrize("value,expected", [
    (1, "1st"), (2, "2nd"), (3, "3rd"), (4, "4th"), (11, "11th"), (12, "12th"),
    (13, "13th"), (21, "21st"), (22, "22nd"), (101, "101st"), (111, "111th"),
    (50.4, "50th"), (92.6, "93rd"), (0, "0th"),
])
def test_format_ordinal(value, expected):
    assert format_ordinal(value) == expected


# ── Writer / pipeline / CLI ─────────────────────────────────────────────

def test_write_scorecard_report(tmp_path, cohort):
    report = build_report(cohort)
    path = write_scorecard_report(report, tmp_path / "out" / "cards.xlsx", max_badges=1, reporting_period="Jan")
    sheets = pd.read_excel(path, sheet_name=None)
    assert set(sheets) == {"Summary", "Scorecards", "Metrics", "Vs Median", "Percentiles", "Medians"}

    cards = sheets["Scorecards"]
    assert len(cards) == len(cohort)
    assert list(cards["Name"]) == [u.name for u in report.users]
    assert list(cards["Badges"].fillna("")) == [", ".join(u.badges[:1]) for u in report.users]
    assert list(cards["Coaching"]) == [u.coaching_summary for u in report.users]
    assert len(sheets["Medians"]) == len(DEFAULT_TABLES.metrics) + 3

    # decon scans run 100..190, median 145
    deltas = sheets["Vs Median"]
    assert deltas["Decontamination Scans"].iloc[0] == "-45"
    assert deltas["Decontamination Scans"].iloc[-1] == "+45"


def test_write_empty_report(tmp_path):
    path = write_scorecard_report(build_report([]), tmp_path / "empty.xlsx", include_medians_sheet=False)
    assert set(pd.read_excel(path, sheet_name=None)) == {"Summary"}


def test_run_pipeline(tmp_path, export_path):
    config = {"paths": {"report_name": "cards.xlsx"}, "output": {"max_badges": 2}}
    path = run_pipeline(config, input_path=export_path, output_dir=tmp_path / "out")
    assert path == tmp_path / "out" / "cards.xlsx"
    summary = pd.read_excel(path, sheet_name="Summary")
    values = dict(zip(summary["Field"], summary["Value"]))
    assert values["Reporting Period"] == "Jan 1, 2026 – Jan 31, 2026"
    assert values["Productivity Basis"] == "Pillar volume per hour worked"


def test_run_pipeline_hours_override(tmp_path, export_path):
    config = {"scoring": {"hours_worked_available": False}}
    path = run_pipeline(config, input_path=export_path, output_dir=tmp_path)
    summary = pd.read_excel(path, sheet_name="Summary")
    assert "hours unavailable" in dict(zip(summary["Field"], summary["Value"]))["Productivity Basis"]


def test_run_pipeline_requires_input():
    with pytest.raises(ValueError, match="input workbook"):
        run_pipeline({})


def test_load_config_missing_file(tmp_path):
    assert load_config(tmp_path / "missing.yaml") == {}


def test_load_config_yaml(tmp_path):
    path = tmp_path / "cfg.yaml"
    path.write_text("paths:\n  report_name: x.xlsx\noutput:\n  max_badges: 2\n", encoding="utf-8")
    assert load_config(path) == {"paths": {"report_name": "x.xlsx"}, "output": {"max_badges": 2}}


def test_cli_main(tmp_path, export_path):
    out_dir = tmp_path / "cli"
    main(["-c", str(tmp_path / "none.yaml"), "-i", str(export_path), "-o", str(out_dir), "--no-hours"])
    assert (out_dir / "scorecards.xlsx").exists()


def test_cli_failure_exits_1(tmp_path):
    with pytest.raises(SystemExit) as exc_info:
        main(["-c", str(tmp_path / "none.yaml"), "-i", str(tmp_path / "missing.xlsx")])
    assert exc_info.value.code == 1
