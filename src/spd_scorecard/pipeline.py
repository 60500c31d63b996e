"""Pipeline: read export -> validate -> score cohort -> write workbook."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from .core import build_report
from .io import extract_reporting_period, read_activity_workbook
from .report import write_scorecard_report
from .utils import get_logger, setup_logging


def run_pipeline(
    config: dict[str, Any],
    *,
    input_path: str | Path | None = None,
    output_dir: str | Path | None = None,
    hours_worked_available: bool | None = None,
) -> Path:
    """Run the scorecard pipeline for one activity export.

    Explicit arguments override the ``paths`` and ``scoring`` config sections.
    ``hours_worked_available`` left as None means: use the config override if
    any, else whether the export has an 'Hours Worked' column.
    """
    setup_logging(config.get("logging", {}))
    log = get_logger(__name__)

    paths = config.get("paths", {}) or {}
    excel_cfg = config.get("excel", {}) or {}
    output_cfg = config.get("output", {}) or {}
    scoring_cfg = config.get("scoring", {}) or {}

    input_path = input_path or paths.get("input_workbook")
    output_dir = Path(output_dir or paths.get("output_dir") or "out")
    if not input_path:
        raise ValueError("input workbook path is required (--input)")

    log.info("Reading activity export from %s", input_path)
    sheet = read_activity_workbook(input_path, excel_cfg)

    if hours_worked_available is None:
        hours_worked_available = scoring_cfg.get("hours_worked_available")
    if hours_worked_available is None:
        hours_worked_available = sheet.hours_worked_available

    report = build_report(sheet.rows, hours_worked_available=bool(hours_worked_available))
    log.info("Scored %s people", len(report.users))

    report_name = paths.get("report_name") or "scorecards.xlsx"
    return write_scorecard_report(
        report,
        output_dir / report_name,
        max_badges=int(output_cfg.get("max_badges", 4)),
        reporting_period=extract_reporting_period(sheet.source.name),
        include_medians_sheet=bool(output_cfg.get("include_medians_sheet", True)),
    )
