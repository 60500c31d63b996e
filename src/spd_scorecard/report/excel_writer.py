"""Excel report writer: write a processed scorecard report to a workbook."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pandas as pd

from ..core.models import PILLAR_KEYS, MetricDefinition, ProcessedReport
from ..utils import get_logger

_log = get_logger(__name__)

PILLAR_LABELS = {
    "decon": "Decontamination",
    "assembly": "Assembly",
    "sterilize": "Sterilization",
}


def _decimals(metric: MetricDefinition, default: int) -> int:
    return default if metric.decimals is None else metric.decimals


def format_metric_value(value: float, metric: MetricDefinition) -> str:
    """Display a metric value. Rates at or below 1 are fractions and shown as percents."""
    if metric.format == "rate":
        display = value * 100 if value <= 1 else value
        return f"{display:.{_decimals(metric, 1)}f}%"
    return f"{value:.{_decimals(metric, 0)}f}"


def format_delta(value: float, metric: MetricDefinition) -> str:
    if metric.format == "rate":
        display = value * 100 if value <= 1 else value
        sign = "+" if display > 0 else ""
        return f"{sign}{display:.{_decimals(metric, 1)}f}%"
    sign = "+" if value > 0 else ""
    return f"{sign}{value:.{_decimals(metric, 0)}f}"


def format_ordinal(value: float) -> str:
    rounded = int(round(value))
    if 11 <= rounded % 100 <= 13:
        return f"{rounded}th"
    suffix = {1: "st", 2: "nd", 3: "rd"}.get(rounded % 10, "th")
    return f"{rounded}{suffix}"


def build_scorecard_rows(report: ProcessedReport, *, max_badges: int = 4) -> list[dict[str, Any]]:
    """One flat row per person for the Scorecards sheet."""
    rows = []
    for user in report.users:
        rows.append(
            {
                "Tech": user.tech_label,
                "User ID": user.id,
                "Name": user.name,
                "Hours Worked": round(user.hours_worked, 2),
                "Productivity": round(user.scores.productivity, 1),
                "Productivity Percentile": format_ordinal(user.scores.productivity_percentile),
                "Quality": round(user.scores.quality, 1),
                "Quality Percentile": format_ordinal(user.scores.quality_percentile),
                "Versatility": round(user.scores.versatility, 1),
                "Versatility Percentile": format_ordinal(user.scores.versatility_percentile),
                "Archetype": f"{user.archetype.icon} {user.archetype.label}",
                "Archetype Description": user.archetype.description,
                "Badges": ", ".join(user.badges[:max_badges]),
                "Strength": ", ".join(user.strengths),
                "Opportunity": user.opportunity,
                "Coaching": user.coaching_summary,
            }
        )
    return rows


def _metric_rows(report: ProcessedReport) -> list[dict[str, Any]]:
    rows = []
    for user in report.users:
        row: dict[str, Any] = {"Tech": user.tech_label, "Name": user.name}
        for metric in report.metric_definitions:
            row[metric.label] = user.metrics[metric.key]
        for key in PILLAR_KEYS:
            row[f"{PILLAR_LABELS[key]} Total"] = user.pillar_totals[key]
        rows.append(row)
    return rows


def _percentile_rows(report: ProcessedReport) -> list[dict[str, Any]]:
    rows = []
    for user in report.users:
        row: dict[str, Any] = {"Tech": user.tech_label, "Name": user.name}
        for metric in report.metric_definitions:
            row[metric.label] = round(user.percentiles[metric.key], 1)
        for key in PILLAR_KEYS:
            row[f"{PILLAR_LABELS[key]} Total"] = round(user.pillar_percentiles[key], 1)
            row[f"{PILLAR_LABELS[key]} >= Median"] = user.pillars_above_median[key]
        rows.append(row)
    return rows


def _delta_rows(report: ProcessedReport) -> list[dict[str, Any]]:
    rows = []
    for user in report.users:
        row: dict[str, Any] = {"Tech": user.tech_label, "Name": user.name}
        for metric in report.metric_definitions:
            row[metric.label] = format_delta(user.metrics[metric.key] - report.medians[metric.key], metric)
        rows.append(row)
    return rows


def _median_rows(report: ProcessedReport) -> list[dict[str, Any]]:
    rows = [
        {
            "Measure": metric.label,
            "Median": format_metric_value(report.medians[metric.key], metric),
            "Note": metric.helper or "",
        }
        for metric in report.metric_definitions
    ]
    rows.extend(
        {"Measure": f"{PILLAR_LABELS[key]} Total", "Median": report.pillar_medians[key], "Note": ""}
        for key in PILLAR_KEYS
    )
    return rows


def write_scorecard_report(
    report: ProcessedReport,
    path: str | Path,
    *,
    max_badges: int = 4,
    reporting_period: str | None = None,
    include_medians_sheet: bool = True,
) -> Path:
    """Write the processed report to an Excel workbook.

    Sheets: Summary, Scorecards, Metrics, Vs Median (signed gap to the cohort
    median per metric), Percentiles and (optionally) Medians.
    Values are written as computed; nothing is re-scored here.

    Args:
        report: Output of build_report.
        path: Output file path (e.g. out/scorecards.xlsx).
        max_badges: Badges shown per person on the Scorecards sheet.
        reporting_period: Optional period label for the Summary sheet.
        include_medians_sheet: Whether to add the cohort medians sheet.

    Returns:
        The path written.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    summary = [
        {"Field": "People", "Value": len(report.users)},
        {"Field": "Reporting Period", "Value": reporting_period or ""},
        {
            "Field": "Productivity Basis",
            "Value": "Pillar volume per hour worked" if report.hours_worked_available else "Pillar volume (hours unavailable)",
        },
    ]

    with pd.ExcelWriter(path, engine="openpyxl") as writer:
        pd.DataFrame(summary).to_excel(writer, sheet_name="Summary", index=False)

        scorecards = build_scorecard_rows(report, max_badges=max_badges)
        if scorecards:
            pd.DataFrame(scorecards).to_excel(writer, sheet_name="Scorecards", index=False)
            pd.DataFrame(_metric_rows(report)).to_excel(writer, sheet_name="Metrics", index=False)
            pd.DataFrame(_delta_rows(report)).to_excel(writer, sheet_name="Vs Median", index=False)
            pd.DataFrame(_percentile_rows(report)).to_excel(writer, sheet_name="Percentiles", index=False)

        if include_medians_sheet:
            pd.DataFrame(_median_rows(report)).to_excel(writer, sheet_name="Medians", index=False)

    _log.info("Wrote scorecard report to %s", path)
    return path
