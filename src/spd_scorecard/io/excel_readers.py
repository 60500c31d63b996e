"""Excel readers: technician activity export."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, timedelta
from pathlib import Path
from typing import Any, Iterable

import pandas as pd

from ..core.normalize import COLUMN_FIELDS, REQUIRED_COLUMNS, TEXT_COLUMNS
from ..utils import get_logger

_log = get_logger(__name__)

HOURS_WORKED_COLUMN = "Hours Worked"

_PERIOD_RE = re.compile(r"(\d{4}[./-]\d{2}[./-]\d{2})\s*-\s*(\d{4}[./-]\d{2}[./-]\d{2})")


class MissingColumnsError(ValueError):
    """The activity sheet lacks one or more required columns."""

    def __init__(self, missing: list[str]):
        self.missing = missing
        super().__init__(f"Missing required columns: {', '.join(missing)}")


@dataclass(frozen=True)
class ActivitySheet:
    rows: list[dict[str, Any]]
    hours_worked_available: bool
    source: Path


def validate_columns(columns: Iterable[Any]) -> None:
    """Raise MissingColumnsError listing required columns absent from ``columns``."""
    present = {str(c).strip() for c in columns}
    missing = [c for c in REQUIRED_COLUMNS if c not in present]
    if missing:
        raise MissingColumnsError(missing)


def read_activity_workbook(
    path: str | Path,
    excel_config: dict[str, Any] | None = None,
) -> ActivitySheet:
    """Read the technician activity export.

    Reads the first sheet (or ``excel_config['sheet']``) of an .xlsx/.xls
    workbook, or a .csv file. Column names are stripped before validation.

    Args:
        path: Path to the export.
        excel_config: Optional dict with 'sheet'.

    Returns:
        ActivitySheet with one dict per data row and whether the optional
        'Hours Worked' column was present.
    """
    config = excel_config or {}
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Activity workbook not found: {path}")

    # ids like "00123" must stay text
    text_dtypes = {column: str for column in TEXT_COLUMNS}
    if path.suffix.lower() == ".csv":
        df = pd.read_csv(path, dtype=text_dtypes)
    else:
        df = pd.read_excel(path, sheet_name=config.get("sheet", 0), dtype=text_dtypes)
    df.columns = [str(c).strip() for c in df.columns]
    df = df.dropna(how="all")

    if df.empty:
        raise ValueError("No data rows found in the workbook.")

    validate_columns(df.columns)
    df = _fill_empty_cells(df)
    hours_worked_available = HOURS_WORKED_COLUMN in df.columns
    if not hours_worked_available:
        _log.warning("'%s' column missing in %s; productivity uses raw volume", HOURS_WORKED_COLUMN, path)

    rows = df.to_dict(orient="records")
    _log.info("Read %s activity rows from %s", len(rows), path)
    return ActivitySheet(rows=rows, hours_worked_available=hours_worked_available, source=path)


def _fill_empty_cells(df: pd.DataFrame) -> pd.DataFrame:
    """Blank numeric cells become 0, blank text cells become ''."""
    numeric = [c for c in df.columns if c in COLUMN_FIELDS and c not in TEXT_COLUMNS]
    text = [c for c in df.columns if c in TEXT_COLUMNS]
    df = df.copy()
    df[numeric] = df[numeric].fillna(0)
    df[text] = df[text].fillna("")
    return df


def _normalize_date_token(value: str) -> str:
    return re.sub(r"[./]", "-", value)


def _friendly_date(value: str) -> str:
    normalized = _normalize_date_token(value)
    year, month, day = (int(p) for p in normalized.split("-"))
    if not (year and month and day):
        return normalized
    # out-of-range months and days roll forward: 2026-13-45 is Feb 14, 2027
    year += (month - 1) // 12
    month = (month - 1) % 12 + 1
    try:
        d = date(year, month, 1) + timedelta(days=day - 1)
    except (ValueError, OverflowError):
        return normalized
    return f"{d:%b} {d.day}, {d.year}"


def extract_reporting_period(file_name: str) -> str | None:
    """Reporting period from a file name like 'SPD 2026-01-01 - 2026-01-31.xlsx'.

    Returns e.g. 'Jan 1, 2026 – Jan 31, 2026', or None when no range is found.
    """
    base = re.sub(r"\.[^/.]+$", "", str(file_name))
    m = _PERIOD_RE.search(base)
    if not m:
        return None
    return f"{_friendly_date(m.group(1))} – {_friendly_date(m.group(2))}"
