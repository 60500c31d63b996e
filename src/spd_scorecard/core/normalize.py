"""Normalization: coerce spreadsheet rows into the fixed RawRow schema."""

from __future__ import annotations

import math
from typing import Any, Mapping

import pandas as pd

from .models import RawRow


# Spreadsheet column -> RawRow field. Order is the input schema order.
COLUMN_FIELDS: dict[str, str] = {
    "User ID": "user_id",
    "User Name": "user_name",
    "Hours Worked": "hours_worked",
    "NumofEvents": "num_of_events",
    "Defect Rate": "defect_rate",
    "Decon Scans": "decon_scans",
    "Sink Inst": "sink_inst",
    "Sink Trays": "sink_trays",
    "Assembled Trays": "assembled_trays",
    "Assembled Packs": "assembled_packs",
    "Assembled Inst": "assembled_inst",
    "Assembly Missing Inst": "assembly_missing_inst",
    "Sterilizer Loads": "sterilizer_loads",
    "Items Sterilized": "items_sterilized",
    "Deliver Scans": "deliver_scans",
    "Activity Count": "activity_count",
    "Activity Time (Mins)": "activity_time_mins",
}

TEXT_COLUMNS = ("User ID", "User Name")
OPTIONAL_COLUMNS = ("Hours Worked",)
REQUIRED_COLUMNS: tuple[str, ...] = tuple(c for c in COLUMN_FIELDS if c not in OPTIONAL_COLUMNS)


def to_number(value: Any) -> float:
    """Convert a cell to a non-negative finite float; anything else becomes 0."""
    if value is None:
        return 0.0
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return 0.0
    try:
        num = float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(num):
        return 0.0
    return max(0.0, num)


def to_text(value: Any) -> str:
    """Convert a cell to trimmed text. Integral floats lose their trailing '.0'."""
    if value is None:
        return ""
    if isinstance(value, float):
        if pd.isna(value):
            return ""
        if value.is_integer():
            return str(int(value))
    return str(value).strip()


def coerce_row(row: Mapping[str, Any]) -> RawRow:
    """Coerce one input mapping (keyed by spreadsheet column) into a RawRow.

    Never raises: absent, non-numeric or non-finite numbers become 0, negatives
    clamp to 0, and text fields are trimmed.
    """
    values: dict[str, Any] = {}
    for column, field in COLUMN_FIELDS.items():
        raw = row.get(column)
        if column in TEXT_COLUMNS:
            values[field] = to_text(raw)
        else:
            values[field] = to_number(raw)
    return RawRow(**values)
