"""Shared fixtures for the scorecard test suite."""

import pandas as pd
import pytest

from spd_scorecard.core.normalize import COLUMN_FIELDS


# ── Row factories ───────────────────────────────────────────────────────

@pytest.fixture
def make_row():
    """Factory for spreadsheet-shaped rows (keys are export column names).

    Every numeric column defaults to 0. Usage:
        row = make_row("u1", "Ada", **{"Decon Scans": 10, "Hours Worked": 8})
    """
    _counter = 0

    def _factory(user_id=None, name=None, **columns):
        nonlocal _counter
        _counter += 1
        row = {column: 0 for column in COLUMN_FIELDS}
        row["User ID"] = user_id if user_id is not None else f"u{_counter}"
        row["User Name"] = name if name is not None else f"Tech Person {_counter}"
        row.update(columns)
        return row

    return _factory


@pytest.fixture
def cohort(make_row):
    """Ten people with spread-out, distinct volumes and quality numbers."""
    rows = []
    for i in range(10):
        rows.append(
            make_row(
                f"id-{i}",
                f"Person {i}",
                **{
                    "Hours Worked": 30 + i,
                    "Activity Time (Mins)": 30 * i,
                    "Defect Rate": 0.01 * (10 - i),
                    "Decon Scans": 100 + 10 * i,
                    "Sink Inst": 40 + 3 * ((i * 7) % 10),
                    "Sink Trays": 5 + i,
                    "Assembled Trays": 20 + 2 * ((i * 3) % 10),
                    "Assembled Packs": 15 + i,
                    "Assembled Inst": 200 + 25 * i,
                    "Assembly Missing Inst": (i * 5) % 7,
                    "Sterilizer Loads": 8 + ((i * 9) % 10),
                    "Items Sterilized": 90 + 5 * ((i * 7) % 10),
                    "Deliver Scans": 30 + i,
                },
            )
        )
    return rows


@pytest.fixture
def export_path(tmp_path, cohort):
    """The cohort written as an .xlsx export with a reporting period in its name."""
    path = tmp_path / "SPD Activity 2026-01-01 - 2026-01-31.xlsx"
    pd.DataFrame(cohort).to_excel(path, index=False)
    return path
