"""Pipeline I/O: activity export readers."""

from .excel_readers import (
    ActivitySheet,
    MissingColumnsError,
    extract_reporting_period,
    read_activity_workbook,
    validate_columns,
)

__all__ = [
    "ActivitySheet",
    "MissingColumnsError",
    "extract_reporting_period",
    "read_activity_workbook",
    "validate_columns",
]
