"""Scoring core: normalization, metrics, percentiles, scores, classification, coaching."""

from .engine import build_report
from .normalize import coerce_row, REQUIRED_COLUMNS
from .tables import DEFAULT_TABLES, ScoringTables

__all__ = ["build_report", "coerce_row", "REQUIRED_COLUMNS", "DEFAULT_TABLES", "ScoringTables"]
