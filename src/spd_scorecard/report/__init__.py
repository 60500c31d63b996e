"""Pipeline reporting: Excel writer and display formatting."""

from .excel_writer import format_delta, format_metric_value, format_ordinal, write_scorecard_report

__all__ = ["format_delta", "format_metric_value", "format_ordinal", "write_scorecard_report"]
