"""Peer-relative scorecards for sterile processing technicians."""

from .core import build_report, coerce_row

__version__ = "0.1.0"

__all__ = ["build_report", "coerce_row", "__version__"]
