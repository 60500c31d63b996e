"""Logging driven by the ``logging`` section of the scorecard config."""

import logging
import sys
from pathlib import Path
from typing import Any

DEFAULT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DEFAULT_DATEFMT = "%Y-%m-%d %H:%M:%S"

# Libraries that log workbook internals at INFO
QUIET_LOGGERS = ("openpyxl",)


def resolve_level(value: Any) -> int:
    """Map a config level ('debug', 'INFO', 10, None) to a logging level; unknown -> INFO."""
    if isinstance(value, int):
        return value
    level = getattr(logging, str(value or "INFO").upper(), None)
    return level if isinstance(level, int) else logging.INFO


def setup_logging(config: dict[str, Any] | None = None) -> None:
    """Configure root logging: level, format, optional file (keys of ``config``).

    Each call replaces the handlers installed by the previous one, so the
    most recent config wins (e.g. run_pipeline after the CLI's --verbose).
    """
    config = config or {}
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    log_file = config.get("file")
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    logging.basicConfig(
        level=resolve_level(config.get("level")),
        format=config.get("format") or DEFAULT_FORMAT,
        datefmt=DEFAULT_DATEFMT,
        handlers=handlers,
        force=True,
    )
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Module logger, e.g. ``get_logger(__name__)``."""
    return logging.getLogger(name)
