"""CLI for the scorecard pipeline."""

import argparse
from pathlib import Path

import yaml

from .pipeline import run_pipeline
from .utils import setup_logging, get_logger


def load_config(config_path: str | Path | None) -> dict:
    path = Path(config_path or "configs/default.yaml")
    if not path.exists():
        return {}
    with open(path, encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        description="Build peer-relative technician scorecards from an SPD activity export.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument(
        "-c", "--config",
        default="configs/default.yaml",
        help="Path to YAML config file",
    )
    parser.add_argument(
        "-i", "--input",
        metavar="PATH",
        help="Path to the activity export (.xlsx or .csv)",
    )
    parser.add_argument(
        "-o", "--output-dir",
        metavar="DIR",
        help="Output directory for the scorecard workbook",
    )
    parser.add_argument(
        "--no-hours",
        action="store_true",
        help="Ignore hours worked and score productivity on raw pillar volume",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Set log level to DEBUG",
    )
    args = parser.parse_args(argv)

    config = load_config(args.config)
    config["paths"] = config.get("paths") or {}
    if args.input:
        config["paths"]["input_workbook"] = args.input
    if args.output_dir:
        config["paths"]["output_dir"] = args.output_dir
    if args.verbose:
        config.setdefault("logging", {})["level"] = "DEBUG"

    setup_logging(config.get("logging", {}))
    log = get_logger(__name__)

    try:
        report_path = run_pipeline(
            config,
            hours_worked_available=False if args.no_hours else None,
        )
        log.info("Done. Report: %s", report_path)
    except Exception as e:
        log.exception("Pipeline failed: %s", e)
        raise SystemExit(1)


if __name__ == "__main__":
    main()
