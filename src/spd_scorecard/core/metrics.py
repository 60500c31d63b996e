"""Per-person metric and pillar derivation from normalized rows."""

from __future__ import annotations

from .models import BaseUser, MetricKey, PillarKey, RawRow


# Denominator floors keep every ratio finite
MIN_UNITS_DENOMINATOR = 1.0
MIN_ASSEMBLED_DENOMINATOR = 1.0
MIN_HOURS_DENOMINATOR = 0.25

SINK_INSTRUMENT_UNIT_WEIGHT = 0.5


def safe_div(numerator: float, denominator: float, min_denominator: float) -> float:
    """Divide with the denominator floored at ``min_denominator``."""
    return numerator / max(denominator, min_denominator)


def calculate_hours_worked(row: RawRow) -> float:
    """Timekeeping hours plus activity time logged outside the system."""
    return row.hours_worked + row.activity_time_mins / 60


def calculate_pillar_totals(row: RawRow) -> dict[PillarKey, float]:
    return {
        "decon": row.decon_scans + row.sink_inst + row.sink_trays,
        "assembly": row.assembled_inst + row.assembled_trays + row.assembled_packs,
        "sterilize": row.items_sterilized + row.sterilizer_loads + row.deliver_scans,
    }


def calculate_pillar_rates(totals: dict[PillarKey, float], hours_worked: float) -> dict[PillarKey, float]:
    return {
        key: safe_div(total, hours_worked, MIN_HOURS_DENOMINATOR)
        for key, total in totals.items()
    }


def calculate_metrics(row: RawRow, hours_worked: float) -> dict[MetricKey, float]:
    """
    Derive the 12 scored metrics for one person.

    Args:
        row: Normalized input row
        hours_worked: Result of calculate_hours_worked for the same row

    Returns:
        Dict of metric key -> value, in metric declaration order
    """
    units_of_service = row.sink_inst * SINK_INSTRUMENT_UNIT_WEIGHT + row.assembled_inst
    worked_hours_per_unit = safe_div(hours_worked, units_of_service, MIN_UNITS_DENOMINATOR)
    missing_inst_rate = safe_div(row.assembly_missing_inst, row.assembled_inst, MIN_ASSEMBLED_DENOMINATOR)

    return {
        "deconScans": row.decon_scans,
        "sinkInst": row.sink_inst,
        "sinkTrays": row.sink_trays,
        "assembledTrays": row.assembled_trays,
        "assembledPacks": row.assembled_packs,
        "assembledInst": row.assembled_inst,
        "workedHoursPerUnit": worked_hours_per_unit,
        "assemblyMissingInst": missing_inst_rate,
        "sterilizerLoads": row.sterilizer_loads,
        "itemsSterilized": row.items_sterilized,
        "deliverScans": row.deliver_scans,
        "defectRate": row.defect_rate,
    }


def build_base_user(row: RawRow, index: int) -> BaseUser:
    """Build the cohort-independent part of a person's record.

    ``index`` is the 0-based input position, used for the fallback labels.
    """
    hours_worked = calculate_hours_worked(row)
    return BaseUser(
        id=row.user_id,
        name=row.user_name.strip() or f"Tech {index + 1}",
        tech_label=f"Tech #{index + 1}",
        hours_worked=hours_worked,
        metrics=calculate_metrics(row, hours_worked),
        pillar_totals=calculate_pillar_totals(row),
    )
