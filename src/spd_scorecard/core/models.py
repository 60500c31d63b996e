"""Models for the scorecard pipeline: raw rows, metric definitions, computed records."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Mapping


MetricKey = Literal[
    "deconScans",
    "sinkInst",
    "sinkTrays",
    "assembledTrays",
    "assembledPacks",
    "assembledInst",
    "workedHoursPerUnit",
    "assemblyMissingInst",
    "sterilizerLoads",
    "itemsSterilized",
    "deliverScans",
    "defectRate",
]
PillarKey = Literal["decon", "assembly", "sterilize"]
ArchetypeKey = Literal["decon", "assembly", "sterilize", "utility"]
BadgeCategory = Literal["quality", "speed", "decon", "sterilize", "multi"]
ScoreKey = Literal["productivity", "quality", "versatility"]

PILLAR_KEYS: tuple[PillarKey, ...] = ("decon", "assembly", "sterilize")
SCORE_KEYS: tuple[ScoreKey, ...] = ("productivity", "quality", "versatility")


@dataclass(frozen=True)
class MetricDefinition:
    key: MetricKey
    label: str
    higher_better: bool
    format: Literal["number", "rate"]
    decimals: int | None = None
    short_label: str | None = None
    helper: str | None = None


@dataclass(frozen=True)
class RawRow:
    """One person's counts for the reporting period, already coerced to numbers."""
    user_id: str = ""
    user_name: str = ""
    hours_worked: float = 0.0
    num_of_events: float = 0.0
    defect_rate: float = 0.0
    decon_scans: float = 0.0
    sink_inst: float = 0.0
    sink_trays: float = 0.0
    assembled_trays: float = 0.0
    assembled_packs: float = 0.0
    assembled_inst: float = 0.0
    assembly_missing_inst: float = 0.0
    sterilizer_loads: float = 0.0
    items_sterilized: float = 0.0
    deliver_scans: float = 0.0
    activity_count: float = 0.0
    activity_time_mins: float = 0.0


@dataclass(frozen=True)
class Archetype:
    label: str
    icon: str
    description: str


@dataclass(frozen=True)
class UserScores:
    productivity: float
    quality: float
    versatility: float
    productivity_percentile: float = 0.0
    quality_percentile: float = 0.0
    versatility_percentile: float = 0.0


@dataclass(frozen=True)
class BaseUser:
    """Per-person values known before any cohort-relative pass."""
    id: str
    name: str
    tech_label: str
    hours_worked: float
    metrics: Mapping[MetricKey, float]
    pillar_totals: Mapping[PillarKey, float]


@dataclass(frozen=True)
class UserRecord:
    id: str
    name: str
    tech_label: str
    hours_worked: float
    metrics: Mapping[MetricKey, float]
    percentiles: Mapping[MetricKey, float]
    pillar_totals: Mapping[PillarKey, float]
    pillar_percentiles: Mapping[PillarKey, float]
    scores: UserScores
    pillars_above_median: Mapping[PillarKey, bool]
    archetype: Archetype
    badges: tuple[str, ...]
    coaching_summary: str
    strengths: tuple[str, ...]
    opportunity: str


@dataclass(frozen=True)
class ProcessedReport:
    users: tuple[UserRecord, ...]
    medians: Mapping[MetricKey, float]
    pillar_medians: Mapping[PillarKey, float]
    metric_definitions: tuple[MetricDefinition, ...]
    hours_worked_available: bool = True
