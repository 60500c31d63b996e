"""Fixed scoring tables: metric definitions, archetype pools, badge titles, templates."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from .models import ArchetypeKey, BadgeCategory, MetricDefinition, MetricKey


@dataclass(frozen=True)
class ArchetypeOption:
    label: str
    description: str


@dataclass(frozen=True)
class ScoringTables:
    """Immutable lookup data handed to the engine.

    Pools must be non-empty; ``pick_by_seed`` treats an empty pool as a bug.
    """
    metrics: tuple[MetricDefinition, ...]
    archetype_options: Mapping[ArchetypeKey, tuple[ArchetypeOption, ...]]
    archetype_icons: Mapping[ArchetypeKey, str]
    badge_titles: Mapping[BadgeCategory, tuple[str, ...]]
    strength_templates: tuple[str, ...]
    growth_templates: tuple[str, ...]
    metric_pillar_labels: Mapping[MetricKey, str]
    fallback_pillar_label: str = "Performance"

    @property
    def metric_keys(self) -> tuple[MetricKey, ...]:
        return tuple(m.key for m in self.metrics)

    def pillar_label_for(self, key: MetricKey) -> str:
        return self.metric_pillar_labels.get(key, self.fallback_pillar_label)


DEFAULT_METRICS: tuple[MetricDefinition, ...] = (
    MetricDefinition("deconScans", "Decontamination Scans", True, "number", 0, short_label="Decontamination"),
    MetricDefinition("sinkInst", "Sink Instruments", True, "number", 0),
    MetricDefinition("sinkTrays", "Sink Trays", True, "number", 0),
    MetricDefinition("assembledTrays", "Assembled Trays", True, "number", 0, short_label="Assembly"),
    MetricDefinition("assembledPacks", "Assembled Peel Packs", True, "number", 0),
    MetricDefinition("assembledInst", "Assembled Instruments", True, "number", 0),
    MetricDefinition("workedHoursPerUnit", "Worked Hours / Unit", False, "number", 3, helper="lower is better"),
    MetricDefinition("assemblyMissingInst", "Missing Instruments Rate", False, "rate", 2, helper="lower is better"),
    MetricDefinition("sterilizerLoads", "Sterilizer Loads", True, "number", 0, short_label="Sterilize"),
    MetricDefinition("itemsSterilized", "Items Sterilized", True, "number", 0),
    MetricDefinition("deliverScans", "Deliver Scans", True, "number", 0),
    MetricDefinition("defectRate", "Defect Rate", False, "rate", 1, helper="lower is better"),
)

_ARCHETYPE_OPTIONS = {
    "decon": (
        ArchetypeOption("Biohazard Bouncer", "Nothing dirty gets past them. Ever."),
        ArchetypeOption("Germ Reaper", "Where bioburden goes to die."),
        ArchetypeOption("The Rinse Cycle", "Relentless, methodical, unstoppable."),
        ArchetypeOption("Hazmat Hero", "Calm under pressure, fearless around the gross stuff."),
        ArchetypeOption("Foam & Fury", "Aggressive cleaning, zero mercy."),
    ),
    "assembly": (
        ArchetypeOption("Tray Whisperer", "Knows when something's missing without looking."),
        ArchetypeOption("Count Sheet Assassin", "Precision so clean it is suspicious."),
        ArchetypeOption("The Lego Master", "Everything fits. Every time."),
        ArchetypeOption("Set Architect", "Builds trays like countsheets matter (because they do)."),
    ),
    "sterilize": (
        ArchetypeOption("Cycle Commander", "Parameters locked. Deviations denied."),
        ArchetypeOption("Steam General", "Leads every load like a military op."),
        ArchetypeOption("The Final Boss", "Nothing leaves until it is actually sterile."),
        ArchetypeOption("Pressure Prophet", "Knows a bad cycle before the printout hits."),
    ),
    "utility": (
        ArchetypeOption("Utility Knife", "Plug-and-play anywhere, anytime."),
        ArchetypeOption("Shift Saver", "Everything goes sideways, then they clock in."),
        ArchetypeOption("The Glue", "The department functions because this person exists."),
        ArchetypeOption("Flex Tech", "You move them, performance doesn't drop."),
    ),
}

_ARCHETYPE_ICONS = {
    "decon": "\U0001F9FD",
    "assembly": "\U0001F6E0\uFE0F",
    "sterilize": "\U0001F6A2",
    "utility": "\U0001F9E9",
}

_BADGE_TITLES = {
    "quality": (
        "Zero-Defect Menace",
        "Quality Over Everything",
        "No Rework, No Regrets",
        "The Auditor's Nightmare",
    ),
    "speed": (
        "Tray Machine",
        "Assembly Speedrunner",
        "Throughput Goblin",
        "Blink and You Miss It",
    ),
    "decon": (
        "Biofilm Bully",
        "Decon Demon",
        "The Pre-Clean King/Queen",
        "So Fresh, So Clean",
    ),
    "sterilize": (
        "Load Perfecter",
        "Steam Certified",
        "Cold Sterile Killer",
    ),
    "multi": (
        "Swiss Army Tech",
        "Triple Threat",
        "Department Backbone",
        "All-Terrain Tech",
    ),
}

STRENGTH_TEMPLATES: tuple[str, ...] = (
    "When it comes to {{pillar}}, you're operating at a level most peers don't reach.",
    "Your {{metric}} puts you in elite territory — keep doing exactly what you are doing.",
)

GROWTH_TEMPLATES: tuple[str, ...] = (
    "The data suggests {{metric}} is your biggest opportunity — tightening this up would level you up fast.",
    "One small improvement in {{metric}} could unlock your next archetype.",
)

_METRIC_PILLAR_LABELS = {
    "deconScans": "Decontamination",
    "sinkInst": "Decontamination",
    "sinkTrays": "Decontamination",
    "assembledTrays": "Assembly",
    "assembledPacks": "Assembly",
    "assembledInst": "Assembly",
    "sterilizerLoads": "Sterilization",
    "itemsSterilized": "Sterilization",
    "deliverScans": "Sterilization",
    "defectRate": "Quality",
    "assemblyMissingInst": "Quality",
    "workedHoursPerUnit": "Efficiency",
}


DEFAULT_TABLES = ScoringTables(
    metrics=DEFAULT_METRICS,
    archetype_options=MappingProxyType(_ARCHETYPE_OPTIONS),
    archetype_icons=MappingProxyType(_ARCHETYPE_ICONS),
    badge_titles=MappingProxyType(_BADGE_TITLES),
    strength_templates=STRENGTH_TEMPLATES,
    growth_templates=GROWTH_TEMPLATES,
    metric_pillar_labels=MappingProxyType(_METRIC_PILLAR_LABELS),
)
