"""Coaching summary: one strength sentence and one growth sentence per person."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping

from .classify import pick_by_seed
from .models import MetricDefinition, MetricKey
from .tables import ScoringTables


@dataclass(frozen=True)
class Coaching:
    summary: str
    strength: MetricDefinition
    opportunity: MetricDefinition


def strongest_metric(percentiles: Mapping[MetricKey, float], tables: ScoringTables) -> MetricDefinition:
    # max/min keep the first of equal elements, i.e. declaration order wins ties
    return max(tables.metrics, key=lambda m: percentiles[m.key])


def weakest_metric(percentiles: Mapping[MetricKey, float], tables: ScoringTables) -> MetricDefinition:
    return min(tables.metrics, key=lambda m: percentiles[m.key])


def fill_template(template: str, **values: str) -> str:
    for name, value in values.items():
        template = template.replace("{{" + name + "}}", value)
    return template


def build_coaching(percentiles: Mapping[MetricKey, float], seed: str, tables: ScoringTables) -> Coaching:
    """Pick and fill the two templates; each slot has its own seed so picks are independent."""
    strength = strongest_metric(percentiles, tables)
    opportunity = weakest_metric(percentiles, tables)
    strength_pillar = tables.pillar_label_for(strength.key)

    strength_line = fill_template(
        pick_by_seed(tables.strength_templates, f"{seed}-{strength_pillar}-strength-template"),
        pillar=strength_pillar,
        metric=strength.label,
    )
    growth_line = fill_template(
        pick_by_seed(tables.growth_templates, f"{seed}-{opportunity.label}-growth-template"),
        metric=opportunity.label,
    )
    return Coaching(summary=f"{strength_line} {growth_line}", strength=strength, opportunity=opportunity)
