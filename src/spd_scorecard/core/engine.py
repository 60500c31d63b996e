"""Scoring engine: normalized rows -> percentiles -> composite scores -> classification -> coaching."""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Mapping, Sequence

from ..utils import get_logger
from .classify import (
    DEFAULT_RULES,
    ClassificationRules,
    build_archetype,
    classify_archetype_key,
    eligible_badges,
    pick_badges,
    user_seed,
)
from .metrics import build_base_user, calculate_pillar_rates
from .models import PILLAR_KEYS, BaseUser, ProcessedReport, RawRow, UserRecord, UserScores
from .narrative import build_coaching
from .normalize import coerce_row
from .percentile import build_median_map, build_percentiles, build_sorted_values
from .scores import DEFAULT_WEIGHTS, ScoreWeights, compose_scores, count_above_median, pillars_above_median, rank_scores
from .tables import DEFAULT_TABLES, ScoringTables


_log = get_logger(__name__)

_PILLAR_HIGHER_BETTER = {key: True for key in PILLAR_KEYS}


def _frozen(mapping: Mapping) -> Mapping:
    return MappingProxyType(dict(mapping))


def build_report(
    rows: Sequence[RawRow | Mapping[str, Any]],
    *,
    hours_worked_available: bool = True,
    tables: ScoringTables = DEFAULT_TABLES,
    rules: ClassificationRules = DEFAULT_RULES,
    weights: ScoreWeights = DEFAULT_WEIGHTS,
) -> ProcessedReport:
    """
    Score a whole cohort.

    Every percentile is relative to ``rows`` only. Composite-score percentiles
    are computed after all composite scores exist, so the two percentile
    passes run as separate stages over fully built lists.

    Args:
        rows: RawRow instances, or spreadsheet mappings (coerced with coerce_row)
        hours_worked_available: Cohort-wide; selects per-hour productivity
            rather than the raw-volume fallback
        tables: Metric definitions and flavor-text pools
        rules: Archetype and badge thresholds
        weights: Quality score weights

    Returns:
        ProcessedReport with one UserRecord per input row, in input order
    """
    raw_rows = [row if isinstance(row, RawRow) else coerce_row(row) for row in rows]
    _log.debug(
        "Scoring %s people (productivity basis: %s)",
        len(raw_rows),
        "pillar rates" if hours_worked_available else "pillar totals",
    )

    base_users = [build_base_user(row, index) for index, row in enumerate(raw_rows)]
    metric_keys = tables.metric_keys
    metric_higher_better = {m.key: m.higher_better for m in tables.metrics}

    metric_values = [user.metrics for user in base_users]
    pillar_totals = [user.pillar_totals for user in base_users]
    pillar_rates = [calculate_pillar_rates(dict(user.pillar_totals), user.hours_worked) for user in base_users]

    medians = build_median_map(metric_values, metric_keys)
    pillar_medians = build_median_map(pillar_totals, PILLAR_KEYS)

    sorted_metrics = build_sorted_values(metric_values, metric_keys)
    sorted_pillars = build_sorted_values(pillar_totals, PILLAR_KEYS)
    sorted_rates = build_sorted_values(pillar_rates, PILLAR_KEYS)

    # Pass 1: metric and pillar percentiles, first-pass composite scores.
    first_pass: list[dict[str, Any]] = []
    for user, rates in zip(base_users, pillar_rates):
        percentiles = build_percentiles(user.metrics, sorted_metrics, metric_higher_better)
        pillar_percentiles = build_percentiles(user.pillar_totals, sorted_pillars, _PILLAR_HIGHER_BETTER)
        rate_percentiles = build_percentiles(rates, sorted_rates, _PILLAR_HIGHER_BETTER)
        above = pillars_above_median(user.pillar_totals, pillar_medians)
        scores = compose_scores(
            percentiles,
            pillar_percentiles,
            rate_percentiles,
            above,
            hours_worked_available=hours_worked_available,
            weights=weights,
        )
        first_pass.append(
            {
                "percentiles": percentiles,
                "pillar_percentiles": pillar_percentiles,
                "above": above,
                "scores": scores,
            }
        )

    # Pass 2: composite-score percentiles over the complete cohort.
    ranked = rank_scores([item["scores"] for item in first_pass])

    users = tuple(
        _build_user_record(user, item, scores, tables, rules)
        for user, item, scores in zip(base_users, first_pass, ranked)
    )

    if users and all(sum(u.pillar_totals.values()) == 0 for u in users):
        _log.warning("Every person in the cohort has zero pillar volume")

    return ProcessedReport(
        users=users,
        medians=_frozen(medians),
        pillar_medians=_frozen(pillar_medians),
        metric_definitions=tables.metrics,
        hours_worked_available=hours_worked_available,
    )


def _build_user_record(
    user: BaseUser,
    first_pass: dict[str, Any],
    scores: UserScores,
    tables: ScoringTables,
    rules: ClassificationRules,
) -> UserRecord:
    percentiles = first_pass["percentiles"]
    pillar_percentiles = first_pass["pillar_percentiles"]
    above = first_pass["above"]
    above_count = count_above_median(above)
    seed = user_seed(user.id, user.tech_label, user.name)

    archetype_key = classify_archetype_key(user.pillar_totals, pillar_percentiles, above_count, rules)
    badges = pick_badges(eligible_badges(percentiles, pillar_percentiles, above_count, rules), seed, tables)
    coaching = build_coaching(percentiles, seed, tables)

    return UserRecord(
        id=user.id,
        name=user.name,
        tech_label=user.tech_label,
        hours_worked=user.hours_worked,
        metrics=_frozen(user.metrics),
        percentiles=_frozen(percentiles),
        pillar_totals=_frozen(user.pillar_totals),
        pillar_percentiles=_frozen(pillar_percentiles),
        scores=scores,
        pillars_above_median=_frozen(above),
        archetype=build_archetype(archetype_key, seed, tables),
        badges=badges,
        coaching_summary=coaching.summary,
        strengths=(coaching.strength.label,),
        opportunity=coaching.opportunity.label,
    )
