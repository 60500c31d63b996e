"""Composite scores (productivity, quality, versatility) and their cohort percentiles."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Sequence

from .models import PILLAR_KEYS, SCORE_KEYS, MetricKey, PillarKey, ScoreKey, UserScores
from .percentile import build_sorted_values, percentile_from_sorted


QUALITY_DEFECT_WEIGHT = 0.7
QUALITY_MISSING_WEIGHT = 0.3


@dataclass(frozen=True)
class ScoreWeights:
    defect_rate: float = QUALITY_DEFECT_WEIGHT
    missing_inst_rate: float = QUALITY_MISSING_WEIGHT


DEFAULT_WEIGHTS = ScoreWeights()


def pillars_above_median(
    pillar_totals: Mapping[PillarKey, float],
    pillar_medians: Mapping[PillarKey, float],
) -> dict[PillarKey, bool]:
    return {key: pillar_totals[key] >= pillar_medians[key] for key in PILLAR_KEYS}


def count_above_median(flags: Mapping[PillarKey, bool]) -> int:
    return sum(1 for key in PILLAR_KEYS if flags[key])


def productivity_score(
    pillar_percentiles: Mapping[PillarKey, float],
    pillar_rate_percentiles: Mapping[PillarKey, float],
    *,
    hours_worked_available: bool,
) -> float:
    """Mean pillar percentile: per-hour rates when hours are known, raw volume otherwise."""
    source = pillar_rate_percentiles if hours_worked_available else pillar_percentiles
    return sum(source[key] for key in PILLAR_KEYS) / len(PILLAR_KEYS)


def quality_score(percentiles: Mapping[MetricKey, float], weights: ScoreWeights = DEFAULT_WEIGHTS) -> float:
    # Both inputs are lower-is-better metrics, already flipped by the percentile pass.
    return (
        percentiles["defectRate"] * weights.defect_rate
        + percentiles["assemblyMissingInst"] * weights.missing_inst_rate
    )


def versatility_score(above_median_count: int) -> float:
    return (above_median_count / len(PILLAR_KEYS)) * 100


def compose_scores(
    percentiles: Mapping[MetricKey, float],
    pillar_percentiles: Mapping[PillarKey, float],
    pillar_rate_percentiles: Mapping[PillarKey, float],
    above_median: Mapping[PillarKey, bool],
    *,
    hours_worked_available: bool,
    weights: ScoreWeights = DEFAULT_WEIGHTS,
) -> UserScores:
    """First-pass scores. Percentile fields stay 0 until rank_scores runs."""
    return UserScores(
        productivity=productivity_score(
            pillar_percentiles,
            pillar_rate_percentiles,
            hours_worked_available=hours_worked_available,
        ),
        quality=quality_score(percentiles, weights),
        versatility=versatility_score(count_above_median(above_median)),
    )


def rank_scores(scores: Sequence[UserScores]) -> list[UserScores]:
    """
    Second percentile pass over the composite scores of the whole cohort.

    Must receive every person's first-pass scores; a partial cohort would
    rank against the wrong distribution.

    Args:
        scores: First-pass scores, one per person, in cohort order

    Returns:
        New UserScores in the same order with the percentile fields filled
    """
    rows: list[dict[ScoreKey, float]] = [
        {"productivity": s.productivity, "quality": s.quality, "versatility": s.versatility}
        for s in scores
    ]
    sorted_scores = build_sorted_values(rows, SCORE_KEYS)
    return [
        UserScores(
            productivity=s.productivity,
            quality=s.quality,
            versatility=s.versatility,
            productivity_percentile=percentile_from_sorted(s.productivity, sorted_scores["productivity"], True),
            quality_percentile=percentile_from_sorted(s.quality, sorted_scores["quality"], True),
            versatility_percentile=percentile_from_sorted(s.versatility, sorted_scores["versatility"], True),
        )
        for s in scores
    ]
