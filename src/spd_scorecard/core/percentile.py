"""Mid-rank percentiles against a sorted cohort distribution."""

from __future__ import annotations

from bisect import bisect_left, bisect_right
from typing import Iterable, Mapping, Sequence, TypeVar

import numpy as np


K = TypeVar("K", bound=str)


def clamp(value: float, min_val: float, max_val: float) -> float:
    return max(min_val, min(max_val, value))


def median(values: Iterable[float]) -> float:
    """Median of the values, 0 for an empty sequence."""
    data = list(values)
    if not data:
        return 0.0
    return float(np.median(data))


def percentile_from_sorted(value: float, sorted_values: Sequence[float], higher_better: bool) -> float:
    """
    Oriented mid-rank percentile of ``value`` within ``sorted_values``.

    p = (below + 0.5 * tied) / n * 100, so every tied value gets the same
    percentile. Lower-is-better metrics are flipped to 100 - p so that 100
    always means best.

    Args:
        value: The value to rank
        sorted_values: Cohort values in ascending order
        higher_better: Metric orientation

    Returns:
        Percentile in [0, 100]; 0 when the cohort is empty

    Example:
        >>> percentile_from_sorted(5, [1, 5, 5, 9], True)
        50.0
    """
    n = len(sorted_values)
    if not n:
        return 0.0
    lower = bisect_left(sorted_values, value)
    upper = bisect_right(sorted_values, value)
    p = ((lower + 0.5 * (upper - lower)) / n) * 100
    oriented = p if higher_better else 100 - p
    return clamp(oriented, 0.0, 100.0)


def build_sorted_values(items: Sequence[Mapping[K, float]], keys: Iterable[K]) -> dict[K, list[float]]:
    """Ascending cohort sequence per key."""
    return {key: sorted(item[key] for item in items) for key in keys}


def build_median_map(items: Sequence[Mapping[K, float]], keys: Iterable[K]) -> dict[K, float]:
    return {key: median(item[key] for item in items) for key in keys}


def build_percentiles(
    values: Mapping[K, float],
    sorted_values: Mapping[K, Sequence[float]],
    higher_better: Mapping[K, bool],
) -> dict[K, float]:
    """Percentile for every key of ``values`` against its cohort sequence."""
    return {
        key: percentile_from_sorted(value, sorted_values[key], higher_better[key])
        for key, value in values.items()
    }
