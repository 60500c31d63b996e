"""Archetype and badge classification with seeded (hash-based) flavor picks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Sequence, TypeVar

from .models import PILLAR_KEYS, Archetype, ArchetypeKey, BadgeCategory, MetricKey, PillarKey
from .tables import ScoringTables


T = TypeVar("T")

_INT32_MASK = 0xFFFFFFFF
_INT32_SIGN = 0x80000000


@dataclass(frozen=True)
class ClassificationRules:
    utility_top_share_lt: float  # top pillar share strictly below this can be utility
    utility_min_pillars: int  # ...if at least this many pillars are at/above median
    badge_percentile: float  # percentile needed for the threshold badges
    multi_min_pillars: int


DEFAULT_RULES = ClassificationRules(
    utility_top_share_lt=0.4,
    utility_min_pillars=2,
    badge_percentile=90.0,
    multi_min_pillars=2,
)


def _utf16_units(value: str) -> list[int]:
    data = value.encode("utf-16-le")
    return [int.from_bytes(data[i:i + 2], "little") for i in range(0, len(data), 2)]


def hash_string(value: str) -> int:
    """31-multiplier rolling hash over UTF-16 code units, wrapped to signed 32-bit.

    Returns the absolute value, so results lie in [0, 2**31].
    """
    h = 0
    for unit in _utf16_units(value):
        h = (h * 31 + unit) & _INT32_MASK
    if h & _INT32_SIGN:
        h -= 1 << 32
    return abs(h)


def pick_by_seed(items: Sequence[T], seed: str) -> T:
    """Deterministically pick one item for ``seed``. Same seed, same item."""
    if not items:
        raise ValueError("No items available for selection")
    return items[hash_string(seed) % len(items)]


def user_seed(user_id: str, tech_label: str, name: str) -> str:
    return f"{user_id or tech_label}-{name}"


def classify_archetype_key(
    pillar_totals: Mapping[PillarKey, float],
    pillar_percentiles: Mapping[PillarKey, float],
    above_median_count: int,
    rules: ClassificationRules = DEFAULT_RULES,
) -> ArchetypeKey:
    """
    Pick the archetype category from pillar shares.

    Priority:
    1. Balanced (top share under threshold) with enough pillars at/above median -> utility
    2. No volume at all -> pillar with the best percentile (declaration order on ties)
    3. Otherwise the pillar whose total is the max; assembly is checked before
       sterilize and decon is the fallback, so equal totals never favor decon.
    """
    total = sum(pillar_totals[key] for key in PILLAR_KEYS)
    top = max(pillar_totals[key] for key in PILLAR_KEYS)
    top_share = top / total if total else 0.0

    if top_share < rules.utility_top_share_lt and above_median_count >= rules.utility_min_pillars:
        return "utility"
    if total == 0:
        return max(PILLAR_KEYS, key=lambda key: pillar_percentiles[key])
    if top == pillar_totals["assembly"]:
        return "assembly"
    if top == pillar_totals["sterilize"]:
        return "sterilize"
    return "decon"


def build_archetype(key: ArchetypeKey, seed: str, tables: ScoringTables) -> Archetype:
    option = pick_by_seed(tables.archetype_options[key], f"{seed}-{key}-archetype")
    return Archetype(label=option.label, icon=tables.archetype_icons[key], description=option.description)


def eligible_badges(
    percentiles: Mapping[MetricKey, float],
    pillar_percentiles: Mapping[PillarKey, float],
    above_median_count: int,
    rules: ClassificationRules = DEFAULT_RULES,
) -> list[BadgeCategory]:
    eligible: list[BadgeCategory] = []
    if percentiles["defectRate"] >= rules.badge_percentile:
        eligible.append("quality")
    if percentiles["assembledInst"] >= rules.badge_percentile:
        eligible.append("speed")
    if pillar_percentiles["decon"] >= rules.badge_percentile:
        eligible.append("decon")
    if pillar_percentiles["sterilize"] >= rules.badge_percentile:
        eligible.append("sterilize")
    if above_median_count >= rules.multi_min_pillars:
        eligible.append("multi")
    return eligible


def pick_badges(categories: Sequence[BadgeCategory], seed: str, tables: ScoringTables) -> tuple[str, ...]:
    return tuple(
        pick_by_seed(tables.badge_titles[category], f"{seed}-{category}-strength")
        for category in categories
    )
