"""Attribute, range and aggregate scoring for lost-pet matching.

Every scorer returns an integer in ``[0, 100]``. The weighted aggregate is the
single source of truth for match confidence; weights and lookup tables are
module constants so alternate formula variants can be swapped in through
configuration instead of editing call sites.
"""

from __future__ import annotations

import math
import re
from collections.abc import Mapping

DEFAULT_WEIGHTS: dict[str, float] = {
    "distance": 0.30,
    "time": 0.20,
    "breed": 0.25,
    "color": 0.15,
    "size": 0.05,
    "age": 0.05,
}

# Unordered breed pairs with a known visual similarity (0-1).
BREED_SIMILARITY: dict[frozenset[str], float] = {
    frozenset({"golden_retriever", "labrador_retriever"}): 0.8,
}

# Same species, different breed, unknown relation.
BREED_FALLBACK_SCORE = 25

SIZE_ORDER: dict[str, int] = {"small": 0, "medium": 1, "large": 2}
TIERED_SIZE_MATRIX: tuple[tuple[int, ...], ...] = (
    (100, 50, 0),
    (50, 100, 50),
    (0, 50, 100),
)
SIZE_RULES = frozenset({"strict", "tiered"})

MAX_DISTANCE_KM = 15.0
MAX_TIME_HOURS = 72.0

_COLOR_SPLIT = re.compile(r"[\s,/]+")


def round_half_up(value: float) -> int:
    """Round to the nearest integer, with halves going up (62.5 -> 63)."""
    return math.floor(value + 0.5)


def validate_weights(weights: Mapping[str, float]) -> None:
    """Check a weight set covers every factor and sums to 1.0.

    Raises:
        ValueError: If a factor is missing or the weights do not sum to 1.0.
    """
    missing = set(DEFAULT_WEIGHTS) - set(weights)
    if missing:
        raise ValueError(f"Missing scoring weights: {sorted(missing)}")
    total = sum(weights[name] for name in DEFAULT_WEIGHTS)
    if not math.isclose(total, 1.0, abs_tol=1e-9):
        raise ValueError(f"Scoring weights must sum to 1.0, got {total:.4f}")


def breed_score(a: str | None, b: str | None) -> int:
    """Score breed similarity: exact, known-similar pair, or flat fallback."""
    if not a or not b:
        return 0
    if a == b:
        return 100
    similarity = BREED_SIMILARITY.get(frozenset({a, b}))
    if similarity is not None:
        return round_half_up(similarity * 100)
    return BREED_FALLBACK_SCORE


def _color_tokens(value: str) -> set[str]:
    return {token for token in _COLOR_SPLIT.split(value) if token}


def color_score(a: str | None, b: str | None) -> int:
    """Score colour descriptions.

    100 on a case-insensitive full match, 50 when the descriptions share at
    least one token (``"gray white"`` vs ``"gray"``), otherwise 0.
    """
    if not a or not b:
        return 0
    left = str(a).lower()
    right = str(b).lower()
    if left == right:
        return 100
    if _color_tokens(left) & _color_tokens(right):
        return 50
    return 0


def size_score(a: str | None, b: str | None, rule: str = "strict") -> int:
    """Score size categories.

    Args:
        a: Size of the first animal.
        b: Size of the second animal.
        rule: ``"strict"`` (equal or nothing) or ``"tiered"`` (adjacent
            categories score 50).

    Returns:
        Integer score in [0, 100].
    """
    if not a or not b:
        return 0
    i = SIZE_ORDER.get(a.lower())
    j = SIZE_ORDER.get(b.lower())
    if i is None or j is None:
        return 0
    if rule == "tiered":
        return TIERED_SIZE_MATRIX[i][j]
    return 100 if i == j else 0


def age_score(a: str | None, b: str | None) -> int:
    """Score life-stage categories: 100 if equal, else 0."""
    if not a or not b:
        return 0
    return 100 if a == b else 0


def distance_score(km: float) -> int:
    """Linear decay from 100 at 0 km to 0 at 15 km and beyond."""
    ratio = 1 - min(km, MAX_DISTANCE_KM) / MAX_DISTANCE_KM
    return min(100, max(0, round_half_up(ratio * 100)))


def time_score(hours: float) -> int:
    """Linear decay from 100 at 0 h to 0 at 72 h and beyond."""
    ratio = 1 - min(hours, MAX_TIME_HOURS) / MAX_TIME_HOURS
    return min(100, max(0, round_half_up(ratio * 100)))


def total_confidence(
    distance_km: float,
    hours_diff: float,
    breed: int,
    color: int,
    size: int,
    age: int,
    weights: Mapping[str, float] = DEFAULT_WEIGHTS,
) -> int:
    """Combine sub-scores into one weighted confidence.

    Args:
        distance_km: Distance between the lost pet and the sighting.
        hours_diff: Hours between last-seen and sighting time.
        breed: Breed sub-score.
        color: Colour sub-score.
        size: Size sub-score.
        age: Age sub-score.
        weights: Factor weights summing to 1.0.

    Returns:
        Confidence rounded to the nearest integer, within [0, 100].
    """
    weighted = (
        weights["distance"] * distance_score(distance_km)
        + weights["time"] * time_score(hours_diff)
        + weights["breed"] * breed
        + weights["color"] * color
        + weights["size"] * size
        + weights["age"] * age
    )
    return min(100, max(0, round_half_up(weighted)))


def format_formula(
    sub_scores: Mapping[str, int],
    weights: Mapping[str, float] = DEFAULT_WEIGHTS,
) -> str:
    """Render the weighted sum with its sub-scores, e.g. ``0.30*87 + ...``."""
    return " + ".join(
        f"{weights[name]:.2f}*{sub_scores[name]}" for name in DEFAULT_WEIGHTS
    )
