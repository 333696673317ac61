"""Rank sightings against a lost pet."""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from lostpet.data.schemas import LostPetRecord, ScoredMatch, SightingRecord
from lostpet.matching.clock import Clock, hours_between, system_clock
from lostpet.matching.geo import distance_km
from lostpet.matching.scoring import (
    DEFAULT_WEIGHTS,
    age_score,
    breed_score,
    color_score,
    distance_score,
    format_formula,
    size_score,
    time_score,
    total_confidence,
)


def score_match(
    lost: LostPetRecord,
    sighting: SightingRecord,
    clock: Clock = system_clock,
    weights: Mapping[str, float] = DEFAULT_WEIGHTS,
    size_rule: str = "strict",
) -> ScoredMatch:
    """Score one sighting against one lost pet.

    Species is not checked here; callers filter first.

    Args:
        lost: The lost pet record.
        sighting: Candidate sighting.
        clock: Source of "now" for unparseable timestamps.
        weights: Aggregation weights.
        size_rule: ``"strict"`` or ``"tiered"`` size scoring.

    Returns:
        ScoredMatch with every sub-score and the total confidence.
    """
    d_km = distance_km(
        lost.location.lat, lost.location.lng,
        sighting.location.lat, sighting.location.lng,
    )
    h_diff = hours_between(sighting.time, lost.last_seen_at, clock)

    sub_scores = {
        "distance": distance_score(d_km),
        "time": time_score(h_diff),
        "breed": breed_score(lost.breed, sighting.breed),
        "color": color_score(lost.color, sighting.color),
        "size": size_score(lost.size, sighting.size, rule=size_rule),
        "age": age_score(lost.age, sighting.age),
    }
    confidence = total_confidence(
        d_km,
        h_diff,
        sub_scores["breed"],
        sub_scores["color"],
        sub_scores["size"],
        sub_scores["age"],
        weights=weights,
    )

    return ScoredMatch(
        sighting=sighting,
        distance_km=round(d_km, 2),
        time_diff_hours=round(h_diff, 1),
        breed_score=sub_scores["breed"],
        color_score=sub_scores["color"],
        size_score=sub_scores["size"],
        age_score=sub_scores["age"],
        distance_score=sub_scores["distance"],
        time_score=sub_scores["time"],
        total_confidence=confidence,
        explanation=format_formula(sub_scores, weights),
    )


def rank_matches(
    lost: LostPetRecord,
    sightings: Iterable[SightingRecord],
    clock: Clock = system_clock,
    weights: Mapping[str, float] = DEFAULT_WEIGHTS,
    size_rule: str = "strict",
) -> list[ScoredMatch]:
    """Score every same-species sighting and sort by confidence.

    The sort is stable, so equal confidences keep their input order.

    Returns:
        Matches ordered by descending ``total_confidence``; empty when no
        sighting shares the lost pet's species.
    """
    scored = [
        score_match(lost, sighting, clock=clock, weights=weights, size_rule=size_rule)
        for sighting in sightings
        if sighting.species == lost.species
    ]
    return sorted(scored, key=lambda match: match.total_confidence, reverse=True)
