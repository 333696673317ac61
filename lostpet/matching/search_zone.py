"""Recommended search radius from elapsed time and pet modifiers.

Base radius grows with the time since the pet was last seen:

    < 6 h  -> 2 km
    < 24 h -> 5 km
    < 72 h -> 10 km
    >= 72 h -> 15 km

A GPS tracker clamps the radius to at most 1 km; special needs (slower
movement) then shrink it by 40%.
"""

from __future__ import annotations

import math

from lostpet.data.schemas import SearchZone
from lostpet.matching.clock import Clock, hours_since, system_clock

# (upper bound in hours, radius km, label)
RADIUS_TIERS: tuple[tuple[float, float, str], ...] = (
    (6.0, 2.0, "< 6h"),
    (24.0, 5.0, "< 24h"),
    (72.0, 10.0, "< 72h"),
    (math.inf, 15.0, ">= 72h"),
)

GPS_MAX_RADIUS_KM = 1.0
SPECIAL_NEEDS_FACTOR = 0.6


def _tier(hours: float) -> tuple[float, float, str]:
    for tier in RADIUS_TIERS:
        if hours < tier[0]:
            return tier
    return RADIUS_TIERS[-1]


def base_radius_km(hours: float) -> float:
    """Radius for the elapsed-hours bracket, before modifiers."""
    return _tier(hours)[1]


def tier_label(hours: float) -> str:
    """Human-readable bracket, e.g. ``"< 24h -> 5 km"``."""
    _, radius, label = _tier(hours)
    return f"{label} -> {radius:g} km"


def compute_zone(
    last_seen_at: str | None,
    gps_enabled: bool = False,
    special_needs: bool = False,
    clock: Clock = system_clock,
) -> SearchZone:
    """Compute the recommended search zone for a lost pet.

    Args:
        last_seen_at: When the pet was last seen; unparseable means now.
        gps_enabled: Pet wears a GPS tracker.
        special_needs: Pet moves slowly or needs care.
        clock: Source of "now".

    Returns:
        SearchZone with the radius rounded to two decimals.
    """
    hours = hours_since(last_seen_at, clock)
    radius = base_radius_km(hours)
    if gps_enabled:
        radius = min(radius, GPS_MAX_RADIUS_KM)
    if special_needs:
        radius *= SPECIAL_NEEDS_FACTOR
    return SearchZone(
        radius_km=round(radius, 2),
        elapsed_hours=hours,
        tier_label=tier_label(hours),
    )
