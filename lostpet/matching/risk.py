"""Classify how active an area is from recent nearby sightings."""

from __future__ import annotations

from collections.abc import Iterable

from lostpet.data.schemas import AreaRisk, GeoPoint, SightingRecord
from lostpet.matching.clock import Clock, hours_since, system_clock
from lostpet.matching.geo import distance_km


def count_recent_nearby(
    location: GeoPoint,
    sightings: Iterable[SightingRecord],
    clock: Clock = system_clock,
    radius_km: float = 2.0,
    window_hours: float = 72.0,
) -> int:
    """Count sightings within *radius_km* of *location* in the last *window_hours*."""
    count = 0
    for sighting in sightings:
        if hours_since(sighting.time, clock) > window_hours:
            continue
        d_km = distance_km(
            location.lat, location.lng, sighting.location.lat, sighting.location.lng
        )
        if d_km <= radius_km:
            count += 1
    return count


def assess_risk(
    location: GeoPoint,
    sightings: Iterable[SightingRecord],
    clock: Clock = system_clock,
    radius_km: float = 2.0,
    window_hours: float = 72.0,
    critical_count: int = 5,
) -> AreaRisk:
    """Return ``critical`` for 5+ recent nearby sightings, ``normal`` for 1-4, else ``low``."""
    count = count_recent_nearby(
        location, sightings, clock=clock, radius_km=radius_km, window_hours=window_hours
    )
    if count >= critical_count:
        return AreaRisk.CRITICAL
    if count >= 1:
        return AreaRisk.NORMAL
    return AreaRisk.LOW
