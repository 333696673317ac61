"""Turn new reports from other users into inbox notifications.

Each triggering record is evaluated exactly once, when it is reported. The
engine itself is stateless: it returns a Notification (or None) and the
caller decides where to store it.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable

from lostpet.config import Config
from lostpet.data.schemas import (
    AreaRisk,
    LostPetRecord,
    Notification,
    NotificationType,
    SightingRecord,
    Urgency,
    UserLocation,
    UserPreferences,
)
from lostpet.matching.clock import Clock, hours_between, system_clock
from lostpet.matching.geo import distance_km
from lostpet.matching.matcher import rank_matches
from lostpet.matching.risk import assess_risk
from lostpet.matching.search_zone import compute_zone

logger = logging.getLogger(__name__)


def urgency_from(risk: AreaRisk, hours: float) -> Urgency:
    """Map area risk and elapsed hours to a notification urgency."""
    if risk == AreaRisk.CRITICAL:
        return Urgency.HIGH
    if hours < 6:
        return Urgency.HIGH
    if risk == AreaRisk.NORMAL:
        return Urgency.MEDIUM
    return Urgency.LOW


class AlertEngine:
    """Evaluate lost-nearby and sighting-match triggers.

    Args:
        config: Thresholds, risk parameters and scoring weights.
        clock: Source of "now" for elapsed-time computations.
    """

    def __init__(self, config: Config, clock: Clock = system_clock) -> None:
        self.config = config
        self.clock = clock

    def on_lost_added(
        self,
        lost: LostPetRecord,
        user: UserLocation,
        preferences: UserPreferences,
        sightings: Iterable[SightingRecord],
    ) -> Notification | None:
        """Notify if the user stands inside a newly reported pet's search zone.

        The user must also be within their own alert radius of the pet.
        """
        if preferences.frequency == "mute":
            logger.debug("Alerts muted, skipping lost-nearby for %s", lost.id)
            return None

        zone = compute_zone(
            lost.last_seen_at,
            gps_enabled=lost.gps_enabled,
            special_needs=lost.special_needs,
            clock=self.clock,
        )
        d_km = distance_km(lost.location.lat, lost.location.lng, user.lat, user.lng)
        # None or 0 both mean "no limit"
        alert_radius = preferences.alert_radius_km or math.inf

        if d_km > zone.radius_km or d_km > alert_radius:
            logger.debug(
                "Lost pet %s is %.2f km away (zone %.2f km, alert radius %s), no alert",
                lost.id, d_km, zone.radius_km, preferences.alert_radius_km,
            )
            return None

        risk = self._risk_at(lost, sightings)
        urgency = urgency_from(risk, zone.elapsed_hours)
        notification = Notification(
            type=NotificationType.LOST_NEARBY,
            urgency=urgency,
            timestamp=self._now(),
            message=(
                f"Lost pet reported near you (~{d_km:.1f} km). "
                f"Suggested search radius {zone.radius_km:g} km ({risk.value})."
            ),
            payload={
                "lost": lost.model_dump(mode="json"),
                "distance_km": round(d_km, 2),
                "zone_km": zone.radius_km,
                "risk": risk.value,
            },
        )
        logger.info("Lost-nearby alert %s for %s (%s)", notification.id, lost.id, urgency.value)
        return notification

    def on_sighting_added(
        self,
        sighting: SightingRecord,
        my_lost_pets: Iterable[LostPetRecord],
        preferences: UserPreferences,
        sightings: Iterable[SightingRecord],
    ) -> Notification | None:
        """Notify if a new sighting scores high enough against one of the user's pets."""
        if preferences.frequency == "mute":
            logger.debug("Alerts muted, skipping sighting-match for %s", sighting.id)
            return None

        best_lost: LostPetRecord | None = None
        best_match = None
        for lost in my_lost_pets:
            if lost.species != sighting.species:
                continue
            ranked = rank_matches(
                lost,
                [sighting],
                clock=self.clock,
                weights=self.config.scoring_weights,
                size_rule=self.config.size_rule,
            )
            # Strict comparison keeps the earliest pet on ties
            if ranked and (
                best_match is None
                or ranked[0].total_confidence > best_match.total_confidence
            ):
                best_lost, best_match = lost, ranked[0]

        if best_match is None or best_lost is None:
            return None
        if best_match.total_confidence < self.config.match_threshold:
            logger.debug(
                "Best match for sighting %s scored %d, below %d",
                sighting.id, best_match.total_confidence, self.config.match_threshold,
            )
            return None

        risk = self._risk_at(sighting, sightings)
        hours = hours_between(sighting.time, best_lost.last_seen_at, self.clock)
        urgency = urgency_from(risk, hours)
        notification = Notification(
            type=NotificationType.SIGHTING_MATCH,
            urgency=urgency,
            timestamp=self._now(),
            message=(
                f"Possible match for your pet (score {best_match.total_confidence}). "
                f"Distance ~{best_match.distance_km} km."
            ),
            payload={
                "lost": best_lost.model_dump(mode="json"),
                "sighting": sighting.model_dump(mode="json"),
                "match": best_match.model_dump(mode="json", exclude={"sighting"}),
                "risk": risk.value,
            },
        )
        logger.info(
            "Sighting-match alert %s: %s vs %s scored %d",
            notification.id, sighting.id, best_lost.id, best_match.total_confidence,
        )
        return notification

    def _risk_at(
        self,
        record: LostPetRecord | SightingRecord,
        sightings: Iterable[SightingRecord],
    ) -> AreaRisk:
        return assess_risk(
            record.location,
            sightings,
            clock=self.clock,
            radius_km=self.config.risk_radius_km,
            window_hours=self.config.risk_window_hours,
            critical_count=self.config.risk_critical_count,
        )

    def _now(self) -> str:
        return self.clock().isoformat(timespec="seconds")
