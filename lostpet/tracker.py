"""Application state container for lost pets, sightings and the alert inbox.

The tracker owns every mutable collection and writes each change through to
a LocalStore. Scoring, zones, risk and alerts are delegated to the pure
functions in ``lostpet.matching`` and ``lostpet.alerts``.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from pydantic import BaseModel, ValidationError

from lostpet.alerts.engine import AlertEngine
from lostpet.config import Config
from lostpet.data.schemas import (
    AreaRisk,
    GeoPoint,
    LostPetRecord,
    MapMarker,
    MapOverlay,
    Notification,
    ScoredMatch,
    SearchZone,
    SightingRecord,
    UserLocation,
    UserPreferences,
    ZoneCircle,
)
from lostpet.data.seed import seeded_lost_pets, seeded_sightings
from lostpet.data.store import LocalStore
from lostpet.matching.clock import Clock, system_clock
from lostpet.matching.matcher import rank_matches
from lostpet.matching.risk import assess_risk
from lostpet.matching.search_zone import compute_zone

logger = logging.getLogger(__name__)

ZONE_COLOR_SPECIAL_NEEDS = "#ef4444"
ZONE_COLOR_GPS = "#22c55e"
ZONE_COLOR_DEFAULT = "#3b82f6"


def _dump(records: list) -> list[dict]:
    return [record.model_dump(mode="json") for record in records]


class LostPetTracker:
    """Hold and persist the state of one local user.

    Args:
        store: Key-value store the state is loaded from and written to.
        config: Application configuration.
        clock: Source of "now"; injected so tests can pin time.
    """

    def __init__(
        self,
        store: LocalStore,
        config: Config,
        clock: Clock = system_clock,
    ) -> None:
        self.store = store
        self.config = config
        self.clock = clock
        self.alerts = AlertEngine(config, clock=clock)

        self.lost_pets = self._load_records(
            "lost", LostPetRecord, lambda: _dump(seeded_lost_pets())
        )
        self.sightings = self._load_records(
            "sightings", SightingRecord, lambda: _dump(seeded_sightings())
        )
        self.my_lost_ids: list[str] = list(store.get("my_lost_ids", []))
        self.focus_id: str | None = store.get("focus_id", None)
        self.user = self._load_model(
            "user",
            UserLocation,
            lambda: {"id": "ME", "lat": config.default_lat, "lng": config.default_lng},
        )
        self.preferences = self._load_model(
            "prefs",
            UserPreferences,
            lambda: {
                "alert_radius_km": config.default_alert_radius_km,
                "frequency": config.default_frequency,
            },
        )
        self.notifications = self._load_records("notifications", Notification, list)
        self.other_lost = self._load_records("other_lost", LostPetRecord, list)
        self.other_sightings = self._load_records("other_sightings", SightingRecord, list)
        self.latest_results: list[ScoredMatch] = []

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def _load_records(
        self, key: str, model: type[BaseModel], fallback: Callable[[], list[dict]]
    ) -> list:
        """Validate a stored list, replacing it with *fallback* if any item is invalid."""
        raw = self.store.get(key, fallback())
        if isinstance(raw, list):
            try:
                return [model.model_validate(item) for item in raw]
            except ValidationError as exc:
                reason: object = exc
        else:
            reason = f"expected a list, got {type(raw).__name__}"
        logger.warning("Discarding invalid stored %r, using defaults: %s", key, reason)
        records = [model.model_validate(item) for item in fallback()]
        self.store.set(key, _dump(records))
        return records

    def _load_model(
        self, key: str, model: type[BaseModel], fallback: Callable[[], dict]
    ) -> BaseModel:
        try:
            return model.model_validate(self.store.get(key, fallback()))
        except ValidationError as exc:
            logger.warning("Discarding invalid stored %r, using defaults: %s", key, exc)
            value = model.model_validate(fallback())
            self.store.set(key, value.model_dump(mode="json"))
            return value

    def _save_lost(self) -> None:
        self.store.set("lost", _dump(self.lost_pets))

    def _save_sightings(self) -> None:
        self.store.set("sightings", _dump(self.sightings))

    def _save_mine(self) -> None:
        self.store.set("my_lost_ids", self.my_lost_ids)
        self.store.set("focus_id", self.focus_id)

    def _save_notifications(self) -> None:
        self.store.set("notifications", _dump(self.notifications))

    def _save_other_user(self) -> None:
        self.store.set("other_lost", _dump(self.other_lost))
        self.store.set("other_sightings", _dump(self.other_sightings))

    # ------------------------------------------------------------------
    # Lost pets
    # ------------------------------------------------------------------

    def get_lost(self, pet_id: str) -> LostPetRecord | None:
        return next((pet for pet in self.lost_pets if pet.id == pet_id), None)

    def my_lost_pets(self) -> list[LostPetRecord]:
        """Lost pets reported by the local user, in report order."""
        mine = set(self.my_lost_ids)
        return [pet for pet in self.lost_pets if pet.id in mine]

    def focused_pet(self) -> LostPetRecord | None:
        return self.get_lost(self.focus_id) if self.focus_id else None

    def set_focus(self, pet_id: str | None) -> None:
        self.focus_id = pet_id
        self._save_mine()

    def report_lost(self, record: LostPetRecord) -> list[ScoredMatch]:
        """Store a lost pet as the user's own, focus it and rank sightings.

        Returns:
            Ranked matches against every known sighting.
        """
        self.lost_pets.append(record)
        self._save_lost()
        if record.id not in self.my_lost_ids:
            self.my_lost_ids.append(record.id)
        self.focus_id = record.id
        self._save_mine()

        self.latest_results = self.matches_for(record)
        logger.info(
            "Reported lost %s %s (%s), %d candidate sightings",
            record.species, record.id, record.name or "no name", len(self.latest_results),
        )
        return self.latest_results

    def mark_found(self, pet_id: str) -> bool:
        """Delete a lost pet once it is found.

        Returns:
            True if a record was removed.
        """
        before = len(self.lost_pets)
        self.lost_pets = [pet for pet in self.lost_pets if pet.id != pet_id]
        if len(self.lost_pets) == before:
            return False
        self._save_lost()
        self.my_lost_ids = [pid for pid in self.my_lost_ids if pid != pet_id]
        if self.focus_id == pet_id:
            self.focus_id = None
        self._save_mine()
        logger.info("Marked %s as found", pet_id)
        return True

    def matches_for(self, pet: LostPetRecord) -> list[ScoredMatch]:
        return rank_matches(
            pet,
            self.sightings,
            clock=self.clock,
            weights=self.config.scoring_weights,
            size_rule=self.config.size_rule,
        )

    def zone_for(self, pet: LostPetRecord) -> SearchZone:
        return compute_zone(
            pet.last_seen_at,
            gps_enabled=pet.gps_enabled,
            special_needs=pet.special_needs,
            clock=self.clock,
        )

    # ------------------------------------------------------------------
    # Sightings
    # ------------------------------------------------------------------

    def add_sighting(self, record: SightingRecord) -> None:
        self.sightings.append(record)
        self._save_sightings()
        logger.info("Added sighting %s (%s)", record.id, record.species)

    def known_sightings(self) -> list[SightingRecord]:
        """Sightings from the local data plus those from the other user."""
        return [*self.sightings, *self.other_sightings]

    def risk_at(self, location: GeoPoint) -> AreaRisk:
        return assess_risk(
            location,
            self.known_sightings(),
            clock=self.clock,
            radius_km=self.config.risk_radius_km,
            window_hours=self.config.risk_window_hours,
            critical_count=self.config.risk_critical_count,
        )

    # ------------------------------------------------------------------
    # Simulated second user
    # ------------------------------------------------------------------

    def other_user_lost_added(self, record: LostPetRecord) -> Notification | None:
        """Record a lost pet from the other user and evaluate the nearby alert."""
        notification = self.alerts.on_lost_added(
            record, self.user, self.preferences, self.known_sightings()
        )
        self.other_lost.append(record)
        self._save_other_user()
        if notification is not None:
            self._push(notification)
        return notification

    def other_user_sighting_added(self, record: SightingRecord) -> Notification | None:
        """Record a sighting from the other user and evaluate the match alert."""
        notification = self.alerts.on_sighting_added(
            record, self.my_lost_pets(), self.preferences, self.known_sightings()
        )
        self.other_sightings.append(record)
        self._save_other_user()
        if notification is not None:
            self._push(notification)
        return notification

    def clear_other_user(self, lost: bool = True, sightings: bool = True) -> None:
        if lost:
            self.other_lost = []
        if sightings:
            self.other_sightings = []
        self._save_other_user()

    # ------------------------------------------------------------------
    # Inbox
    # ------------------------------------------------------------------

    def _push(self, notification: Notification) -> None:
        self.notifications.insert(0, notification)
        self._save_notifications()

    def mark_read(self, notification_id: str) -> bool:
        for notification in self.notifications:
            if notification.id == notification_id:
                notification.read = True
                self._save_notifications()
                return True
        return False

    def mark_all_read(self) -> None:
        for notification in self.notifications:
            notification.read = True
        self._save_notifications()

    def clear_notifications(self) -> None:
        self.notifications = []
        self._save_notifications()

    def notifications_by_urgency(self) -> dict[str, list[Notification]]:
        grouped: dict[str, list[Notification]] = {"high": [], "medium": [], "low": []}
        for notification in self.notifications:
            grouped[notification.urgency.value].append(notification)
        return grouped

    def unread_count(self) -> int:
        return sum(1 for notification in self.notifications if not notification.read)

    # ------------------------------------------------------------------
    # Settings and data admin
    # ------------------------------------------------------------------

    def save_settings(self, user: UserLocation, preferences: UserPreferences) -> None:
        self.user = user
        self.preferences = preferences
        self.store.set("user", user.model_dump(mode="json"))
        self.store.set("prefs", preferences.model_dump(mode="json"))
        logger.info(
            "Saved settings: radius=%s frequency=%s",
            preferences.alert_radius_km, preferences.frequency,
        )

    def reset_to_seed(self) -> None:
        """Replace lost pets and sightings with the example records."""
        self.lost_pets = seeded_lost_pets()
        self.sightings = seeded_sightings()
        self._reset_mine()
        logger.info("Reset data to %d seeded lost pets", len(self.lost_pets))

    def clear_all(self) -> None:
        self.lost_pets = []
        self.sightings = []
        self._reset_mine()
        logger.info("Cleared all lost pets and sightings")

    def _reset_mine(self) -> None:
        self.my_lost_ids = []
        self.focus_id = None
        self.latest_results = []
        self._save_lost()
        self._save_sightings()
        self._save_mine()

    # ------------------------------------------------------------------
    # Map
    # ------------------------------------------------------------------

    def map_overlay(self, pet_id: str | None = None) -> MapOverlay:
        """Markers for every record plus the search zone of one pet.

        Args:
            pet_id: Pet whose zone to draw; defaults to the focused pet.
        """
        markers = [
            MapMarker(
                id=pet.id, kind="lost", lat=pet.location.lat, lng=pet.location.lng,
                label=pet.name or pet.breed,
            )
            for pet in self.lost_pets
        ]
        markers.extend(
            MapMarker(
                id=s.id, kind="sighting", lat=s.location.lat, lng=s.location.lng,
                label=s.breed,
            )
            for s in self.sightings
        )
        markers.append(
            MapMarker(id=self.user.id, kind="user", lat=self.user.lat, lng=self.user.lng)
        )

        pet = self.get_lost(pet_id) if pet_id else self.focused_pet()
        zone = None
        if pet is not None:
            search_zone = self.zone_for(pet)
            if pet.special_needs:
                color = ZONE_COLOR_SPECIAL_NEEDS
            elif pet.gps_enabled:
                color = ZONE_COLOR_GPS
            else:
                color = ZONE_COLOR_DEFAULT
            zone = ZoneCircle(
                pet_id=pet.id,
                center=pet.location,
                radius_m=search_zone.radius_km * 1000,
                color=color,
                zone=search_zone,
            )
        return MapOverlay(markers=markers, zone=zone)
