"""Pydantic models for records, derived results and API envelopes."""

from __future__ import annotations

import random
import string
import time
from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, Field

Species = Literal["dog", "cat"]
Size = Literal["small", "medium", "large", ""]

_BASE36 = string.digits + string.ascii_lowercase


def _to_base36(number: int) -> str:
    digits = []
    while number:
        number, rem = divmod(number, 36)
        digits.append(_BASE36[rem])
    return "".join(reversed(digits)) or "0"


def new_id(prefix: str = "ID") -> str:
    """Generate an opaque record id: prefix + base-36 time + random suffix."""
    stamp = _to_base36(int(time.time() * 1000))
    suffix = "".join(random.choices(_BASE36, k=4))
    return (prefix + stamp + suffix).upper()


class GeoPoint(BaseModel):
    """A latitude/longitude pair in decimal degrees."""

    lat: float = Field(ge=-90, le=90)
    lng: float = Field(ge=-180, le=180)


class LostPetRecord(BaseModel):
    """A lost pet reported by its owner.

    Immutable once created; the only lifecycle change is deletion when the
    owner marks the pet as found.
    """

    id: str = Field(default_factory=lambda: new_id("LP"), description="Opaque record id")
    name: str = Field(default="", description="Pet name if given")
    species: Species
    breed: str = Field(default="", description="Breed key from the species catalogue")
    color: str = Field(default="", description="Free-text colour tokens")
    size: Size = ""
    age: str = Field(default="", description="Life stage, e.g. puppy/kitten/adult")
    last_seen_at: str = Field(description="ISO-8601 local date-time the pet was last seen")
    location: GeoPoint
    gps_enabled: bool = False
    special_needs: bool = False
    photo: str | None = Field(default=None, description="Opaque photo reference")


class SightingRecord(BaseModel):
    """A sighting of a possibly lost animal."""

    id: str = Field(default_factory=lambda: new_id("SG"), description="Opaque record id")
    species: Species
    breed: str = ""
    color: str = ""
    size: Size = ""
    age: str = ""
    notes: str = ""
    time: str = Field(description="ISO-8601 local date-time of the sighting")
    location: GeoPoint
    photo: str | None = None


class ScoredMatch(BaseModel):
    """A sighting scored against one lost pet."""

    sighting: SightingRecord
    distance_km: float
    time_diff_hours: float
    breed_score: int = Field(ge=0, le=100)
    color_score: int = Field(ge=0, le=100)
    size_score: int = Field(ge=0, le=100)
    age_score: int = Field(ge=0, le=100)
    distance_score: int = Field(ge=0, le=100)
    time_score: int = Field(ge=0, le=100)
    total_confidence: int = Field(ge=0, le=100)
    explanation: str = Field(default="", description="Weighted formula with sub-scores")


class SearchZone(BaseModel):
    """Recommended search radius around the last-seen location."""

    radius_km: float
    elapsed_hours: float
    tier_label: str


class AreaRisk(str, Enum):
    """Local risk level derived from recent nearby sightings."""

    LOW = "low"
    NORMAL = "normal"
    CRITICAL = "critical"


class NotificationType(str, Enum):
    LOST_NEARBY = "lost-nearby"
    SIGHTING_MATCH = "sighting-match"


class Urgency(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class Notification(BaseModel):
    """An inbox entry raised by the alert engine."""

    id: str = Field(default_factory=lambda: new_id("NT"))
    type: NotificationType
    urgency: Urgency = Urgency.LOW
    timestamp: str
    message: str
    payload: dict[str, Any] = Field(default_factory=dict)
    read: bool = False


class UserLocation(BaseModel):
    """Where the local user is."""

    id: str = "ME"
    lat: float = Field(ge=-90, le=90)
    lng: float = Field(ge=-180, le=180)


class UserPreferences(BaseModel):
    """Alert preferences of the local user.

    ``alert_radius_km`` of None or 0 means no distance limit.
    """

    alert_radius_km: float | None = Field(default=5.0, ge=0)
    frequency: Literal["immediate", "mute"] = "immediate"


class Settings(BaseModel):
    """User location and preferences saved together."""

    user: UserLocation
    preferences: UserPreferences


class MatchResponse(BaseModel):
    """Result of reporting a lost pet or re-running its matches."""

    lost: LostPetRecord
    zone: SearchZone
    matches: list[ScoredMatch] = Field(default_factory=list)


class AlertResponse(BaseModel):
    """Outcome of a simulated second-user report."""

    notification: Notification | None = None


class RiskResponse(BaseModel):
    location: GeoPoint
    risk: AreaRisk


class MapMarker(BaseModel):
    id: str
    kind: Literal["lost", "sighting", "user"]
    lat: float
    lng: float
    label: str = ""


class ZoneCircle(BaseModel):
    pet_id: str
    center: GeoPoint
    radius_m: float
    color: str
    zone: SearchZone


class MapOverlay(BaseModel):
    """Everything a map view needs to draw markers and the search zone."""

    markers: list[MapMarker] = Field(default_factory=list)
    zone: ZoneCircle | None = None
