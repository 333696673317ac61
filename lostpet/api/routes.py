"""FastAPI routes for lost pets, sightings, alerts and the dashboard."""

from __future__ import annotations

import logging
from pathlib import Path

from fastapi import APIRouter, HTTPException, Query, Request, status
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from lostpet.data.schemas import (
    AlertResponse,
    GeoPoint,
    LostPetRecord,
    MapOverlay,
    MatchResponse,
    Notification,
    RiskResponse,
    ScoredMatch,
    SearchZone,
    Settings,
    SightingRecord,
)
from lostpet.data.seed import BREEDS_BY_SPECIES
from lostpet.matching.clock import is_future
from lostpet.tracker import LostPetTracker

logger = logging.getLogger(__name__)

router = APIRouter()
templates = Jinja2Templates(directory=str(Path(__file__).parent / "templates"))


def _tracker(request: Request) -> LostPetTracker:
    return request.app.state.tracker


def _require_lost(tracker: LostPetTracker, pet_id: str) -> LostPetRecord:
    pet = tracker.get_lost(pet_id)
    if pet is None:
        raise HTTPException(status.HTTP_404_NOT_FOUND, f"Lost pet {pet_id} not found")
    return pet


def _reject_future(tracker: LostPetTracker, value: str, field_name: str) -> None:
    """Refuse reports dated after the current time."""
    if is_future(value, tracker.clock):
        raise HTTPException(
            422,
            f"Invalid {field_name}: future dates are not allowed.",
        )


@router.get("/", response_class=HTMLResponse)
async def home(request: Request) -> HTMLResponse:
    """Dashboard with the user's lost pets, latest matches and inbox."""
    tracker = _tracker(request)
    my_pets = [(pet, tracker.zone_for(pet)) for pet in tracker.my_lost_pets()]
    return templates.TemplateResponse(
        request,
        "home.html",
        {
            "my_pets": my_pets,
            "focus_id": tracker.focus_id,
            "results": tracker.latest_results,
            "notifications": tracker.notifications,
            "unread": tracker.unread_count(),
            "preferences": tracker.preferences,
            "lost_count": len(tracker.lost_pets),
            "sighting_count": len(tracker.sightings),
        },
    )


@router.get("/health")
async def health_check(request: Request) -> dict:
    """Health check endpoint for monitoring.

    Returns:
        Dict with record counts.
    """
    tracker = _tracker(request)
    return {
        "status": "healthy",
        "lost_pets": len(tracker.lost_pets),
        "sightings": len(tracker.sightings),
    }


@router.get("/api/breeds")
async def list_breeds() -> dict[str, dict[str, str]]:
    return BREEDS_BY_SPECIES


# ---------------------------------------------------------------------------
# Lost pets
# ---------------------------------------------------------------------------

@router.get("/api/lost", response_model=list[LostPetRecord])
async def list_lost(request: Request, mine: bool = False) -> list[LostPetRecord]:
    """List lost pets; ``mine=true`` restricts to the user's own reports."""
    tracker = _tracker(request)
    return tracker.my_lost_pets() if mine else tracker.lost_pets


@router.post(
    "/api/lost",
    response_model=MatchResponse,
    status_code=status.HTTP_201_CREATED,
)
async def report_lost(request: Request, record: LostPetRecord) -> MatchResponse:
    """Report the user's lost pet and return ranked sightings.

    Args:
        request: FastAPI request object.
        record: The lost pet to store.

    Returns:
        The stored record, its search zone and ranked matches.
    """
    tracker = _tracker(request)
    _reject_future(tracker, record.last_seen_at, "last_seen_at")
    matches = tracker.report_lost(record)
    return MatchResponse(lost=record, zone=tracker.zone_for(record), matches=matches)


@router.get("/api/lost/{pet_id}", response_model=LostPetRecord)
async def get_lost(request: Request, pet_id: str) -> LostPetRecord:
    return _require_lost(_tracker(request), pet_id)


@router.delete("/api/lost/{pet_id}", status_code=status.HTTP_204_NO_CONTENT)
async def mark_found(request: Request, pet_id: str) -> None:
    """Remove a lost pet once it has been found."""
    if not _tracker(request).mark_found(pet_id):
        raise HTTPException(status.HTTP_404_NOT_FOUND, f"Lost pet {pet_id} not found")


@router.get("/api/lost/{pet_id}/matches", response_model=list[ScoredMatch])
async def lost_matches(request: Request, pet_id: str, top_k: int | None = None) -> list[ScoredMatch]:
    """Rank current sightings against a stored lost pet."""
    tracker = _tracker(request)
    matches = tracker.matches_for(_require_lost(tracker, pet_id))
    return matches[:top_k] if top_k is not None else matches


@router.get("/api/lost/{pet_id}/zone", response_model=SearchZone)
async def lost_zone(request: Request, pet_id: str) -> SearchZone:
    tracker = _tracker(request)
    return tracker.zone_for(_require_lost(tracker, pet_id))


@router.post("/api/lost/{pet_id}/focus", status_code=status.HTTP_204_NO_CONTENT)
async def focus_lost(request: Request, pet_id: str) -> None:
    tracker = _tracker(request)
    _require_lost(tracker, pet_id)
    tracker.set_focus(pet_id)


# ---------------------------------------------------------------------------
# Sightings, risk and map
# ---------------------------------------------------------------------------

@router.get("/api/sightings", response_model=list[SightingRecord])
async def list_sightings(request: Request) -> list[SightingRecord]:
    return _tracker(request).sightings


@router.post(
    "/api/sightings",
    response_model=SightingRecord,
    status_code=status.HTTP_201_CREATED,
)
async def add_sighting(request: Request, record: SightingRecord) -> SightingRecord:
    tracker = _tracker(request)
    _reject_future(tracker, record.time, "time")
    tracker.add_sighting(record)
    return record


@router.get("/api/risk", response_model=RiskResponse)
async def area_risk(
    request: Request,
    lat: float = Query(ge=-90, le=90),  # noqa: B008
    lng: float = Query(ge=-180, le=180),  # noqa: B008
) -> RiskResponse:
    """Classify the area around a point from recent sightings."""
    location = GeoPoint(lat=lat, lng=lng)
    return RiskResponse(location=location, risk=_tracker(request).risk_at(location))


@router.get("/api/map", response_model=MapOverlay)
async def map_overlay(request: Request, pet_id: str | None = None) -> MapOverlay:
    tracker = _tracker(request)
    if pet_id is not None:
        _require_lost(tracker, pet_id)
    return tracker.map_overlay(pet_id)


# ---------------------------------------------------------------------------
# Simulated second user
# ---------------------------------------------------------------------------

@router.post("/api/simulate/lost", response_model=AlertResponse)
async def simulate_lost(request: Request, record: LostPetRecord) -> AlertResponse:
    """Another user reports a lost pet; alert if the local user is nearby."""
    tracker = _tracker(request)
    _reject_future(tracker, record.last_seen_at, "last_seen_at")
    return AlertResponse(notification=tracker.other_user_lost_added(record))


@router.post("/api/simulate/sightings", response_model=AlertResponse)
async def simulate_sighting(request: Request, record: SightingRecord) -> AlertResponse:
    """Another user reports a sighting; alert if it matches one of the user's pets."""
    tracker = _tracker(request)
    _reject_future(tracker, record.time, "time")
    return AlertResponse(notification=tracker.other_user_sighting_added(record))


@router.delete("/api/simulate", status_code=status.HTTP_204_NO_CONTENT)
async def clear_simulated(
    request: Request, lost: bool = True, sightings: bool = True
) -> None:
    _tracker(request).clear_other_user(lost=lost, sightings=sightings)


# ---------------------------------------------------------------------------
# Notifications and settings
# ---------------------------------------------------------------------------

@router.get("/api/notifications", response_model=list[Notification])
async def list_notifications(
    request: Request, unread_only: bool = False
) -> list[Notification]:
    """Inbox, newest first."""
    notifications = _tracker(request).notifications
    if unread_only:
        return [n for n in notifications if not n.read]
    return notifications


@router.post("/api/notifications/read-all", status_code=status.HTTP_204_NO_CONTENT)
async def read_all_notifications(request: Request) -> None:
    _tracker(request).mark_all_read()


@router.post(
    "/api/notifications/{notification_id}/read",
    status_code=status.HTTP_204_NO_CONTENT,
)
async def read_notification(request: Request, notification_id: str) -> None:
    if not _tracker(request).mark_read(notification_id):
        raise HTTPException(
            status.HTTP_404_NOT_FOUND, f"Notification {notification_id} not found"
        )


@router.delete("/api/notifications", status_code=status.HTTP_204_NO_CONTENT)
async def clear_notifications(request: Request) -> None:
    _tracker(request).clear_notifications()


@router.get("/api/settings", response_model=Settings)
async def get_settings(request: Request) -> Settings:
    tracker = _tracker(request)
    return Settings(user=tracker.user, preferences=tracker.preferences)


@router.put("/api/settings", response_model=Settings)
async def save_settings(request: Request, settings: Settings) -> Settings:
    _tracker(request).save_settings(settings.user, settings.preferences)
    return settings


# ---------------------------------------------------------------------------
# Data admin
# ---------------------------------------------------------------------------

@router.post("/api/data/reset", status_code=status.HTTP_204_NO_CONTENT)
async def reset_data(request: Request) -> None:
    """Restore the example lost pets and sightings."""
    _tracker(request).reset_to_seed()


@router.delete("/api/data", status_code=status.HTTP_204_NO_CONTENT)
async def clear_data(request: Request) -> None:
    _tracker(request).clear_all()
