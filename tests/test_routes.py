"""Tests for lostpet/api/routes.py."""

from __future__ import annotations

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from lostpet.api.routes import router
from lostpet.tracker import LostPetTracker

LOST_PAYLOAD = {
    "name": "Milo",
    "species": "dog",
    "breed": "labrador_retriever",
    "color": "black",
    "size": "large",
    "age": "adult",
    "last_seen_at": "2025-09-01T20:30",
    "location": {"lat": 13.745, "lng": 100.534},
}

SIGHTING_PAYLOAD = {
    "species": "dog",
    "breed": "labrador_retriever",
    "color": "black",
    "time": "2025-09-01T21:00",
    "location": {"lat": 13.745, "lng": 100.535},
}


@pytest.fixture
def mock_app(tracker: LostPetTracker) -> FastAPI:
    """Create a FastAPI app with a tracker on a temp store."""
    app = FastAPI()
    app.include_router(router)
    app.state.tracker = tracker
    app.state.config = tracker.config
    return app


@pytest.fixture
def client(mock_app: FastAPI) -> TestClient:
    """Create a test client."""
    return TestClient(mock_app)


class TestHomeRoute:
    """Tests for the dashboard page."""

    def test_home_returns_200(self, client: TestClient) -> None:
        response = client.get("/")
        assert response.status_code == 200
        assert "Lost Pet Finder" in response.text

    def test_home_lists_my_pets(self, client: TestClient) -> None:
        client.post("/api/lost", json=LOST_PAYLOAD)
        response = client.get("/")
        assert "Milo" in response.text
        assert "Recommended search zone" in response.text


class TestHealthRoute:
    """Tests for health check endpoint."""

    def test_health_check(self, client: TestClient) -> None:
        data = client.get("/health").json()
        assert data["status"] == "healthy"
        assert data["lost_pets"] == 8
        assert data["sightings"] == 3


class TestLostRoutes:
    """Tests for lost-pet endpoints."""

    def test_report_returns_ranked_matches(self, client: TestClient) -> None:
        response = client.post("/api/lost", json=LOST_PAYLOAD)
        assert response.status_code == 201
        data = response.json()
        assert data["lost"]["id"].startswith("LP")
        assert data["zone"]["radius_km"] == 5
        assert data["matches"][0]["sighting"]["id"] == "SG101"
        confidences = [m["total_confidence"] for m in data["matches"]]
        assert confidences == sorted(confidences, reverse=True)

    def test_future_last_seen_rejected(self, client: TestClient) -> None:
        payload = {**LOST_PAYLOAD, "last_seen_at": "2030-01-01T00:00"}
        response = client.post("/api/lost", json=payload)
        assert response.status_code == 422
        assert "future" in response.json()["detail"]

    def test_invalid_species_rejected(self, client: TestClient) -> None:
        response = client.post("/api/lost", json={**LOST_PAYLOAD, "species": "parrot"})
        assert response.status_code == 422

    def test_list_mine(self, client: TestClient) -> None:
        assert len(client.get("/api/lost").json()) == 8
        assert client.get("/api/lost?mine=true").json() == []
        client.post("/api/lost", json=LOST_PAYLOAD)
        assert len(client.get("/api/lost?mine=true").json()) == 1

    def test_matches_zone_and_focus(self, client: TestClient) -> None:
        matches = client.get("/api/lost/LP002/matches?top_k=1").json()
        assert len(matches) == 1
        assert matches[0]["sighting"]["id"] == "SG101"
        zone = client.get("/api/lost/LP002/zone").json()
        assert set(zone) == {"radius_km", "elapsed_hours", "tier_label"}
        assert client.post("/api/lost/LP002/focus").status_code == 204
        assert client.get("/api/map").json()["zone"]["pet_id"] == "LP002"

    def test_found_removes_record(self, client: TestClient) -> None:
        assert client.delete("/api/lost/LP001").status_code == 204
        assert client.get("/api/lost/LP001").status_code == 404
        assert client.delete("/api/lost/LP001").status_code == 404

    def test_unknown_pet(self, client: TestClient) -> None:
        assert client.get("/api/lost/nope/matches").status_code == 404
        assert client.get("/api/lost/nope/zone").status_code == 404
        assert client.get("/api/map?pet_id=nope").status_code == 404


class TestSightingRoutes:
    """Tests for sighting and risk endpoints."""

    def test_add_sighting(self, client: TestClient) -> None:
        response = client.post("/api/sightings", json=SIGHTING_PAYLOAD)
        assert response.status_code == 201
        assert response.json()["id"].startswith("SG")
        assert len(client.get("/api/sightings").json()) == 4

    def test_future_sighting_rejected(self, client: TestClient) -> None:
        payload = {**SIGHTING_PAYLOAD, "time": "2030-01-01T00:00"}
        assert client.post("/api/sightings", json=payload).status_code == 422

    def test_risk(self, client: TestClient) -> None:
        data = client.get("/api/risk?lat=13.742&lng=100.541").json()
        assert data["risk"] == "normal"

    def test_risk_rejects_bad_coordinates(self, client: TestClient) -> None:
        assert client.get("/api/risk?lat=120&lng=100").status_code == 422


class TestAlertRoutes:
    """Tests for simulated reports, the inbox and settings."""

    def test_sighting_alert_flow(self, client: TestClient) -> None:
        client.post("/api/lost", json=LOST_PAYLOAD)
        data = client.post("/api/simulate/sightings", json=SIGHTING_PAYLOAD).json()
        notification = data["notification"]
        assert notification["type"] == "sighting-match"
        assert notification["read"] is False

        inbox = client.get("/api/notifications").json()
        assert [n["id"] for n in inbox] == [notification["id"]]

        path = f"/api/notifications/{notification['id']}/read"
        assert client.post(path).status_code == 204
        assert client.get("/api/notifications?unread_only=true").json() == []

        assert client.delete("/api/notifications").status_code == 204
        assert client.get("/api/notifications").json() == []

    def test_unknown_notification(self, client: TestClient) -> None:
        assert client.post("/api/notifications/NT0/read").status_code == 404

    def test_lost_alert_flow(self, client: TestClient) -> None:
        payload = {**LOST_PAYLOAD, "location": {"lat": 13.7573, "lng": 100.5018}}
        data = client.post("/api/simulate/lost", json=payload).json()
        assert data["notification"]["type"] == "lost-nearby"
        assert client.post("/api/notifications/read-all").status_code == 204
        assert all(n["read"] for n in client.get("/api/notifications").json())

    def test_mute_via_settings(self, client: TestClient) -> None:
        settings = {
            "user": {"lat": 13.7563, "lng": 100.5018},
            "preferences": {"alert_radius_km": 5, "frequency": "mute"},
        }
        assert client.put("/api/settings", json=settings).status_code == 200
        assert client.get("/api/settings").json()["preferences"]["frequency"] == "mute"

        payload = {**LOST_PAYLOAD, "location": {"lat": 13.7563, "lng": 100.5018}}
        data = client.post("/api/simulate/lost", json=payload).json()
        assert data["notification"] is None

    def test_clear_simulated(self, client: TestClient, tracker: LostPetTracker) -> None:
        client.post("/api/simulate/sightings", json=SIGHTING_PAYLOAD)
        assert client.delete("/api/simulate").status_code == 204
        assert tracker.other_sightings == []


class TestDataRoutes:
    """Tests for resetting and clearing stored data."""

    def test_clear_and_reset(self, client: TestClient) -> None:
        assert client.delete("/api/data").status_code == 204
        assert client.get("/api/lost").json() == []
        assert client.post("/api/data/reset").status_code == 204
        assert len(client.get("/api/lost").json()) == 8

    def test_breeds(self, client: TestClient) -> None:
        data = client.get("/api/breeds").json()
        assert "golden_retriever" in data["dog"]
        assert "siamese" in data["cat"]
