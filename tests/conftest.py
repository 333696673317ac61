"""Shared test fixtures for the Lost Pet Finder test suite."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

import pytest

from lostpet.config import Config
from lostpet.data.schemas import GeoPoint, LostPetRecord, SightingRecord
from lostpet.data.store import LocalStore
from lostpet.matching.clock import Clock
from lostpet.tracker import LostPetTracker

NOW = datetime(2025, 9, 2, 12, 0)


@pytest.fixture
def fixed_clock() -> Clock:
    """Clock pinned to 2025-09-02 12:00 local time."""
    return lambda: NOW


@pytest.fixture
def config(tmp_path: Path) -> Config:
    """Default configuration with the store under a temp directory."""
    return Config(data_dir=tmp_path / "data")


@pytest.fixture
def sample_lost() -> LostPetRecord:
    """A lost golden retriever near central Bangkok."""
    return LostPetRecord(
        id="LP900",
        name="Milo",
        species="dog",
        breed="golden_retriever",
        color="gold",
        size="large",
        age="adult",
        last_seen_at="2025-09-02T10:00",
        location=GeoPoint(lat=13.7563, lng=100.5018),
    )


@pytest.fixture
def sample_sighting() -> SightingRecord:
    """A golden retriever sighting a few hundred metres away."""
    return SightingRecord(
        id="SG900",
        species="dog",
        breed="golden_retriever",
        color="gold",
        size="large",
        age="adult",
        notes="Near the market",
        time="2025-09-02T11:00",
        location=GeoPoint(lat=13.7583, lng=100.5030),
    )


@pytest.fixture
def store(tmp_path: Path) -> LocalStore:
    """Empty store backed by a temp file."""
    return LocalStore(tmp_path / "store.json")


@pytest.fixture
def tracker(store: LocalStore, config: Config, fixed_clock: Clock) -> LostPetTracker:
    """Tracker with seeded data and a pinned clock."""
    return LostPetTracker(store, config, clock=fixed_clock)
