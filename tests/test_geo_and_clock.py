"""Tests for lostpet/matching/geo.py and lostpet/matching/clock.py."""

from __future__ import annotations

from datetime import datetime

import pytest

from lostpet.matching.clock import (
    Clock,
    hours_between,
    hours_since,
    is_future,
    parse_timestamp,
)
from lostpet.matching.geo import distance_km

BANGKOK = (13.7563, 100.5018)
CHIANG_MAI = (18.7883, 98.9853)


class TestDistanceKm:
    """Tests for haversine distance."""

    def test_identical_points(self) -> None:
        assert distance_km(*BANGKOK, *BANGKOK) == 0

    @pytest.mark.parametrize(
        ("a", "b"),
        [
            (BANGKOK, CHIANG_MAI),
            ((0.0, 0.0), (0.0, 180.0)),
            ((-33.86, 151.21), (51.5, -0.12)),
        ],
    )
    def test_symmetric(self, a: tuple[float, float], b: tuple[float, float]) -> None:
        assert distance_km(*a, *b) == pytest.approx(distance_km(*b, *a))

    def test_known_distance(self) -> None:
        """Bangkok to Chiang Mai is roughly 580 km as the crow flies."""
        assert distance_km(*BANGKOK, *CHIANG_MAI) == pytest.approx(583, abs=10)

    def test_one_degree_latitude(self) -> None:
        assert distance_km(0, 0, 1, 0) == pytest.approx(111.19, abs=0.01)

    def test_antipodal_points(self) -> None:
        assert distance_km(0, 0, 0, 180) == pytest.approx(20015.09, abs=0.1)


class TestParseTimestamp:
    """Tests for timestamp parsing."""

    def test_local_minutes(self) -> None:
        assert parse_timestamp("2025-09-01T10:00") == datetime(2025, 9, 1, 10, 0)

    def test_with_seconds(self) -> None:
        assert parse_timestamp("2025-09-01T10:00:30") == datetime(2025, 9, 1, 10, 0, 30)

    def test_timezone_aware_becomes_naive(self) -> None:
        parsed = parse_timestamp("2025-09-01T10:00:00+00:00")
        assert parsed is not None
        assert parsed.tzinfo is None

    def test_zulu_suffix_matches_utc_offset(self) -> None:
        """A trailing Z parses on every supported Python version."""
        zulu = parse_timestamp("2025-09-01T10:00:00Z")
        assert zulu is not None
        assert zulu == parse_timestamp("2025-09-01T10:00:00+00:00")

    @pytest.mark.parametrize("value", ["", None, "yesterday", "2025-13-40T99:99"])
    def test_unparseable(self, value: str | None) -> None:
        assert parse_timestamp(value) is None


class TestElapsedTime:
    """Tests for elapsed-time helpers with a pinned clock."""

    def test_hours_since(self, fixed_clock: Clock) -> None:
        assert hours_since("2025-09-02T06:00", fixed_clock) == pytest.approx(6.0)

    def test_hours_since_future_is_zero(self, fixed_clock: Clock) -> None:
        assert hours_since("2025-09-03T06:00", fixed_clock) == 0.0

    def test_hours_since_unparseable_is_zero(self, fixed_clock: Clock) -> None:
        assert hours_since("not a date", fixed_clock) == 0.0

    def test_hours_between_is_absolute(self, fixed_clock: Clock) -> None:
        a, b = "2025-09-01T10:00", "2025-09-01T13:30"
        assert hours_between(a, b, fixed_clock) == pytest.approx(3.5)
        assert hours_between(b, a, fixed_clock) == pytest.approx(3.5)

    def test_hours_between_unparseable_reads_as_now(self, fixed_clock: Clock) -> None:
        assert hours_between("garbage", "2025-09-02T10:00", fixed_clock) == pytest.approx(2.0)

    def test_is_future(self, fixed_clock: Clock) -> None:
        assert is_future("2025-09-02T12:01", fixed_clock)
        assert not is_future("2025-09-02T12:00", fixed_clock)
        assert not is_future("garbage", fixed_clock)
