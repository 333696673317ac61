"""Time helpers with an injectable clock.

Record timestamps are ISO-8601-like local date-time strings without a
timezone (``"2025-09-01T10:00"``). Matching is a best-effort heuristic, so a
value that cannot be parsed is read as "now" rather than raising.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime

Clock = Callable[[], datetime]

SECONDS_PER_HOUR = 3600.0


def system_clock() -> datetime:
    """Return the current local wall-clock time (naive)."""
    return datetime.now()


def parse_timestamp(value: str | None) -> datetime | None:
    """Parse an ISO-8601-like timestamp.

    Timezone-aware values are converted to naive local time so they can be
    compared with the naive local strings the forms produce.

    Args:
        value: Timestamp string.

    Returns:
        Parsed naive datetime, or None if the value is empty or malformed.
    """
    if not value:
        return None
    text = str(value).strip()
    # fromisoformat only accepts a "Z" suffix from Python 3.11
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


def hours_since(value: str | None, clock: Clock = system_clock) -> float:
    """Hours elapsed between *value* and now, never negative.

    Unparseable timestamps count as zero elapsed time.
    """
    parsed = parse_timestamp(value)
    if parsed is None:
        return 0.0
    return max(0.0, (clock() - parsed).total_seconds() / SECONDS_PER_HOUR)


def hours_between(a: str | None, b: str | None, clock: Clock = system_clock) -> float:
    """Absolute difference in hours between two timestamps.

    Either side that cannot be parsed is read as the current time.
    """
    now = clock()
    first = parse_timestamp(a) or now
    second = parse_timestamp(b) or now
    return abs((first - second).total_seconds()) / SECONDS_PER_HOUR


def is_future(value: str | None, clock: Clock = system_clock) -> bool:
    """Return True if *value* parses to a moment after now."""
    parsed = parse_timestamp(value)
    return parsed is not None and parsed > clock()
