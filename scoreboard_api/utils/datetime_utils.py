"""Datetime helpers for the API layer.

All datetime fields in responses are UTC (ISO 8601). Upstream timestamps
without an offset are treated as UTC.
"""

from datetime import datetime, timezone


def now_utc() -> datetime:
    """Get the current time in UTC, timezone-aware."""
    return datetime.now(timezone.utc)


def ensure_utc(value: datetime) -> datetime:
    """Return ``value`` as an aware UTC datetime."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def parse_iso_datetime(value: str | None) -> datetime | None:
    """Parse an upstream ISO 8601 timestamp.

    Accepts the short ESPN form ("2024-01-15T00:30Z") as well as full
    offsets. Returns None when the value is missing or unparsable.
    """
    if not value or not isinstance(value, str):
        return None
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    return ensure_utc(parsed)


def hours_between(start: datetime, end: datetime) -> float:
    """Absolute distance between two datetimes in hours."""
    return abs((ensure_utc(end) - ensure_utc(start)).total_seconds()) / 3600.0
