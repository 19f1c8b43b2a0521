"""Utility functions for the backend."""

from datetime import UTC, date, datetime, tzinfo


def utcnow() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(UTC)


def ensure_utc(value: datetime) -> datetime:
    """
    Normalize a datetime to aware UTC.

    SQLite hands back naive datetimes for ``DateTime(timezone=True)`` columns;
    every timestamp is written in UTC, so a naive value is UTC.
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def local_today(zone: tzinfo, now: datetime | None = None) -> date:
    """
    Calendar date in ``zone`` at ``now`` (default: the current instant).

    Example: 2025-01-15T15:30Z is 2025-01-16 in Asia/Tokyo.
    """
    instant = ensure_utc(now) if now is not None else utcnow()
    return instant.astimezone(zone).date()
