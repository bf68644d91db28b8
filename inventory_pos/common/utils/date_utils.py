"""Utility functions for date manipulation."""

from datetime import datetime

import pytz


def utc_now() -> datetime:
    """Returns the current time as an aware UTC datetime."""
    return datetime.now(pytz.utc)


def format_datetime_for_db(dt: datetime | None) -> str | None:
    """Formats an aware datetime for MySQL DATETIME (stored as UTC)."""
    if dt is None:
        return None
    if dt.tzinfo is not None:
        dt = dt.astimezone(pytz.utc)
    return dt.strftime("%Y-%m-%d %H:%M:%S")


def parse_db_datetime(value) -> datetime | None:
    """Turns a naive MySQL DATETIME (UTC) into an aware datetime."""
    if value is None:
        return None
    if isinstance(value, str):
        value = datetime.strptime(value, "%Y-%m-%d %H:%M:%S")
    if value.tzinfo is None:
        return pytz.utc.localize(value)
    return value


def to_iso(dt: datetime | None) -> str | None:
    """Serializes a datetime for the local JSON store."""
    if dt is None:
        return None
    return dt.isoformat()


def from_iso(value: str | None) -> datetime | None:
    """Parses an ISO datetime string written by the local JSON store."""
    if not value:
        return None
    try:
        # Handle both Z and +00:00 for UTC
        dt = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except (ValueError, TypeError):
        return None
    if dt.tzinfo is None:
        return pytz.utc.localize(dt)
    return dt
