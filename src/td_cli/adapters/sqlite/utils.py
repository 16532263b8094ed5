"""Utility functions for SQLite adapter."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any


def now_utc() -> datetime:
    """Get the current time as an aware UTC datetime."""
    return datetime.now(UTC)


def to_iso(value: datetime | None) -> str | None:
    """Serialize a datetime for storage, normalizing to UTC.

    Naive datetimes are taken to already be UTC.
    """
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value.astimezone(UTC).isoformat()


def parse_datetime(value: str | datetime | None) -> datetime | None:
    """Parse a stored datetime back into an aware UTC datetime.

    Args:
        value: String, datetime object, or None

    Returns:
        datetime object or None
    """
    if value is None or value == "":
        return None
    if isinstance(value, str):
        value = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def row_to_dict(row: Any) -> dict[str, Any]:
    """Convert sqlite3.Row to dictionary."""
    if row is None:
        return {}
    return dict(row)


def placeholders(count: int) -> str:
    """Build a ``?, ?, ?`` parameter list for an IN clause."""
    return ", ".join("?" for _ in range(count))
