"""Parsing of due date input and timezone handling."""

from __future__ import annotations

from datetime import UTC, datetime, time, timedelta, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import tzlocal

from td_cli.models.errors import InvalidDueError, ValidationError

# Date-only input means "by the end of that day".
END_OF_DAY = time(23, 59)

_DATETIME_LAYOUTS = (
    "%Y-%m-%d %H:%M",
    "%Y-%m-%dT%H:%M",
    "%Y%m%d%H%M",
)
_DATE_LAYOUT = "%Y-%m-%d"


def resolve_timezone(name: str | None) -> tzinfo:
    """Turn a configured timezone name into a tzinfo.

    ``"local"`` (or nothing) means the system timezone.

    Raises:
        ValidationError: If the name is not a known IANA zone
    """
    if not name or name == "local":
        return tzlocal.get_localzone()
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ValidationError(f"unknown timezone: {name}") from e


def _end_of_day(day, tz: tzinfo) -> datetime:
    return datetime.combine(day, END_OF_DAY, tzinfo=tz).astimezone(UTC)


def parse_due_input(
    raw: str,
    tz: tzinfo | None = None,
    now: datetime | None = None,
) -> datetime:
    """Parse user due input into an aware UTC datetime.

    Accepted forms are ``today``, ``tomorrow``, ``YYYY-MM-DD``,
    ``YYYY-MM-DD HH:MM``, ``YYYY-MM-DDTHH:MM``, ``YYYYMMDDHHMM`` and RFC 3339
    timestamps. Input without an offset is read in ``tz``; date-only input
    means 23:59 that day.

    Raises:
        InvalidDueError: If the input matches none of the forms
    """
    value = (raw or "").strip()
    if not value:
        raise InvalidDueError(raw)
    tz = tz or tzlocal.get_localzone()

    keyword = value.lower()
    if keyword in ("today", "tomorrow"):
        local_now = (now or datetime.now(UTC)).astimezone(tz)
        day = local_now.date()
        if keyword == "tomorrow":
            day += timedelta(days=1)
        return _end_of_day(day, tz)

    for layout in _DATETIME_LAYOUTS:
        try:
            parsed = datetime.strptime(value, layout)
        except ValueError:
            continue
        return parsed.replace(tzinfo=tz).astimezone(UTC)

    try:
        return _end_of_day(datetime.strptime(value, _DATE_LAYOUT).date(), tz)
    except ValueError:
        pass

    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError as e:
        raise InvalidDueError(raw) from e
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=tz)
    return parsed.astimezone(UTC)


def format_local(value: datetime | None, tz: tzinfo | None = None, fmt: str = "%Y-%m-%d %H:%M") -> str:
    """Render a stored UTC datetime in the display timezone."""
    if value is None:
        return ""
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value.astimezone(tz or tzlocal.get_localzone()).strftime(fmt)
