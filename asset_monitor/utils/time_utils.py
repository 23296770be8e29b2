"""Timestamp helpers shared by the models and the SQLite repository.

Timestamps are kept timezone-aware in UTC. Rows written by older builds
carry naive local times, rows written by the desktop app carry ISO-8601
instants with a ``Z`` suffix; both are read into the same form.
"""

from datetime import date, datetime, timezone


def utc_now() -> datetime:
    """Return the current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Normalize ``value`` to aware UTC, reading naive values as local time."""
    return value.astimezone(timezone.utc)


def parse_timestamp(value: str) -> datetime:
    """Parse a stored ISO-8601 timestamp into an aware UTC datetime.

    Args:
        value: Text such as ``2024-01-05T15:00:00Z``,
            ``2024-01-05T15:00:00.123456+00:00`` or a naive local time.

    Returns:
        datetime: The instant in UTC.
    """
    raw = value.strip()
    if raw.endswith(("Z", "z")):
        raw = f"{raw[:-1]}+00:00"
    return as_utc(datetime.fromisoformat(raw))


def format_timestamp(value: datetime) -> str:
    """Render ``value`` as ISO-8601 UTC text with a ``Z`` suffix."""
    return as_utc(value).strftime("%Y-%m-%dT%H:%M:%S.%fZ")


def parse_calendar_date(value: str) -> date:
    """Read a stored date column.

    Plain ``YYYY-MM-DD`` text is taken as is. A full instant is converted
    to local time first so a trade keeps the day it was made on.
    """
    raw = value.strip()
    if len(raw) <= 10:
        return date.fromisoformat(raw)
    return parse_timestamp(raw).astimezone().date()


__all__ = [
    "utc_now",
    "as_utc",
    "parse_timestamp",
    "format_timestamp",
    "parse_calendar_date",
]
