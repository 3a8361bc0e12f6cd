from datetime import date, datetime, timezone
from typing import Any

UTC = timezone.utc


def parse_instant(value: Any) -> datetime:
    """
    Parse a raw value into a timezone-aware UTC datetime.

    Accepts datetime/date objects, epoch milliseconds and ISO 8601 strings
    (date only, or date-time with an optional offset or trailing 'Z').
    Naive values are read as UTC.

    Raises:
        ValueError: if the value cannot be read as an instant.
    """
    try:
        return _parse_instant(value)
    except OverflowError as e:
        # an offset pushed the instant outside the datetime range
        raise ValueError(f"{value!r} is out of range for a date") from e


def _parse_instant(value: Any) -> datetime:
    if isinstance(value, datetime):
        return _as_utc(value)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=UTC)
    if isinstance(value, bool):
        raise ValueError(f"{value!r} is not a date")
    if isinstance(value, (int, float)):
        try:
            return datetime.fromtimestamp(value / 1000, tz=UTC)
        except (OverflowError, OSError) as e:
            raise ValueError(f"{value!r} is out of range for a date") from e
    if isinstance(value, str):
        text = value.strip()
        if text.endswith(('Z', 'z')):
            text = text[:-1] + '+00:00'
        return _as_utc(datetime.fromisoformat(text))
    raise ValueError(f"{value!r} is not a date")


def start_of_day(value: datetime) -> datetime:
    """Same calendar date (UTC) at 00:00:00.000"""
    return _as_utc(value).replace(hour=0, minute=0, second=0, microsecond=0)


def end_of_day(value: datetime) -> datetime:
    """Same calendar date (UTC) at 23:59:59.999"""
    return _as_utc(value).replace(hour=23, minute=59, second=59, microsecond=999000)


def to_utc_iso(value: datetime) -> str:
    """
    UTC ISO format with milliseconds, the way timestamps are stored.
    Example: "2024-03-15T23:59:59.999Z"
    """
    return _as_utc(value).isoformat(timespec='milliseconds').replace('+00:00', 'Z')


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)
