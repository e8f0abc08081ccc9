"""
All timestamps are handled as timezone-aware UTC. SQLite hands back naive
datetimes, so anything naive is read as UTC.
"""

import threading
from datetime import date, datetime, time, timedelta, timezone


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def to_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def day_bounds(day: date | datetime) -> tuple[datetime, datetime]:
    """[00:00, next 00:00) of the given calendar day, in UTC."""
    if isinstance(day, datetime):
        day = to_utc(day).date()
    start = datetime.combine(day, time.min, tzinfo=timezone.utc)
    return start, start + timedelta(days=1)


def end_of_day(day: date | datetime) -> datetime:
    return day_bounds(day)[1] - timedelta(microseconds=1)


def isoformat_utc(value: datetime) -> str:
    """JavaScript-style ISO string: 2020-01-01T00:00:00.000Z"""
    return to_utc(value).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def long_date(value: datetime | None, default: str = "TBD") -> str:
    """'Monday, March 3, 2025' or `default` when there is no date."""
    if value is None:
        return default
    value = to_utc(value)
    return f"{value:%A}, {value:%B} {value.day}, {value.year}"


_last_millis = 0
_millis_lock = threading.Lock()


def epoch_millis() -> int:
    """Milliseconds since the epoch, strictly increasing within the process."""
    global _last_millis
    with _millis_lock:
        _last_millis = max(int(utc_now().timestamp() * 1000), _last_millis + 1)
        return _last_millis
