from __future__ import annotations

from datetime import date, datetime, timedelta, timezone, tzinfo
from typing import Optional


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def truncate_to_millis(value: datetime) -> datetime:
    """Drop sub-millisecond precision so a value survives a to_iso round trip unchanged."""
    return value.replace(microsecond=value.microsecond // 1000 * 1000)


def now_utc() -> datetime:
    """Current UTC time at millisecond precision.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return truncate_to_millis(datetime.now(timezone.utc))


def to_iso(value: datetime) -> str:
    """Serialize an aware datetime as ISO 8601 in UTC with millisecond precision."""
    return value.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_iso_datetime(value: str, default_tz: tzinfo = timezone.utc) -> Optional[datetime]:
    """Parse a stored timestamp; naive values are interpreted in `default_tz`.

    Returns None for blank cells.
    """
    v = (value or "").strip()
    if not v:
        return None
    if v.endswith("Z"):
        v = v[:-1] + "+00:00"
    dt = datetime.fromisoformat(v)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=default_tz)
    return dt


def local_date(value: datetime, tz: tzinfo) -> date:
    return value.astimezone(tz).date()


def hours_between(start: datetime, end: datetime) -> float:
    """Elapsed hours rounded to 2 decimals (may be negative; callers validate)."""
    return round((end - start).total_seconds() / 3600, 2)


def week_start(day: date) -> date:
    """Sunday that starts the week containing `day`."""
    return day - timedelta(days=(day.weekday() + 1) % 7)
