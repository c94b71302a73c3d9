"""Time and primitive conversion helpers for progress calculation."""

import os
from datetime import date, datetime, timezone
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .constants import DEFAULT_TIMEZONE


def to_iso8601(dt: datetime | None) -> str | None:
    """Convert datetime to ISO string (UTC) if present."""
    if dt is None:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc).isoformat()


def get_current_time() -> datetime:
    """Get current UTC time."""
    return datetime.now(timezone.utc)


def get_timezone_name() -> str:
    """Resolve configured timezone name with validation and fallback."""
    candidate = os.environ.get("WALKPET_TIMEZONE", DEFAULT_TIMEZONE)
    try:
        ZoneInfo(candidate)
        return candidate
    except (ZoneInfoNotFoundError, ValueError):
        return DEFAULT_TIMEZONE


def to_local_time(dt: datetime, timezone_name: str | None = None) -> datetime:
    """Convert a datetime to the configured local timezone."""
    zone_name = timezone_name or get_timezone_name()
    tz = ZoneInfo(zone_name)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(tz)


def get_today_date(now: datetime | None = None) -> str:
    """
    Get the local cycle date as ISO format string (YYYY-MM-DD).

    A goal cycle is one calendar day in the configured timezone.
    """
    return to_local_time(now or get_current_time()).strftime("%Y-%m-%d")


def is_hour_in_window(local_hour: int, start_hour: int, end_hour: int) -> bool:
    """Return true if hour is inside a half-open [start, end) window with wrap support."""
    if start_hour == end_hour:
        return True
    if start_hour < end_hour:
        return start_hour <= local_hour < end_hour
    return local_hour >= start_hour or local_hour < end_hour


def parse_iso_date(value: str | None) -> date | None:
    """Parse a YYYY-MM-DD cycle date, returning None when malformed."""
    if not isinstance(value, str) or not value:
        return None
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError:
        return None


def to_epoch_millis(dt: datetime) -> int:
    """Convert a datetime to integer epoch milliseconds."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return int(dt.timestamp() * 1000)


def to_int(value: Any, default: int = 0) -> int:
    """Best-effort integer conversion with sane fallback."""
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        return default


def to_float(value: Any, default: float = 0.0) -> float:
    """Best-effort float conversion with sane fallback."""
    try:
        return float(value)
    except (TypeError, ValueError):
        return default
