"""Date and duration helpers for part transforms."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import isodate
from dateutil import parser as date_parser

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_DAYS_PER_YEAR = 365
_SECONDS_PER_DAY = 86400
_AVG_SECONDS_PER_MONTH = _SECONDS_PER_DAY * 30.436875
_AVG_SECONDS_PER_YEAR = _SECONDS_PER_DAY * 365.2425


def get_duration(a: datetime, b: datetime) -> timedelta:
    """Absolute time between two instants, regardless of order."""
    return b - a if a < b else a - b


def format_duration(duration: timedelta, include_ms: bool = False) -> str:
    """
    Format a duration compactly, e.g. "1y 3d 4h 5m 6s".

    Zero components are omitted; an all-zero duration is "0s".
    """
    total_ms = abs(duration) // timedelta(milliseconds=1)
    total_seconds, millis = divmod(total_ms, 1000)
    total_minutes, seconds = divmod(total_seconds, 60)
    total_hours, minutes = divmod(total_minutes, 60)
    total_days, hours = divmod(total_hours, 24)
    years, days = divmod(total_days, _DAYS_PER_YEAR)

    parts = [
        f"{years}y" if years else "",
        f"{days}d" if days else "",
        f"{hours}h" if hours else "",
        f"{minutes}m" if minutes else "",
        f"{seconds}s" if seconds else "",
        f"{millis}ms" if include_ms and millis else "",
    ]
    text = " ".join(p for p in parts if p)
    return text or "0s"


def parse_iso_duration(value: str) -> timedelta:
    """Parse an ISO 8601 duration such as "PT1H2M3S".

    Raises ValueError (isodate.ISO8601Error) for malformed input.
    """
    parsed = isodate.parse_duration(value)
    if isinstance(parsed, isodate.Duration):
        # Year/month components only have a length relative to a start date
        return parsed.totimedelta(start=_EPOCH)
    return parsed


def parse_timestamp(value: str) -> datetime:
    """Parse an RFC 3339 timestamp from the API; naive values are taken as UTC."""
    parsed = date_parser.isoparse(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def format_utc(value: datetime) -> str:
    """Format like an HTTP date: "Sat, 25 Oct 2014 16:00:01 GMT"."""
    return value.astimezone(timezone.utc).strftime("%a, %d %b %Y %H:%M:%S GMT")


def from_now(value: datetime, now: datetime) -> str:
    """Relative phrasing such as "3 years ago" or "in 2 hours"."""
    delta = (value - now).total_seconds()
    text = _humanize_seconds(abs(delta))
    return f"in {text}" if delta > 0 else f"{text} ago"


def _humanize_seconds(secs: float) -> str:
    minutes = round(secs / 60)
    hours = round(secs / 3600)
    days = round(secs / _SECONDS_PER_DAY)
    months = round(secs / _AVG_SECONDS_PER_MONTH)
    years = round(secs / _AVG_SECONDS_PER_YEAR)

    if secs < 45:
        return "a few seconds"
    if secs < 90:
        return "a minute"
    if minutes < 45:
        return f"{minutes} minutes"
    if minutes < 90:
        return "an hour"
    if hours < 22:
        return f"{hours} hours"
    if hours < 36:
        return "a day"
    if days < 26:
        return f"{days} days"
    if months <= 1:
        return "a month"
    if months < 11:
        return f"{months} months"
    if years <= 1:
        return "a year"
    return f"{years} years"
