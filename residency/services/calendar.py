"""Epoch-day arithmetic and the reference clock.

Every comparison inside the engine is on integer epoch days (days since
1970-01-01). Dates are converted once on the way in and once on the way out.
"""
from datetime import date, datetime, timedelta, timezone
from zoneinfo import ZoneInfo

from residency.config import get_settings
from residency.dates import parse_calendar_date

EPOCH = date(1970, 1, 1)


def to_epoch_day(d: date) -> int:
    return (d - EPOCH).days


def from_epoch_day(n: int) -> date:
    return EPOCH + timedelta(days=n)


def today(tz_name: str | None = None) -> date:
    """Current calendar date on the reference clock (UTC unless configured)."""
    name = tz_name or get_settings().reference_timezone or "UTC"
    tz = timezone.utc if name.upper() == "UTC" else ZoneInfo(name)
    return datetime.now(tz).date()


def resolve_reference_date(value=None) -> date:
    if value is None:
        return today()
    return parse_calendar_date(value)


def clamped_date(year: int, month: int, day: int) -> date:
    """date(year, month, day) with day clamped to the month's length."""
    while day > 28:
        try:
            return date(year, month, day)
        except ValueError:
            day -= 1
    return date(year, month, day)
