"""Calendar-date parsing shared by the schemas and the input boundary."""
import re
from datetime import date, datetime, timezone
from typing import Any

from residency.exceptions import ValidationError

_DATE_ONLY = re.compile(r"\d{4}-\d{2}-\d{2}")
_DATE_TIME = re.compile(r"\d{4}-\d{2}-\d{2}[T ].+")


def _utc_date(value: datetime) -> date:
    # Naive datetimes are already on the reference clock
    if value.tzinfo is not None and value.utcoffset() is not None:
        value = value.astimezone(timezone.utc)
    return value.date()


def parse_calendar_date(value: Any) -> date:
    """Accept a date, a datetime or an ISO 8601 string; offsets are normalized to UTC."""
    if isinstance(value, datetime):
        return _utc_date(value)
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        try:
            if _DATE_ONLY.fullmatch(text):
                return date.fromisoformat(text)
            if _DATE_TIME.fullmatch(text):
                if text[-1] in "Zz":
                    text = text[:-1] + "+00:00"
                return _utc_date(datetime.fromisoformat(text))
        except ValueError as e:
            raise ValidationError(f"Malformed calendar date: {value!r}") from e
        raise ValidationError(f"Malformed calendar date: {value!r}")
    raise ValidationError(f"Expected a calendar date, got {type(value).__name__}")
