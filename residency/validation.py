"""Input boundary: everything is checked here before it reaches the engine."""
from __future__ import annotations

from datetime import date
from typing import Any, Iterable

import pydantic

from residency.dates import parse_calendar_date
from residency.exceptions import ValidationError
from residency.schemas.jurisdiction import RuleDefinition, StatusThresholds
from residency.schemas.stay import StayRecord


__all__ = [
    "ValidationError",
    "load_rule",
    "load_stay",
    "load_stays",
    "parse_calendar_date",
    "validate_span",
    "validate_thresholds",
    "validate_trip_length",
]


def _first_error(exc: pydantic.ValidationError) -> str:
    err = exc.errors()[0]
    loc = ".".join(str(p) for p in err.get("loc", ()))
    return f"{loc}: {err.get('msg')}" if loc else str(err.get("msg"))


def load_stay(data: StayRecord | dict[str, Any]) -> StayRecord:
    if isinstance(data, StayRecord):
        return data
    try:
        return StayRecord.model_validate(data)
    except pydantic.ValidationError as e:
        raise ValidationError(f"Invalid stay record: {_first_error(e)}") from e


def load_stays(items: Iterable[StayRecord | dict[str, Any]]) -> list[StayRecord]:
    return [load_stay(item) for item in items]


def load_rule(data: RuleDefinition | dict[str, Any]) -> RuleDefinition:
    if isinstance(data, RuleDefinition):
        return data
    try:
        return RuleDefinition.model_validate(data)
    except pydantic.ValidationError as e:
        raise ValidationError(f"Invalid jurisdiction rule: {_first_error(e)}") from e


def validate_thresholds(
    thresholds: StatusThresholds | dict[str, Any],
    days_allowed: int,
) -> StatusThresholds:
    """Require 0 <= yellow < red < days_allowed."""
    if not isinstance(thresholds, StatusThresholds):
        try:
            thresholds = StatusThresholds.model_validate(thresholds)
        except pydantic.ValidationError as e:
            raise ValidationError(f"Invalid thresholds: {_first_error(e)}") from e
    if not (0 <= thresholds.yellow < thresholds.red < days_allowed):
        raise ValidationError(
            f"Thresholds must satisfy 0 <= yellow < red < {days_allowed} "
            f"(got yellow={thresholds.yellow}, red={thresholds.red})"
        )
    return thresholds


def validate_trip_length(trip_length: int) -> int:
    if trip_length < 1:
        raise ValidationError("Trip length must be at least one day")
    return trip_length


def validate_span(start: Any, end: Any) -> tuple[date, date]:
    start_d, end_d = parse_calendar_date(start), parse_calendar_date(end)
    if end_d < start_d:
        raise ValidationError(f"End date {end_d.isoformat()} is before start date {start_d.isoformat()}")
    return start_d, end_d
