"""Compliance simulator: what-if checks for trips that are not booked yet.

The window slides with every day of a candidate trip, so a trip is checked
day by day: on each day d the trip so far (start..d) is added to the existing
stays and the day accountant is run with d as the reference date. Peak usage
can land mid-trip, not only on the last day.
"""
from __future__ import annotations

import logging
from datetime import date
from typing import Sequence

from residency.config import get_settings
from residency.schemas.compliance import PlanningResult
from residency.schemas.jurisdiction import RuleDefinition
from residency.schemas.stay import StayRecord
from residency.services.calendar import from_epoch_day, to_epoch_day
from residency.services.day_accountant import Span, covered_from_spans, stay_spans
from residency.validation import parse_calendar_date, validate_span, validate_trip_length

logger = logging.getLogger(__name__)


def _peak_usage(spans: list[Span], rule: RuleDefinition, first: int, last: int) -> tuple[int, int | None]:
    """(days used, violation day) for a trip first..last; stops on the first day over the limit."""
    peak = 0
    for day in range(first, last + 1):
        used = len(covered_from_spans(spans + [(first, day)], rule, day))
        if used > rule.days_allowed:
            return used, day
        peak = max(peak, used)
    return peak, None


def would_violate(
    existing_records: Sequence[StayRecord],
    rule: RuleDefinition,
    candidate_start,
    candidate_end,
) -> PlanningResult:
    start, end = validate_span(candidate_start, candidate_end)
    spans = stay_spans(existing_records, rule)
    used, violation_day = _peak_usage(spans, rule, to_epoch_day(start), to_epoch_day(end))

    if violation_day is not None:
        violation_date = from_epoch_day(violation_day)
        return PlanningResult(
            would_violate=True,
            projected_days_used=used,
            violation_date=violation_date,
            message=(
                f"This trip would exceed the {rule.days_allowed}-day limit on "
                f"{violation_date.isoformat()} with {used} days used."
            ),
        )
    return PlanningResult(
        would_violate=False,
        projected_days_used=used,
        earliest_safe_entry=start,
        max_trip_length=(end - start).days + 1,
        message=f"This trip is safe. Maximum days used during trip: {used}/{rule.days_allowed}.",
    )


def earliest_safe_entry(
    existing_records: Sequence[StayRecord],
    rule: RuleDefinition,
    trip_length: int,
    search_from,
    search_days: int | None = None,
) -> date | None:
    """First start date, on or after search_from, for which a trip_length-day trip stays legal.

    Returns None when nothing is found within search_days (365 by default).
    """
    validate_trip_length(trip_length)
    first = to_epoch_day(parse_calendar_date(search_from))
    bound = search_days if search_days is not None else get_settings().planning_search_days
    if trip_length > rule.days_allowed:
        logger.debug("Trip of %d days can never fit a %d-day allowance", trip_length, rule.days_allowed)
        return None

    spans = stay_spans(existing_records, rule)
    for offset in range(bound):
        start = first + offset
        _, violation_day = _peak_usage(spans, rule, start, start + trip_length - 1)
        if violation_day is None:
            return from_epoch_day(start)
    logger.debug(
        "No safe entry for a %d-day trip in %s within %d days of %s",
        trip_length, rule.code, bound, from_epoch_day(first).isoformat(),
    )
    return None


def max_trip_length(
    existing_records: Sequence[StayRecord],
    rule: RuleDefinition,
    start_date,
) -> int:
    """Longest trip (1..days_allowed) starting on start_date that stays legal; 0 if none."""
    first = to_epoch_day(parse_calendar_date(start_date))
    spans = stay_spans(existing_records, rule)
    longest = 0
    # A longer trip repeats every check of a shorter one, so the first failure ends the search
    for length in range(1, rule.days_allowed + 1):
        _, violation_day = _peak_usage(spans, rule, first, first + length - 1)
        if violation_day is not None:
            break
        longest = length
    return longest


def plan_trip(
    existing_records: Sequence[StayRecord],
    rule: RuleDefinition,
    candidate_start,
    candidate_end,
) -> PlanningResult:
    """would_violate plus the alternatives the planning tool shows when a trip does not fit."""
    result = would_violate(existing_records, rule, candidate_start, candidate_end)
    if not result.would_violate:
        return result

    start, end = validate_span(candidate_start, candidate_end)
    length = (end - start).days + 1
    safe_entry = earliest_safe_entry(existing_records, rule, length, start)
    longest = max_trip_length(existing_records, rule, start)

    parts = [result.message]
    if longest:
        parts.append(f"Starting {start.isoformat()} you can stay up to {longest} days.")
    if safe_entry is not None:
        parts.append(f"The earliest safe start for {length} days is {safe_entry.isoformat()}.")
    else:
        parts.append(f"No safe start for {length} days was found in the search period.")

    return result.model_copy(update={
        "earliest_safe_entry": safe_entry,
        "max_trip_length": longest,
        "message": " ".join(parts),
    })
