"""Day accountant: which calendar days count as "present" in the look-back window."""
from __future__ import annotations

from datetime import date, timedelta
from typing import Iterable

from residency.schemas.jurisdiction import CountingMethod, RuleDefinition
from residency.schemas.stay import StayRecord
from residency.services.calendar import clamped_date, from_epoch_day, to_epoch_day

# Period start when a year-based rule has no explicit reset date
_DEFAULT_RESET = {
    CountingMethod.calendar_year: (1, 1),
    CountingMethod.fiscal_year: (4, 1),
}

Span = tuple[int, int]


def window_bounds(rule: RuleDefinition, reference_date: date) -> tuple[date, date]:
    """Inclusive window for the rule on reference_date.

    Rolling windows end on the reference date. Year windows cover the whole
    period containing it; days after the reference date are never counted.
    """
    if rule.counting_method == CountingMethod.rolling:
        return reference_date - timedelta(days=rule.window_days - 1), reference_date

    default_month, default_day = _DEFAULT_RESET[rule.counting_method]
    month = rule.reset_month or default_month
    day = rule.reset_day or default_day
    start = clamped_date(reference_date.year, month, day)
    if reference_date < start:
        start = clamped_date(reference_date.year - 1, month, day)
    end = clamped_date(start.year + 1, month, day) - timedelta(days=1)
    return start, end


def stay_spans(records: Iterable[StayRecord], rule: RuleDefinition) -> list[Span]:
    """Epoch-day spans of the records that belong to the rule's jurisdiction."""
    return [
        (to_epoch_day(r.start_date), to_epoch_day(r.end_date))
        for r in records
        if r.jurisdiction_code == rule.code
    ]


def covered_from_spans(spans: Iterable[Span], rule: RuleDefinition, reference_day: int) -> frozenset[int]:
    start, end = window_bounds(rule, from_epoch_day(reference_day))
    lo = to_epoch_day(start)
    hi = min(to_epoch_day(end), reference_day)

    days: set[int] = set()
    for first, last in spans:
        if first > reference_day:
            continue
        first, last = max(first, lo), min(last, hi)
        if first <= last:
            days.update(range(first, last + 1))
    return frozenset(days)


def covered_days(records: Iterable[StayRecord], rule: RuleDefinition, reference_date: date) -> frozenset[int]:
    """Distinct epoch days counted against the rule on reference_date.

    Overlapping records in the same jurisdiction collapse to one day each;
    records for other jurisdictions are ignored, so a day spent in two
    jurisdictions counts once in each of their own tallies.
    """
    return covered_from_spans(stay_spans(records, rule), rule, to_epoch_day(reference_date))


def days_used(records: Iterable[StayRecord], rule: RuleDefinition, reference_date: date) -> int:
    return len(covered_days(records, rule, reference_date))


def covered_dates(records: Iterable[StayRecord], rule: RuleDefinition, reference_date: date) -> list[date]:
    """Sorted calendar dates, for callers that render the day list."""
    return [from_epoch_day(n) for n in sorted(covered_days(records, rule, reference_date))]
