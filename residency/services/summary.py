"""Summary builder: per-jurisdiction dashboard numbers, compliance history and the family overview."""
from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import Iterable, Sequence

from residency.config import get_settings
from residency.schemas.compliance import ComplianceHistoryPoint, ComplianceSummary
from residency.schemas.family import FamilyMember, GroupOverview, MemberSummary
from residency.schemas.jurisdiction import CountingMethod, RuleDefinition, StatusThresholds
from residency.schemas.stay import StayRecord
from residency.services.calendar import resolve_reference_date, to_epoch_day
from residency.services.day_accountant import covered_from_spans, stay_spans, window_bounds
from residency.services.expiration import next_expiration
from residency.services.status import classify, usage_percentage, worst_status
from residency.validation import ValidationError

logger = logging.getLogger(__name__)

# Look-back periods offered by the compliance chart
HISTORY_PERIODS = {
    "30d": 30,
    "90d": 90,
    "180d": 180,
    "1y": 365,
    "all": 365,
}


def _default_thresholds(rule: RuleDefinition) -> StatusThresholds:
    settings = get_settings()
    return StatusThresholds.for_rule(
        rule,
        yellow=settings.default_yellow_threshold,
        red=settings.default_red_threshold,
    )


def build_summary(
    records: Sequence[StayRecord],
    rule: RuleDefinition,
    thresholds: StatusThresholds | None = None,
    reference_date: date | str | None = None,
) -> ComplianceSummary:
    ref = resolve_reference_date(reference_date)
    if thresholds is None:
        thresholds = _default_thresholds(rule)
    ref_day = to_epoch_day(ref)

    spans = stay_spans(records, rule)
    covered = covered_from_spans(spans, rule, ref_day)
    used = len(covered)
    window_start, window_end = window_bounds(rule, ref)
    trip_count = sum(1 for span in spans if covered_from_spans([span], rule, ref_day))

    expires = None
    if rule.counting_method == CountingMethod.rolling:
        expires = next_expiration(covered, rule.window_days)

    return ComplianceSummary(
        jurisdiction_code=rule.code,
        counting_method=rule.counting_method,
        reference_date=ref,
        days_used=used,
        days_allowed=rule.days_allowed,
        days_remaining=max(0, rule.days_allowed - used),
        percentage=usage_percentage(used, rule.days_allowed),
        window_start=window_start,
        window_end=window_end,
        status=classify(used, rule.days_allowed, thresholds),
        next_expiration=expires,
        trip_count=trip_count,
        thresholds=thresholds,
    )


def build_multi_jurisdiction_summary(
    records: Sequence[StayRecord],
    rules: Iterable[RuleDefinition],
    thresholds: dict[str, StatusThresholds] | None = None,
    reference_date: date | str | None = None,
) -> list[ComplianceSummary]:
    """One summary per tracked jurisdiction; thresholds are keyed by rule code."""
    ref = resolve_reference_date(reference_date)
    thresholds = thresholds or {}
    return [build_summary(records, rule, thresholds.get(rule.code), ref) for rule in rules]


def build_group_overview(
    primary_records: Sequence[StayRecord],
    member_record_sets: Iterable[tuple[FamilyMember, Sequence[StayRecord]]],
    rule: RuleDefinition,
    thresholds: StatusThresholds | None = None,
    reference_date: date | str | None = None,
) -> GroupOverview:
    """Each person is summarised on their own stays only; nobody shares days."""
    ref = resolve_reference_date(reference_date)
    primary = build_summary(primary_records, rule, thresholds, ref)
    family = [
        MemberSummary(member=member, summary=build_summary(records, rule, thresholds, ref))
        for member, records in member_record_sets
    ]
    logger.debug("Group overview for %s: primary + %d member(s) on %s", rule.code, len(family), ref.isoformat())
    return GroupOverview(
        jurisdiction_code=rule.code,
        primary=primary,
        family=family,
        worst_status=worst_status([primary.status] + [m.summary.status for m in family]),
    )


def build_compliance_history(
    records: Sequence[StayRecord],
    rule: RuleDefinition,
    thresholds: StatusThresholds | None = None,
    end_date: date | str | None = None,
    period_days: int | str = 180,
) -> list[ComplianceHistoryPoint]:
    """Summary numbers sampled over the period_days before end_date, oldest first.

    Periods up to 90 days are sampled daily, longer ones weekly. The first sample
    is end_date - period_days and end_date itself is always the last one.
    """
    if isinstance(period_days, str):
        if period_days not in HISTORY_PERIODS:
            raise ValidationError(f"Unknown history period: {period_days!r}")
        period_days = HISTORY_PERIODS[period_days]
    if period_days < 0:
        raise ValidationError("History period must not be negative")

    end = resolve_reference_date(end_date)
    if thresholds is None:
        thresholds = _default_thresholds(rule)
    interval = 7 if period_days > 90 else 1

    offsets = list(range(period_days, -1, -interval))
    if offsets[-1] != 0:
        offsets.append(0)

    history = []
    for offset in offsets:
        summary = build_summary(records, rule, thresholds, end - timedelta(days=offset))
        history.append(ComplianceHistoryPoint(
            sample_date=summary.reference_date,
            days_used=summary.days_used,
            days_remaining=summary.days_remaining,
            status=summary.status,
            trip_count=summary.trip_count,
        ))
    logger.debug("Compliance history for %s: %d sample(s) up to %s", rule.code, len(history), end.isoformat())
    return history
