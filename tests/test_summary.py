"""Tests for the summary builder, compliance history and family overview."""
from datetime import date, timedelta

import pytest

from residency.config import get_settings
from residency.schemas.family import FamilyMember
from residency.schemas.jurisdiction import ComplianceStatus, RuleDefinition, StatusThresholds
from residency.schemas.stay import StayRecord
from residency.seed import default_catalog
from residency.services.summary import (
    build_compliance_history,
    build_group_overview,
    build_multi_jurisdiction_summary,
    build_summary,
)
from residency.validation import ValidationError


def test_summary_for_rolling_rule(schengen, thresholds, make_stay, ref):
    stays = [make_stay(-70, -6), make_stay(-200, -175), make_stay(5, 20)]
    summary = build_summary(stays, schengen, thresholds, ref)

    # 65 days plus 5 clipped days from the old trip; the future trip is ignored
    assert summary.days_used == 70
    assert summary.days_remaining == 20
    assert summary.status == ComplianceStatus.warning
    assert summary.window_end == ref
    assert summary.window_start == ref - timedelta(days=179)
    assert summary.next_expiration == ref + timedelta(days=1)
    assert summary.trip_count == 2
    assert summary.percentage == 77.8
    assert summary.reference_date == ref


def test_summary_with_no_stays(schengen, thresholds, ref):
    summary = build_summary([], schengen, thresholds, ref)
    assert summary.days_used == 0
    assert summary.days_remaining == 90
    assert summary.status == ComplianceStatus.safe
    assert summary.next_expiration is None
    assert summary.trip_count == 0


def test_days_remaining_never_negative(schengen, thresholds, make_stay, ref):
    summary = build_summary([make_stay(-99, 0)], schengen, thresholds, ref)
    assert summary.days_used == 100
    assert summary.days_remaining == 0
    assert summary.status == ComplianceStatus.critical


def test_summary_defaults_thresholds_from_settings(schengen, make_stay, ref, monkeypatch):
    monkeypatch.setenv("RESIDENCY_DEFAULT_YELLOW_THRESHOLD", "10")
    summary = build_summary([make_stay(-14, -5)], schengen, reference_date=ref)
    assert summary.thresholds == StatusThresholds(yellow=10, red=80)
    assert summary.status == ComplianceStatus.warning


def test_summary_accepts_iso_reference_date(schengen, thresholds, make_stay, ref):
    summary = build_summary([make_stay(-3, -1)], schengen, thresholds, ref.isoformat())
    assert summary.reference_date == ref
    assert summary.days_used == 3


def test_year_rule_has_no_expiration(ref):
    rule = default_catalog().require_rule("fr")
    stays = [StayRecord(id="a", start_date=date(2025, 3, 1), end_date=date(2025, 3, 31), jurisdiction_code="fr")]
    summary = build_summary(stays, rule, reference_date=ref)
    assert summary.days_used == 31
    assert summary.window_start == date(2025, 1, 1)
    assert summary.window_end == date(2025, 12, 31)
    assert summary.next_expiration is None
    assert summary.status == ComplianceStatus.safe


def test_multi_jurisdiction_summary(make_stay, ref):
    catalog = default_catalog()
    rules = catalog.tracked(["schengen", "fr", "nowhere"])
    stays = [make_stay(-10, -1), make_stay(-10, -1, code="fr")]
    summaries = build_multi_jurisdiction_summary(stays, rules, reference_date=ref)
    assert [s.jurisdiction_code for s in summaries] == ["schengen", "fr"]
    assert [s.days_used for s in summaries] == [10, 10]


def test_group_overview_keeps_people_independent(schengen, thresholds, make_stay, ref):
    primary = [make_stay(-20, -1)]
    spouse = FamilyMember(id="m1", name="Alex", relationship="spouse")
    child = FamilyMember(id="m2", name="Sam", relationship="child")
    members = [
        (spouse, [make_stay(-85, -1)]),
        (child, []),
    ]
    overview = build_group_overview(primary, members, schengen, thresholds, ref)

    assert overview.primary.days_used == 20
    assert [m.member.name for m in overview.family] == ["Alex", "Sam"]
    assert overview.family[0].summary.days_used == 85
    assert overview.family[0].summary.status == ComplianceStatus.danger
    assert overview.family[1].summary.days_used == 0
    assert overview.worst_status == ComplianceStatus.danger


def test_summary_serializes_with_camel_case(schengen, thresholds, make_stay, ref):
    data = build_summary([make_stay(-3, -1)], schengen, thresholds, ref).model_dump(mode="json", by_alias=True)
    assert data["daysUsed"] == 3
    assert data["windowEnd"] == ref.isoformat()
    assert data["nextExpiration"] == (ref - timedelta(days=3) + timedelta(days=180)).isoformat()
    assert data["status"] == "safe"


def test_empty_history_is_safe_for_a_one_day_allowance(ref):
    rule = RuleDefinition(code="one-day", name="One day", days_allowed=1, window_days=30)
    summary = build_summary([], rule, reference_date=ref)
    assert summary.status == ComplianceStatus.safe
    summary = build_summary(
        [StayRecord(id="a", start_date=ref, end_date=ref, jurisdiction_code="one-day")], rule, reference_date=ref
    )
    assert summary.status == ComplianceStatus.critical


def test_summary_clamps_configured_red_threshold(schengen, ref, monkeypatch):
    monkeypatch.setenv("RESIDENCY_DEFAULT_RED_THRESHOLD", "95")
    summary = build_summary([], schengen, reference_date=ref)
    assert summary.thresholds == StatusThresholds(yellow=60, red=89)


def test_settings_reject_unordered_default_thresholds(monkeypatch):
    monkeypatch.setenv("RESIDENCY_DEFAULT_YELLOW_THRESHOLD", "90")
    with pytest.raises(ValueError):
        get_settings()


def test_history_is_sampled_daily_for_short_periods(schengen, thresholds, make_stay, ref):
    history = build_compliance_history([make_stay(-20, -11)], schengen, thresholds, ref, 30)
    assert len(history) == 31
    assert history[0].sample_date == ref - timedelta(days=30)
    assert history[-1].sample_date == ref
    assert all(b.sample_date - a.sample_date == timedelta(days=1) for a, b in zip(history, history[1:]))
    assert history[0].days_used == 0
    assert history[0].trip_count == 0
    assert history[15].days_used == 6
    assert history[15].days_remaining == 84
    assert history[-1].days_used == 10
    assert history[-1].trip_count == 1


def test_history_is_sampled_weekly_beyond_ninety_days(schengen, thresholds, make_stay, ref):
    history = build_compliance_history([make_stay(-70, -6)], schengen, thresholds, ref, 180)
    dates = [point.sample_date for point in history]
    assert dates[0] == ref - timedelta(days=180)
    assert dates[1] == ref - timedelta(days=173)
    # 180 is not a multiple of 7: the last weekly sample is 5 days back, then the end date
    assert dates[-2] == ref - timedelta(days=5)
    assert dates[-1] == ref
    assert len(history) == 27
    assert history[-1].days_used == 65
    assert history[-1].status == ComplianceStatus.warning


def test_history_accepts_named_periods(schengen, thresholds, ref):
    assert len(build_compliance_history([], schengen, thresholds, ref, "90d")) == 91
    assert len(build_compliance_history([], schengen, thresholds, ref, "1y")) == 54
    assert len(build_compliance_history([], schengen, thresholds, ref, 0)) == 1
    with pytest.raises(ValidationError):
        build_compliance_history([], schengen, thresholds, ref, "2w")
    with pytest.raises(ValidationError):
        build_compliance_history([], schengen, thresholds, ref, -1)


def test_history_point_serializes_with_portal_keys(schengen, thresholds, make_stay, ref):
    point = build_compliance_history([make_stay(-3, -1)], schengen, thresholds, ref, 0)[0]
    assert point.model_dump(mode="json", by_alias=True) == {
        "date": "2025-06-30",
        "daysUsed": 3,
        "daysRemaining": 87,
        "status": "safe",
        "tripCount": 1,
    }
