"""Residency / visa day accounting and compliance simulation."""
from residency.services.day_accountant import covered_days, days_used, window_bounds
from residency.services.expiration import next_expiration
from residency.services.simulator import earliest_safe_entry, max_trip_length, plan_trip, would_violate
from residency.services.status import classify
from residency.services.summary import (
    build_compliance_history,
    build_group_overview,
    build_multi_jurisdiction_summary,
    build_summary,
)
from residency.validation import ValidationError

__all__ = [
    "ValidationError",
    "build_compliance_history",
    "build_group_overview",
    "build_multi_jurisdiction_summary",
    "build_summary",
    "classify",
    "covered_days",
    "days_used",
    "earliest_safe_entry",
    "max_trip_length",
    "next_expiration",
    "plan_trip",
    "window_bounds",
    "would_violate",
]
