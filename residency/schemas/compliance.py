"""Compliance summary and planning result schemas."""
from datetime import date

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from residency.schemas.jurisdiction import ComplianceStatus, CountingMethod, StatusThresholds


class ComplianceSummary(BaseModel):
    """Dashboard view of one person in one jurisdiction on one reference date."""
    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)

    jurisdiction_code: str
    counting_method: CountingMethod
    reference_date: date
    days_used: int
    days_allowed: int
    days_remaining: int
    percentage: float
    window_start: date
    window_end: date
    status: ComplianceStatus
    next_expiration: date | None = None  # rolling method only
    trip_count: int = 0
    thresholds: StatusThresholds


class PlanningResult(BaseModel):
    """Answer to a what-if trip query."""
    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)

    would_violate: bool
    projected_days_used: int
    earliest_safe_entry: date | None = None
    max_trip_length: int | None = None
    violation_date: date | None = None  # first day over the limit
    message: str


class ComplianceHistoryPoint(BaseModel):
    """One sample of the compliance chart: the summary numbers on one past date."""
    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)

    sample_date: date = Field(alias="date")
    days_used: int
    days_remaining: int
    status: ComplianceStatus
    trip_count: int = 0
