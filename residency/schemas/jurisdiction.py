"""Jurisdiction rule schemas (day allowance, window, counting method)."""
import enum

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel


class CountingMethod(str, enum.Enum):
    rolling = "rolling"
    calendar_year = "calendar_year"
    fiscal_year = "fiscal_year"


class JurisdictionType(str, enum.Enum):
    zone = "zone"
    country = "country"
    state = "state"


class ComplianceStatus(str, enum.Enum):
    safe = "safe"
    warning = "warning"
    danger = "danger"
    critical = "critical"


class RuleDefinition(BaseModel):
    """Static parameters for one visa/residency regime."""
    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)

    code: str
    name: str
    type: JurisdictionType = JurisdictionType.zone
    parent_code: str | None = None
    days_allowed: int = Field(gt=0)
    window_days: int = 0  # only used by the rolling method
    counting_method: CountingMethod = CountingMethod.rolling
    # Period start for calendar/fiscal year methods; None falls back to Jan 1 / Apr 1
    reset_month: int | None = Field(default=None, ge=1, le=12)
    reset_day: int | None = Field(default=None, ge=1, le=31)
    description: str | None = None
    notes: str | None = None
    display_order: int = 0

    @field_validator("code", "parent_code", mode="before")
    @classmethod
    def normalize_code(cls, v: str | None) -> str | None:
        return v.strip().lower() if isinstance(v, str) else v

    @model_validator(mode="after")
    def check_window(self):
        if self.counting_method == CountingMethod.rolling and self.window_days <= 0:
            raise ValueError("window_days must be positive for the rolling counting method")
        return self


class StatusThresholds(BaseModel):
    """Per-user yellow/red cut-offs. Range checks live in residency.validation."""
    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)

    yellow: int = 60
    red: int = 80

    @classmethod
    def for_rule(cls, rule: RuleDefinition, yellow: int = 60, red: int = 80) -> "StatusThresholds":
        """Scale the 90-day defaults to another allowance (60/90 and 80/90 of days_allowed).

        From two days up the result satisfies 0 <= yellow < red < days_allowed,
        clamping configured values that would not. A single-day allowance has no
        room for that, so both cut-offs sit on the limit and the status goes
        straight from safe to critical.
        """
        allowed = rule.days_allowed
        if allowed != 90:
            yellow, red = allowed * yellow // 90, allowed * red // 90
        if allowed < 2:
            return cls(yellow=allowed, red=allowed)
        red = min(max(red, 1), allowed - 1)
        yellow = min(max(yellow, 0), red - 1)
        return cls(yellow=yellow, red=red)
