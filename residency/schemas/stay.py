"""Stay record schemas."""
import enum
from datetime import date

from pydantic import BaseModel, ConfigDict, field_validator, model_validator
from pydantic.alias_generators import to_camel

from residency.dates import parse_calendar_date

DEFAULT_JURISDICTION = "schengen"


class StayCategory(str, enum.Enum):
    personal = "personal"
    business = "business"


class StayRecord(BaseModel):
    """One stay in one jurisdiction; both dates inclusive."""
    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)

    id: str
    start_date: date
    end_date: date
    jurisdiction_code: str = DEFAULT_JURISDICTION
    category: StayCategory = StayCategory.personal
    country: str | None = None
    notes: str | None = None

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v):
        # Portal ids are integers for saved trips, strings for drafts
        return str(v) if isinstance(v, int) else v

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def parse_dates(cls, v):
        # One parser for every entry point; ints and epoch timestamps are rejected
        return parse_calendar_date(v)

    @field_validator("jurisdiction_code", mode="before")
    @classmethod
    def normalize_code(cls, v: str | None) -> str:
        # Trips saved before multi-jurisdiction support have no code
        return (v or "").strip().lower() or DEFAULT_JURISDICTION

    @model_validator(mode="after")
    def check_dates(self):
        if self.end_date < self.start_date:
            raise ValueError("end_date must be on or after start_date")
        return self

    @property
    def duration_days(self) -> int:
        return (self.end_date - self.start_date).days + 1
