"""Family / group overview schemas."""
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from residency.schemas.compliance import ComplianceSummary
from residency.schemas.jurisdiction import ComplianceStatus


class FamilyMember(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)

    id: str
    name: str
    relationship: str | None = None  # spouse, child, parent, ...
    nationality: str | None = None
    notes: str | None = None


class MemberSummary(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)

    member: FamilyMember
    summary: ComplianceSummary


class GroupOverview(BaseModel):
    """Primary traveller plus each tracked family member, computed independently."""
    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)

    jurisdiction_code: str
    primary: ComplianceSummary
    family: list[MemberSummary] = []
    worst_status: ComplianceStatus
