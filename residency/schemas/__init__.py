from residency.schemas.stay import StayCategory, StayRecord
from residency.schemas.jurisdiction import (
    ComplianceStatus,
    CountingMethod,
    JurisdictionType,
    RuleDefinition,
    StatusThresholds,
)
from residency.schemas.compliance import ComplianceHistoryPoint, ComplianceSummary, PlanningResult
from residency.schemas.family import FamilyMember, GroupOverview, MemberSummary
