"""Status classifier: days used -> safe / warning / danger / critical."""
from residency.schemas.jurisdiction import ComplianceStatus, StatusThresholds

# Ordered least to most severe
SEVERITY = (
    ComplianceStatus.safe,
    ComplianceStatus.warning,
    ComplianceStatus.danger,
    ComplianceStatus.critical,
)


def classify(days_used: int, days_allowed: int, thresholds: StatusThresholds) -> ComplianceStatus:
    """No validation here; callers check thresholds with validate_thresholds."""
    if days_used >= days_allowed:
        return ComplianceStatus.critical
    if days_used >= thresholds.red:
        return ComplianceStatus.danger
    if days_used >= thresholds.yellow:
        return ComplianceStatus.warning
    return ComplianceStatus.safe


def usage_percentage(days_used: int, days_allowed: int) -> float:
    return round(days_used / days_allowed * 100, 1)


def worst_status(statuses) -> ComplianceStatus:
    return max(statuses, key=SEVERITY.index, default=ComplianceStatus.safe)
