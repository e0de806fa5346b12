"""Alert policy for the daily threshold check.

Decides whether a traveller should be told about their usage today. Sending
the message belongs to the caller.
"""
from __future__ import annotations

import enum
import logging
from datetime import date

from residency.config import get_settings
from residency.schemas.jurisdiction import StatusThresholds

logger = logging.getLogger(__name__)


class AlertLevel(str, enum.Enum):
    warning = "warning"
    danger = "danger"
    urgent = "urgent"


def alert_level(
    days_used: int,
    thresholds: StatusThresholds,
    days_allowed: int,
    urgent_margin: int | None = None,
) -> AlertLevel | None:
    """urgent at days_allowed - margin (85 of 90 by default), then red, then yellow."""
    margin = urgent_margin if urgent_margin is not None else get_settings().urgent_margin_days
    if days_used >= days_allowed - margin:
        return AlertLevel.urgent
    if days_used >= thresholds.red:
        return AlertLevel.danger
    if days_used >= thresholds.yellow:
        return AlertLevel.warning
    return None


def should_send_alert(
    level: AlertLevel | None,
    last_level: AlertLevel | None,
    last_sent_on: date | None,
    today: date,
    cooldown_days: int | None = None,
) -> bool:
    """Same level is not repeated within the cooldown; a new level always goes out."""
    if level is None:
        return False
    if last_level != level or last_sent_on is None:
        return True
    cooldown = cooldown_days if cooldown_days is not None else get_settings().alert_cooldown_days
    days_since = (today - last_sent_on).days
    if days_since < cooldown:
        logger.debug("Suppressing %s alert: last sent %d day(s) ago", level.value, days_since)
        return False
    return True
