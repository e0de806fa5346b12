"""Expiration finder for rolling windows."""
from collections.abc import Collection
from datetime import date

from residency.services.calendar import from_epoch_day


def next_expiration(covered_days: Collection[int], window_days: int) -> date | None:
    """Date on which the oldest counted day leaves the rolling window."""
    if not covered_days:
        return None
    return from_epoch_day(min(covered_days) + window_days)
