"""Pytest configuration and fixtures."""
from datetime import date, timedelta
from itertools import count

import pytest

from residency.config import get_settings
from residency.schemas.jurisdiction import CountingMethod, RuleDefinition, StatusThresholds
from residency.schemas.stay import StayRecord
from residency.seed import default_catalog


@pytest.fixture(autouse=True)
def fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def ref():
    """Fixed reference date so nothing depends on the wall clock."""
    return date(2025, 6, 30)


@pytest.fixture
def schengen():
    return default_catalog().require_rule("schengen")


@pytest.fixture
def other_zone():
    return RuleDefinition(
        code="other-zone",
        name="Other Zone",
        days_allowed=90,
        window_days=180,
        counting_method=CountingMethod.rolling,
    )


@pytest.fixture
def thresholds():
    return StatusThresholds(yellow=60, red=80)


@pytest.fixture
def make_stay(ref):
    """Build a stay from day offsets relative to the reference date (negative = past)."""
    ids = count(1)

    def _make(start_offset: int, end_offset: int, code: str = "schengen", **kwargs) -> StayRecord:
        return StayRecord(
            id=str(next(ids)),
            start_date=ref + timedelta(days=start_offset),
            end_date=ref + timedelta(days=end_offset),
            jurisdiction_code=code,
            **kwargs,
        )

    return _make
