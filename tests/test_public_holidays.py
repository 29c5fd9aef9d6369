"""
Unit tests for Italian public holidays and on-call type suggestion.
"""

import datetime
import sys
from pathlib import Path

import pytest

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

# ruff: noqa: E402
from turnario.core.holidays import (
    easter_sunday,
    is_public_holiday,
    on_call_type_for_date,
    pasquetta,
    public_holidays,
)
from turnario.core.models import OnCallType


@pytest.mark.parametrize(
    "year,expected",
    [
        (2024, datetime.date(2024, 3, 31)),
        (2025, datetime.date(2025, 4, 20)),
        (2026, datetime.date(2026, 4, 5)),
    ],
)
def test_easter_sunday(year, expected):
    assert easter_sunday(year) == expected


def test_pasquetta_is_day_after_easter():
    assert pasquetta(2025) == datetime.date(2025, 4, 21)


class TestPublicHolidays:
    def test_national_holidays(self):
        holidays = public_holidays(2025)

        assert len(holidays) == 12
        assert datetime.date(2025, 4, 25) in holidays
        assert datetime.date(2025, 6, 2) in holidays
        assert datetime.date(2025, 12, 26) in holidays

    def test_patron_day_is_added(self):
        assert datetime.date(2025, 6, 29) in public_holidays(2025, "06-29")
        assert datetime.date(2025, 6, 29) not in public_holidays(2025)

    def test_leap_day_patron_outside_leap_year(self):
        assert len(public_holidays(2025, "02-29")) == 12

    def test_sunday_is_a_holiday(self):
        assert is_public_holiday(datetime.date(2025, 3, 9)) is True

    def test_plain_weekday_is_not(self):
        assert is_public_holiday(datetime.date(2025, 3, 10)) is False


class TestOnCallType:
    def test_weekday(self):
        assert on_call_type_for_date(datetime.date(2025, 3, 11)) == OnCallType.WEEKDAY

    def test_christmas(self):
        assert on_call_type_for_date(datetime.date(2025, 12, 25)) == OnCallType.HOLIDAY
