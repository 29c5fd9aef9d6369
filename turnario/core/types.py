# turnario/core/types.py

"""
Custom type definitions shared by the engine and the HTTP layer.

NewType wrappers keep year and month numbers apart.
"""

from datetime import date
from typing import NewType, TypedDict

from turnario.core.models import Shift, ShiftOverride

Year = NewType("Year", int)
Month = NewType("Month", int)

Hours = float


class DayInfo(TypedDict, total=False):
    """
    Type definition for a single calendar day.
    """

    date: date
    weekday_index: int
    weekday_name: str
    shift: Shift | ShiftOverride | None
    is_override: bool
    hours: Hours
    on_holiday: bool
    is_public_holiday: bool
    entries: list


class MonthStats(TypedDict):
    """Hours booked in a month per entry kind."""

    year: Year
    month: Month
    overtime_hours: Hours
    permit_hours: Hours
    project_hours: Hours


class RangeReport(TypedDict):
    """Report over an arbitrary date range."""

    start: date
    end: date
    used_holidays_in_range: int
    overtime_by_month: dict[str, Hours]
    permits_by_category: dict[str, Hours]
    total_permit_hours: Hours
    remaining_holidays: int
