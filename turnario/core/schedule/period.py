"""Calendar data for a month."""

import calendar
import datetime
from collections import defaultdict

from turnario.core.holidays import is_public_holiday
from turnario.core.models import ProfileState
from turnario.core.time_utils import TimeArithmeticError
from turnario.core.types import DayInfo

from .core import apply_shift_definitions, parse_pattern, resolve_shift, shift_hours, weekday_names
from .vacation import holiday_days_in_month


def generate_month_data(profile: ProfileState, year: int, month: int) -> list[DayInfo]:
    """
    Build one DayInfo per day of the month.

    Args:
        profile: Profile with pattern, overrides and entries
        year: Year
        month: Month (1-12)

    Returns:
        List of days with the resolved shift, holiday flags and the entries
        dated that day. Days on holiday have 0 shift hours.
    """
    pattern = apply_shift_definitions(parse_pattern(profile.shift_pattern), profile.shift_definitions)
    cycle = profile.cycle
    holiday_days = holiday_days_in_month(profile.entries, year, month)

    entries_by_date = defaultdict(list)
    for entry in profile.entries:
        if entry.date.year == year and entry.date.month == month:
            entries_by_date[entry.date].append(entry)

    days = []
    for day_number in range(1, calendar.monthrange(year, month)[1] + 1):
        current_date = datetime.date(year, month, day_number)
        shift = resolve_shift(current_date, cycle, pattern, profile.shift_overrides)
        on_holiday = current_date in holiday_days

        hours = 0.0
        if not on_holiday:
            try:
                hours = shift_hours(current_date, shift)
            except TimeArithmeticError:
                hours = 0.0

        days.append(
            {
                "date": current_date,
                "weekday_index": current_date.weekday(),
                "weekday_name": weekday_names[current_date.weekday()],
                "shift": shift,
                "is_override": current_date.isoformat() in profile.shift_overrides,
                "hours": hours,
                "on_holiday": on_holiday,
                "is_public_holiday": is_public_holiday(current_date, profile.patron_day),
                "entries": entries_by_date.get(current_date, []),
            }
        )

    return days
