"""Holiday (ferie) expansion, splitting and balance."""

import calendar
import datetime
from collections.abc import Iterable

from turnario.core.models import HolidayEntry, ProfileState, new_entry_id
from turnario.core.time_utils import InvalidDateError, InvalidTimeRangeError, add_days, parse_calendar_date


def holiday_end_date(entry: HolidayEntry) -> datetime.date:
    """Last day of the holiday (the start date for 1-day holidays), never past date.max."""
    days_left = (datetime.date.max - entry.date).days
    return add_days(entry.date, min(max(entry.value, 1) - 1, days_left))


def holiday_days_between(entry: HolidayEntry, first: datetime.date, last: datetime.date) -> list[datetime.date]:
    """
    Days of a holiday that fall inside the inclusive range first..last.

    The overlap is computed from the bounds, so the cost depends on the range
    and not on how long the holiday is.
    """
    if entry.value < 1:
        return []
    start = max(entry.date, first)
    end = min(holiday_end_date(entry), last)
    return [add_days(start, offset) for offset in range((end - start).days + 1)]


def expand_holiday_days(entry: HolidayEntry) -> list[datetime.date]:
    """
    Return the calendar days a holiday occupies.

    Exactly ``entry.value`` consecutive days starting at ``entry.date``;
    an entry with no days occupies nothing.
    """
    return holiday_days_between(entry, entry.date, holiday_end_date(entry))


def split_holiday_at_day(entry: HolidayEntry, day) -> list[HolidayEntry]:
    """
    Remove one day from a holiday and return the entries that replace it.

    - 1-day holiday: nothing is left
    - first day: one entry starting the day after, one day shorter
    - last day: same start, one day shorter
    - interior day: the part before keeps the id, the part after gets a new one

    Raises:
        InvalidDateError: ``day`` is not part of the holiday
    """
    day_to_remove = parse_calendar_date(day)
    offset = (day_to_remove - entry.date).days

    if offset < 0 or offset >= entry.value:
        raise InvalidDateError(
            f"{day_to_remove.isoformat()} is not part of holiday {entry.id} "
            f"({entry.date.isoformat()} - {holiday_end_date(entry).isoformat()})"
        )

    if entry.value <= 1:
        return []

    if offset == 0:
        return [entry.model_copy(update={"date": add_days(entry.date, 1), "value": entry.value - 1})]

    if offset == entry.value - 1:
        return [entry.model_copy(update={"value": entry.value - 1})]

    before = entry.model_copy(update={"value": offset})
    after = entry.model_copy(
        update={
            "id": new_entry_id(),
            "date": add_days(day_to_remove, 1),
            "value": entry.value - offset - 1,
        }
    )
    return [part for part in (before, after) if part.value > 0]


def holiday_from_range(start, end, notes: str = "") -> HolidayEntry:
    """
    Build a holiday entry from an inclusive date range.

    Raises:
        InvalidTimeRangeError: end is before start
    """
    start_day = parse_calendar_date(start)
    end_day = parse_calendar_date(end)
    if end_day < start_day:
        raise InvalidTimeRangeError(f"Holiday end {end_day} is before start {start_day}")

    return HolidayEntry(date=start_day, value=(end_day - start_day).days + 1, notes=notes)


def holiday_days_in_month(entries: Iterable, year: int, month: int) -> set[datetime.date]:
    """Days of the month covered by any holiday entry, also ones starting earlier."""
    first = datetime.date(year, month, 1)
    last = datetime.date(year, month, calendar.monthrange(year, month)[1])
    days: set[datetime.date] = set()
    for entry in entries:
        if isinstance(entry, HolidayEntry):
            days.update(holiday_days_between(entry, first, last))
    return days


def used_holiday_days(entries: Iterable) -> int:
    return sum(e.value for e in entries if isinstance(e, HolidayEntry))


def remaining_holidays(profile: ProfileState) -> int:
    """Holiday balance: current year + carried over - days already booked."""
    total = profile.total_current_year_holidays + profile.total_previous_years_holidays
    return total - used_holiday_days(profile.entries)
