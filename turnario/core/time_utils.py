import datetime
import logging
import re
from typing import Any

from turnario.core.config import DATE_FORMAT_ISO, TIME_FORMAT_HM, TIME_FORMAT_HMS
from turnario.core.constants import SECONDS_PER_HOUR

logger = logging.getLogger(__name__)

_ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


class TimeArithmeticError(ValueError):
    """Base class for date/time parsing and duration errors."""

    pass


class InvalidDateError(TimeArithmeticError):
    """A calendar date string is not a valid YYYY-MM-DD day."""

    pass


class InvalidTimeError(TimeArithmeticError):
    """A clock time string is not a valid HH:MM time."""

    pass


class MissingTimeError(TimeArithmeticError):
    """A date or clock time needed for a duration is missing."""

    pass


class InvalidTimeRangeError(TimeArithmeticError):
    """A span is empty or its direction cannot be disambiguated."""

    pass


def parse_calendar_date(value: Any) -> datetime.date:
    """Parse a strict "YYYY-MM-DD" string into a calendar day.

    A ``datetime.date`` stands for midnight UTC of that day, so no timezone
    offset can shift it to a neighbouring day. Dates pass through unchanged.

    Raises:
        InvalidDateError: empty, wrongly separated, incomplete or impossible dates
    """
    if isinstance(value, datetime.datetime):
        return value.date()
    if isinstance(value, datetime.date):
        return value

    if not isinstance(value, str):
        logger.error("Unsupported date type. type=%s value=%r", type(value).__name__, value)
        raise InvalidDateError(f"Unsupported date type: {type(value).__name__}")

    s = value.strip()
    if not _ISO_DATE_RE.match(s):
        raise InvalidDateError(f"Invalid calendar date {value!r}, expected YYYY-MM-DD")

    try:
        return datetime.datetime.strptime(s, DATE_FORMAT_ISO).date()
    except ValueError as e:
        raise InvalidDateError(f"Invalid calendar date {value!r}: {e}") from e


def parse_clock_time(value: Any, field_name: str = "time") -> datetime.time:
    """Parse "HH:MM" or "HH:MM:SS" into a ``datetime.time``.

    Raises:
        MissingTimeError: value is None or an empty string
        InvalidTimeError: value cannot be parsed
    """
    if isinstance(value, datetime.time):
        return value

    if value is None:
        raise MissingTimeError(f"{field_name} is missing")

    if not isinstance(value, str):
        logger.error("Unsupported %s type. type=%s value=%r", field_name, type(value).__name__, value)
        raise InvalidTimeError(f"Unsupported {field_name} type: {type(value).__name__}")

    s = value.strip()
    if not s:
        raise MissingTimeError(f"{field_name} is empty")

    try:
        if len(s.split(":")) == 2:
            return datetime.datetime.strptime(s, TIME_FORMAT_HM).time()
        return datetime.datetime.strptime(s, TIME_FORMAT_HMS).time()
    except ValueError as e:
        raise InvalidTimeError(f"Invalid {field_name} format: {value!r}") from e


def span_datetimes(
    date: Any,
    start_time: Any,
    end_time: Any,
) -> tuple[datetime.datetime, datetime.datetime]:
    """Return (start, end) datetimes anchored at ``date``.

    An end time earlier than the start time falls on the next calendar day.
    Equal times give an empty span.
    """
    if date is None or date == "":
        raise MissingTimeError("date is missing")

    day = parse_calendar_date(date)
    start_t = parse_clock_time(start_time, "start_time")
    end_t = parse_clock_time(end_time, "end_time")

    start_dt = datetime.datetime.combine(day, start_t)
    end_dt = datetime.datetime.combine(day, end_t)

    # Overnight
    if end_dt < start_dt:
        end_dt += datetime.timedelta(days=1)

    return start_dt, end_dt


def hours_between(date: Any, start_time: Any, end_time: Any) -> float:
    """
    Elapsed wall-clock hours between two clock times on ``date``.

    - equal times give 0, never a full day
    - an end before the start is taken as the next day (overnight)
    - the result is rounded to 2 decimals

    Raises:
        MissingTimeError: date, start_time or end_time is missing
        InvalidDateError / InvalidTimeError: malformed input
    """
    start_dt, end_dt = span_datetimes(date, start_time, end_time)
    hours = (end_dt - start_dt).total_seconds() / SECONDS_PER_HOUR
    return round(hours, 2)


def positive_hours_between(date: Any, start_time: Any, end_time: Any) -> float:
    """Like :func:`hours_between` but an empty span raises InvalidTimeRangeError."""
    hours = hours_between(date, start_time, end_time)
    if hours <= 0:
        raise InvalidTimeRangeError(f"End time must be after start time ({start_time} - {end_time})")
    return hours


def add_days(date: datetime.date, days: int) -> datetime.date:
    return date + datetime.timedelta(days=days)
