# turnario/core/oncall.py
"""
On-call (reperibilità) booking split.

An on-call window runs from an evening start time to a morning end time on
the following day. It is never stored as one entry: every booking becomes two
sibling entries so that each calendar day only carries the hours that fall on
it.

    Part 1: day      start -> 00:00
    Part 2: day + 1  00:00 -> end

The two values always add up to the duration of the whole window, for example
22:00-07:00 gives 2h + 7h = 9h.
"""

import calendar
import datetime
import logging
import uuid
from collections.abc import Iterable

from turnario.core.config import MIDNIGHT
from turnario.core.constants import ON_CALL_LABEL, PART_1_MARKER, PART_2_MARKER
from turnario.core.holidays import on_call_type_for_date
from turnario.core.models import OnCallEntry, OnCallType, OnCallWindow
from turnario.core.time_utils import (
    InvalidTimeRangeError,
    add_days,
    hours_between,
    parse_calendar_date,
    parse_clock_time,
)

logger = logging.getLogger(__name__)


def _part_id(day: datetime.date, start: str, end: str) -> str:
    return f"{day.isoformat()}-{start}-{end}-{uuid.uuid4().hex[:8]}"


def _part_notes(label: str, marker: str) -> str:
    return f"{label or ON_CALL_LABEL} {marker}"


def crosses_midnight(window: OnCallWindow) -> bool:
    """True when the window ends on the next day (and does not end exactly at midnight)."""
    start = parse_clock_time(window.start, "start")
    end = parse_clock_time(window.end, "end")
    return end < start and end != datetime.time(0, 0)


def split_on_call_window(
    day,
    on_call_type: OnCallType,
    window: OnCallWindow | None = None,
    notes: str = "",
) -> tuple[OnCallEntry, OnCallEntry]:
    """
    Split an on-call booking starting on ``day`` into its two day-bound parts.

    Args:
        day: Day the window starts (date or "YYYY-MM-DD")
        on_call_type: Weekday or Holiday, copied to both parts
        window: Start/end clock times, 22:00-07:00 when omitted
        notes: Label for the notes, "On-call" when empty

    Returns:
        (part1, part2) where part1.value + part2.value equals the window duration

    Raises:
        InvalidTimeRangeError: the window does not cross midnight
    """
    window = window or OnCallWindow()
    start_day = parse_calendar_date(day)

    if not crosses_midnight(window):
        raise InvalidTimeRangeError(
            f"On-call window {window.start}-{window.end} must cross midnight"
        )

    next_day = add_days(start_day, 1)
    whole = hours_between(start_day, window.start, window.end)

    part1 = OnCallEntry(
        id=_part_id(start_day, window.start, MIDNIGHT),
        date=start_day,
        start_time=window.start,
        end_time=MIDNIGHT,
        value=hours_between(start_day, window.start, MIDNIGHT),
        on_call_type=on_call_type,
        notes=_part_notes(notes, PART_1_MARKER),
    )
    part2 = OnCallEntry(
        id=_part_id(next_day, MIDNIGHT, window.end),
        date=next_day,
        start_time=MIDNIGHT,
        end_time=window.end,
        # Rounded remainder, so the parts always add up to the window
        value=round(whole - part1.value, 2),
        on_call_type=on_call_type,
        notes=_part_notes(notes, PART_2_MARKER),
    )

    logger.debug(
        "Split on-call %s %s-%s into %.2fh + %.2fh",
        start_day,
        window.start,
        window.end,
        part1.value,
        part2.value,
    )
    return part1, part2


def split_on_call_days(
    days: Iterable[int],
    month: int,
    year: int,
    on_call_type: OnCallType | None = None,
    window: OnCallWindow | None = None,
    label: str = "",
    patron_day: str | None = None,
) -> list[OnCallEntry]:
    """
    Book on-call for several days of one month at once.

    Days are deduplicated and handled in ascending order. A day number that
    does not exist in the month is logged and skipped. With ``on_call_type``
    None the type of each day is suggested from the public holiday calendar.

    Returns:
        Flat list of entries, two per booked day
    """
    window = window or OnCallWindow()
    if not crosses_midnight(window):
        raise InvalidTimeRangeError(
            f"On-call window {window.start}-{window.end} must cross midnight"
        )

    days_in_month = calendar.monthrange(year, month)[1]
    entries: list[OnCallEntry] = []

    for day_number in sorted(set(days)):
        if not 1 <= day_number <= days_in_month:
            logger.warning(
                "Skipping on-call day %s: not a day of %04d-%02d", day_number, year, month
            )
            continue

        day = datetime.date(year, month, day_number)
        day_type = on_call_type or on_call_type_for_date(day, patron_day)
        entries.extend(split_on_call_window(day, day_type, window, label))

    logger.info("Booked on-call for %d day(s) in %04d-%02d", len(entries) // 2, year, month)
    return entries
