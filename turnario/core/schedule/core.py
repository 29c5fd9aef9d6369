"""Shift pattern parsing and shift resolution for a date."""

import datetime
from collections.abc import Iterable, Mapping

from turnario.core.constants import (
    CYCLE_START_NOT_MONDAY_WARNING,
    DAYS_PER_WEEK,
    SHIFT_REST,
    SHIFT_UNDEFINED,
    TIMELESS_SHIFT_NAMES,
    WEEK_START_WEEKDAY,
    WEEKDAY_NAMES,
)
from turnario.core.models import Cycle, Shift, ShiftDefinition, ShiftOverride
from turnario.core.time_utils import hours_between, parse_calendar_date

weekday_names = list(WEEKDAY_NAMES)


def parse_pattern(text: str | None) -> list[Shift]:
    """
    Parse the cycle pattern text into an ordered list of shifts.

    One row per line, "day_of_week,name,start,end". Blank lines are dropped,
    every column is trimmed and a missing name becomes "N/D". The order of the
    rows is the cycle phase 0..L-1.
    """
    if not text:
        return []

    pattern = []
    for line in text.split("\n"):
        line = line.strip()
        if not line:
            continue

        columns = [c.strip() for c in line.split(",")]
        columns += [""] * (4 - len(columns))
        day_of_week, name, start, end = columns[:4]

        pattern.append(
            Shift(
                day_of_week=day_of_week,
                name=name or SHIFT_UNDEFINED,
                start=start,
                end=end,
            )
        )

    return pattern


def apply_shift_definitions(
    pattern: list[Shift],
    definitions: Mapping[str, ShiftDefinition],
) -> list[Shift]:
    """
    Replace the times written in the pattern with the current shift definitions.

    Rest and Empty never get times, shifts without a definition keep their own.
    """
    result = []
    for shift in pattern:
        if shift.name in TIMELESS_SHIFT_NAMES:
            result.append(shift.model_copy(update={"start": "", "end": ""}))
            continue

        definition = definitions.get(shift.name)
        if definition is not None:
            result.append(shift.model_copy(update={"start": definition.start, "end": definition.end}))
        else:
            result.append(shift)

    return result


def build_pattern_text(
    names: Iterable[str],
    definitions: Mapping[str, ShiftDefinition],
) -> str:
    """Rebuild the pattern text from a list of shift names, one row per day."""
    lines = []
    for index, name in enumerate(n for n in names if n):
        day_of_week = WEEKDAY_NAMES[index % DAYS_PER_WEEK]
        definition = definitions.get(name)

        if name in TIMELESS_SHIFT_NAMES or definition is None:
            start = end = ""
        else:
            start, end = definition.start, definition.end

        lines.append(f"{day_of_week},{name},{start},{end}")

    return "\n".join(lines)


def resolve_shift(
    date,
    cycle: Cycle,
    pattern: list[Shift],
    overrides: Mapping[str, ShiftOverride] | None = None,
) -> Shift | ShiftOverride | None:
    """
    Resolve the shift that applies on a date.

    1. An override for the date wins, also outside the cycle bounds.
    2. No cycle start, a date before it or after the cycle end gives None.
    3. Otherwise the pattern slot at (days since start) mod L.
    """
    day = parse_calendar_date(date)

    if overrides:
        override = overrides.get(day.isoformat())
        if override is not None:
            return override

    if cycle.start_date is None or day < cycle.start_date:
        return None
    if cycle.end_date is not None and day > cycle.end_date:
        return None
    if not pattern:
        return None

    diff_days = (day - cycle.start_date).days
    return pattern[diff_days % len(pattern)]


def cycle_start_warning(cycle: Cycle) -> str | None:
    """Warning shown when the cycle does not start on a Monday."""
    if cycle.start_date is None:
        return None
    if cycle.start_date.weekday() != WEEK_START_WEEKDAY:
        return CYCLE_START_NOT_MONDAY_WARNING
    return None


def is_rest(shift: Shift | ShiftOverride | None) -> bool:
    return shift is not None and shift.name == SHIFT_REST


def shift_hours(date: datetime.date, shift: Shift | ShiftOverride | None) -> float:
    """
    Working hours of a resolved shift.

    Rest days, empty slots and shifts without both times count as 0 hours.
    """
    if shift is None or shift.name in TIMELESS_SHIFT_NAMES:
        return 0.0
    if not shift.start or not shift.end:
        return 0.0
    return hours_between(date, shift.start, shift.end)
