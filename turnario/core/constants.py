# turnario/core/constants.py
from typing import Final

# ==========================
# Shift names
# ==========================

#: Morning shift.
SHIFT_MORNING: Final[str] = "Morning"

#: Afternoon shift.
SHIFT_AFTERNOON: Final[str] = "Afternoon"

#: Night shift, normally crossing midnight.
SHIFT_NIGHT: Final[str] = "Night"

#: Rest day. Counted in the payroll rest-day counter, never carries times.
SHIFT_REST: Final[str] = "Rest"

#: Empty slot in a cycle (no shift planned). Never carries times.
SHIFT_EMPTY: Final[str] = "Empty"

#: Sentinel for a pattern row whose name column is blank.
SHIFT_UNDEFINED: Final[str] = "N/D"

#: Vocabulary offered when editing a pattern.
SHIFT_NAMES: Final[tuple[str, ...]] = (
    SHIFT_MORNING,
    SHIFT_AFTERNOON,
    SHIFT_NIGHT,
    SHIFT_REST,
    SHIFT_EMPTY,
)

#: Shift names that never have start/end times.
TIMELESS_SHIFT_NAMES: Final[tuple[str, ...]] = (SHIFT_REST, SHIFT_EMPTY)

#: Default shift definitions for a new profile.
DEFAULT_SHIFT_DEFINITIONS: Final[dict[str, dict[str, str]]] = {
    SHIFT_MORNING: {"start": "08:00", "end": "14:00"},
    SHIFT_AFTERNOON: {"start": "16:00", "end": "22:00"},
    SHIFT_NIGHT: {"start": "22:00", "end": "06:00"},
    SHIFT_REST: {"start": "", "end": ""},
    SHIFT_EMPTY: {"start": "", "end": ""},
}


# ==========================
# Week structure
# ==========================

DAYS_PER_WEEK: Final[int] = 7

SECONDS_PER_HOUR: Final[int] = 3600

#: Cycles are expected to start on a Monday (datetime.weekday() == 0).
WEEK_START_WEEKDAY: Final[int] = 0

#: Weekday labels indexed like datetime.weekday() (0=Monday, 6=Sunday).
WEEKDAY_NAMES: Final[tuple[str, ...]] = (
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
)


# ==========================
# Entry kinds
# ==========================

KIND_HOLIDAY: Final[str] = "holiday"


# ==========================
# On-call notes
# ==========================

#: Default label used in the notes of split on-call entries.
ON_CALL_LABEL: Final[str] = "On-call"

PART_1_MARKER: Final[str] = "(Part 1)"
PART_2_MARKER: Final[str] = "(Part 2)"


# ==========================
# User-facing messages
# ==========================

CYCLE_START_NOT_MONDAY_WARNING: Final[str] = (
    "Warning: for correct weekday labels the cycle start date should be a Monday."
)
