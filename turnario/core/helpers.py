# turnario/core/helpers.py
"""
Display helpers for entries, shared by route handlers.
"""

from turnario.core.models import (
    AppointmentEntry,
    HolidayEntry,
    OnCallEntry,
    OvertimeDestination,
    OvertimeEntry,
    PermitEntry,
    ProjectEntry,
)
from turnario.core.schedule.vacation import holiday_end_date


def _time_range(entry) -> str:
    if entry.start_time and entry.end_time:
        return f"{entry.start_time}-{entry.end_time}"
    return ""


def _with_notes(text: str, notes: str) -> str:
    return f"{text} - {notes}" if notes else text


def describe_entry(entry) -> str:
    """
    Long description of an entry, used as tooltip text.

    Raises:
        TypeError: for objects that are not one of the entry kinds
    """
    if isinstance(entry, HolidayEntry):
        days = "day" if entry.value == 1 else "days"
        text = f"Holiday: {entry.value} {days} ({entry.date.isoformat()} - {holiday_end_date(entry).isoformat()})"
    elif isinstance(entry, PermitEntry):
        text = f"Permit {entry.category.value}: {entry.value:g}h {_time_range(entry)}".rstrip()
    elif isinstance(entry, OvertimeEntry):
        banked = " (banked)" if entry.destination == OvertimeDestination.BANKED else ""
        text = f"Overtime {entry.time_slot.value}: {entry.value:g}h {_time_range(entry)}".rstrip() + banked
    elif isinstance(entry, OnCallEntry):
        text = f"On-call {entry.on_call_type.value}: {entry.value:g}h {_time_range(entry)}".rstrip()
    elif isinstance(entry, ProjectEntry):
        text = f"Project: {entry.value:g}h {_time_range(entry)}".rstrip()
    elif isinstance(entry, AppointmentEntry):
        text = f"{entry.title or 'Appointment'} {_time_range(entry)}".rstrip()
    else:
        raise TypeError(f"Unknown entry type: {type(entry).__name__}")

    return _with_notes(text, entry.notes)


def short_entry_text(entry) -> str:
    """Compact label for a calendar cell."""
    if isinstance(entry, HolidayEntry):
        return "Holiday"
    if isinstance(entry, PermitEntry):
        return f"P {entry.value:g}h"
    if isinstance(entry, OvertimeEntry):
        return f"OT {entry.value:g}h"
    if isinstance(entry, OnCallEntry):
        return f"OC {entry.value:g}h"
    if isinstance(entry, ProjectEntry):
        return f"PRJ {entry.value:g}h"
    if isinstance(entry, AppointmentEntry):
        return entry.title or "Appt"
    raise TypeError(f"Unknown entry type: {type(entry).__name__}")
