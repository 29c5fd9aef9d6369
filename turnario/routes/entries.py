# turnario/routes/entries.py
"""
Entry endpoints: create and delete entries, holidays and on-call bookings.
"""

import logging

from fastapi import APIRouter, Body, Depends, HTTPException

from turnario.core.holidays import on_call_type_for_date
from turnario.core.models import Entry, HolidayEntry, OnCallEntry, OnCallWindow, TimedEntry
from turnario.core.oncall import split_on_call_days, split_on_call_window
from turnario.core.schedule import holiday_from_range, split_holiday_at_day
from turnario.core.storage import JsonProfileRepository, PendingChanges
from turnario.core.time_utils import positive_hours_between

from .shared import (
    HolidayRangeCreate,
    HolidaySplit,
    OnCallBatchCreate,
    OnCallCreate,
    commit_profile,
    current_profile,
    entry_not_found,
    get_pending,
    get_repository,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["entries"])


def _prepare_entry(entry) -> list:
    """
    Turn a submitted entry into the entries to store.

    Timed entries without a value get it from their times. On-call is always
    stored as its two day-bound parts.
    """
    if isinstance(entry, HolidayEntry):
        if entry.value < 1:
            raise HTTPException(status_code=422, detail="A holiday must last at least one day")
        return [entry]

    if isinstance(entry, OnCallEntry):
        times = {"start": entry.start_time, "end": entry.end_time}
        window = OnCallWindow(**{key: value for key, value in times.items() if value})
        return list(split_on_call_window(entry.date, entry.on_call_type, window, entry.notes))

    if isinstance(entry, TimedEntry) and entry.start_time and entry.end_time:
        hours = positive_hours_between(entry.date, entry.start_time, entry.end_time)
        if not entry.value:
            entry = entry.model_copy(update={"value": hours})

    return [entry]


@router.post("/entries", status_code=201)
def create_entry(
    entry: Entry = Body(...),
    repository: JsonProfileRepository = Depends(get_repository),
    pending: PendingChanges = Depends(get_pending),
):
    profile = current_profile(repository, pending)
    created = _prepare_entry(entry)
    profile.entries.extend(created)
    commit_profile(profile, repository, pending)
    logger.info("Created %d %s entr%s", len(created), entry.kind, "y" if len(created) == 1 else "ies")
    return {"created": created}


@router.delete("/entries/{entry_id}")
def delete_entry(
    entry_id: str,
    repository: JsonProfileRepository = Depends(get_repository),
    pending: PendingChanges = Depends(get_pending),
):
    profile = current_profile(repository, pending)
    entry = profile.find_entry(entry_id)
    if entry is None:
        raise entry_not_found(entry_id)

    profile.entries = [e for e in profile.entries if e.id != entry_id]
    commit_profile(profile, repository, pending)
    return {"deleted": entry_id}


@router.post("/holidays", status_code=201)
def create_holiday(
    payload: HolidayRangeCreate,
    repository: JsonProfileRepository = Depends(get_repository),
    pending: PendingChanges = Depends(get_pending),
):
    """Book a holiday for an inclusive date range."""
    profile = current_profile(repository, pending)
    holiday = holiday_from_range(payload.start, payload.end, payload.notes)
    profile.entries.append(holiday)
    commit_profile(profile, repository, pending)
    return {"created": [holiday]}


@router.post("/holidays/{entry_id}/split")
def split_holiday(
    entry_id: str,
    payload: HolidaySplit,
    repository: JsonProfileRepository = Depends(get_repository),
    pending: PendingChanges = Depends(get_pending),
):
    """Remove one day from a holiday, replacing it with what is left."""
    profile = current_profile(repository, pending)
    entry = profile.find_entry(entry_id)
    if not isinstance(entry, HolidayEntry):
        raise entry_not_found(entry_id)

    replacements = split_holiday_at_day(entry, payload.day)

    index = next(i for i, e in enumerate(profile.entries) if e.id == entry_id)
    profile.entries[index : index + 1] = replacements
    commit_profile(profile, repository, pending)
    return {"removed": entry_id, "replacements": replacements}


@router.post("/oncall", status_code=201)
def create_on_call(
    payload: OnCallCreate,
    repository: JsonProfileRepository = Depends(get_repository),
    pending: PendingChanges = Depends(get_pending),
):
    """Book on-call starting on a day. The type is suggested when omitted."""
    profile = current_profile(repository, pending)
    on_call_type = payload.on_call_type or on_call_type_for_date(payload.date, profile.patron_day)
    parts = split_on_call_window(payload.date, on_call_type, payload.window, payload.notes)
    profile.entries.extend(parts)
    commit_profile(profile, repository, pending)
    return {"created": list(parts)}


@router.post("/oncall/batch", status_code=201)
def create_on_call_batch(
    payload: OnCallBatchCreate,
    repository: JsonProfileRepository = Depends(get_repository),
    pending: PendingChanges = Depends(get_pending),
):
    """Book on-call for several days of one month."""
    profile = current_profile(repository, pending)
    parts = split_on_call_days(
        payload.days,
        payload.month,
        payload.year,
        on_call_type=payload.on_call_type,
        window=payload.window,
        label=payload.label,
        patron_day=profile.patron_day,
    )
    profile.entries.extend(parts)
    commit_profile(profile, repository, pending)
    return {"created": parts}
