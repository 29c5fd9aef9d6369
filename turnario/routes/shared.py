# turnario/routes/shared.py
"""
Shared dependencies and request schemas for route modules.
"""

import datetime

from fastapi import HTTPException, Request
from pydantic import BaseModel, Field

from turnario.core.config import DEFAULT_ON_CALL_END, DEFAULT_ON_CALL_START
from turnario.core.models import (
    CalendarDay,
    ClockTime,
    NetSalarySettings,
    OnCallType,
    OnCallWindow,
    ProfileState,
    RateTable,
    ShiftDefinition,
    ShiftOverride,
)
from turnario.core.storage import JsonProfileRepository, PendingChanges


def get_repository() -> JsonProfileRepository:
    """Profile repository dependency (overridden in tests)."""
    return JsonProfileRepository()


def get_pending(request: Request) -> PendingChanges:
    return request.app.state.pending


def current_profile(repository: JsonProfileRepository, pending: PendingChanges) -> ProfileState:
    """The staged profile when there is one, otherwise the stored one."""
    staged = pending.value
    if staged is not None:
        return staged.model_copy(deep=True)
    return repository.load_profile()


def commit_profile(profile: ProfileState, repository: JsonProfileRepository, pending: PendingChanges) -> None:
    """Save a changed profile. It already contains any staged change, so that is dropped."""
    repository.save_profile(profile)
    pending.cancel()


def entry_not_found(entry_id: str) -> HTTPException:
    return HTTPException(status_code=404, detail=f"Entry not found: {entry_id}")


# ============ Pydantic schemas ============


class ProfileUpdate(BaseModel):
    """Settings that PUT /api/profile may change. Entries have their own endpoints."""

    shift_pattern: str | None = None
    # Rebuilds shift_pattern from one shift name per cycle day
    pattern_shift_names: list[str] | None = None
    shift_definitions: dict[str, ShiftDefinition] | None = None
    shift_overrides: dict[str, ShiftOverride] | None = None
    cycle_start_date: datetime.date | None = None
    cycle_end_date: datetime.date | None = None
    salary_settings: RateTable | None = None
    net_salary: NetSalarySettings | None = None
    total_current_year_holidays: int | None = None
    total_previous_years_holidays: int | None = None
    on_call_filter_name: str | None = None
    patron_day: str | None = None


class HolidayRangeCreate(BaseModel):
    start: CalendarDay
    end: CalendarDay
    notes: str = ""


class HolidaySplit(BaseModel):
    day: CalendarDay


class OnCallCreate(BaseModel):
    date: CalendarDay
    on_call_type: OnCallType | None = None
    start: ClockTime = DEFAULT_ON_CALL_START
    end: ClockTime = DEFAULT_ON_CALL_END
    notes: str = ""

    @property
    def window(self) -> OnCallWindow:
        return OnCallWindow(start=self.start, end=self.end)


class OnCallBatchCreate(BaseModel):
    year: int
    month: int = Field(ge=1, le=12)
    days: list[int]
    on_call_type: OnCallType | None = None
    start: ClockTime = DEFAULT_ON_CALL_START
    end: ClockTime = DEFAULT_ON_CALL_END
    label: str = ""

    @property
    def window(self) -> OnCallWindow:
        return OnCallWindow(start=self.start, end=self.end)
