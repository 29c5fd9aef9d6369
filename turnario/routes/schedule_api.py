# turnario/routes/schedule_api.py
"""
Read-only schedule endpoints: shifts, calendar, payroll, statistics and reports.
"""

import logging

from fastapi import APIRouter, Depends, Path, Query

from turnario.core.helpers import describe_entry, short_entry_text
from turnario.core.models import NetSalaryBreakdown, PayrollBreakdown
from turnario.core.schedule import (
    apply_shift_definitions,
    build_report,
    compute_net_salary,
    compute_payroll_for_profile,
    generate_month_data,
    monthly_stats,
    parse_pattern,
    resolve_shift,
    shift_hours,
)
from turnario.core.storage import JsonProfileRepository, PendingChanges
from turnario.core.time_utils import TimeArithmeticError, parse_calendar_date

from .shared import current_profile, get_pending, get_repository

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["schedule_api"])


@router.get("/shift/{day}")
def get_shift(
    day: str,
    repository: JsonProfileRepository = Depends(get_repository),
    pending: PendingChanges = Depends(get_pending),
):
    """Shift that applies on a day (YYYY-MM-DD)."""
    profile = current_profile(repository, pending)
    date = parse_calendar_date(day)
    pattern = apply_shift_definitions(parse_pattern(profile.shift_pattern), profile.shift_definitions)
    shift = resolve_shift(date, profile.cycle, pattern, profile.shift_overrides)

    try:
        hours = shift_hours(date, shift)
    except TimeArithmeticError as e:
        # Bad stored times, not a bad request
        logger.warning("Shift %s on %s has unusable times: %s", shift.name, date, e)
        hours = 0.0

    return {
        "date": date,
        "shift": shift,
        "is_override": date.isoformat() in profile.shift_overrides,
        "hours": hours,
    }


@router.get("/calendar/{year}/{month}")
def get_calendar(
    year: int,
    month: int = Path(..., ge=1, le=12),
    repository: JsonProfileRepository = Depends(get_repository),
    pending: PendingChanges = Depends(get_pending),
):
    profile = current_profile(repository, pending)
    days = generate_month_data(profile, year, month)
    for day in days:
        day["entries"] = [
            {"entry": e, "label": short_entry_text(e), "description": describe_entry(e)} for e in day["entries"]
        ]
    return {"year": year, "month": month, "days": days}


@router.get("/payroll/{year}/{month}", response_model=PayrollBreakdown)
def get_payroll(
    year: int,
    month: int = Path(..., ge=1, le=12),
    repository: JsonProfileRepository = Depends(get_repository),
    pending: PendingChanges = Depends(get_pending),
):
    return compute_payroll_for_profile(current_profile(repository, pending), year, month)


@router.get("/net-salary", response_model=NetSalaryBreakdown)
def get_net_salary(
    repository: JsonProfileRepository = Depends(get_repository),
    pending: PendingChanges = Depends(get_pending),
):
    """Monthly net salary estimate from the profile's net salary settings."""
    return compute_net_salary(current_profile(repository, pending).net_salary)


@router.get("/stats/{year}/{month}")
def get_stats(
    year: int,
    month: int = Path(..., ge=1, le=12),
    repository: JsonProfileRepository = Depends(get_repository),
    pending: PendingChanges = Depends(get_pending),
):
    return monthly_stats(current_profile(repository, pending).entries, year, month)


@router.get("/report")
def get_report(
    start: str = Query(...),
    end: str = Query(...),
    repository: JsonProfileRepository = Depends(get_repository),
    pending: PendingChanges = Depends(get_pending),
):
    """Holidays, overtime and permits over an inclusive date range."""
    return build_report(current_profile(repository, pending), start, end)
