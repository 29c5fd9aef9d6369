"""Monthly payroll, monthly statistics and range reports."""

import calendar
import datetime
import logging
from collections.abc import Iterable, Mapping

from turnario.core.constants import KIND_HOLIDAY
from turnario.core.models import (
    Cycle,
    OnCallEntry,
    OnCallType,
    OvertimeEntry,
    OvertimeTimeSlot,
    PayrollBreakdown,
    PermitCategory,
    PermitEntry,
    ProfileState,
    ProjectEntry,
    RateTable,
    Shift,
    ShiftOverride,
)
from turnario.core.time_utils import TimeArithmeticError, parse_calendar_date
from turnario.core.types import MonthStats, RangeReport

from .core import apply_shift_definitions, is_rest, parse_pattern, resolve_shift, shift_hours
from .overtime import banked_overtime_hours, overtime_pay_by_slot, paid_overtime_hours_by_slot
from .vacation import holiday_days_between, holiday_days_in_month, remaining_holidays

logger = logging.getLogger(__name__)


def _in_month(entry, year: int, month: int) -> bool:
    return entry.date.year == year and entry.date.month == month


def _month_days(year: int, month: int) -> list[datetime.date]:
    days_in_month = calendar.monthrange(year, month)[1]
    return [datetime.date(year, month, d) for d in range(1, days_in_month + 1)]


def compute_monthly_payroll(
    month: int,
    year: int,
    entries: Iterable,
    cycle: Cycle,
    pattern: list[Shift],
    overrides: Mapping[str, ShiftOverride] | None,
    rates: RateTable,
) -> PayrollBreakdown:
    """
    Gross pay estimate for one month.

    Days covered by a holiday are never paid as shift hours. Rest days are
    counted. Paid overtime gets the slot surcharge on top of the base rate,
    on-call and project hours are paid at flat hourly rates. Banked overtime is
    reported separately and never paid.

    Args:
        month: Month (1-12)
        year: Year
        entries: All entries of the profile, any kind
        cycle: Cycle bounds
        pattern: Parsed pattern (with shift definitions applied)
        overrides: Per-date overrides keyed by ISO date
        rates: Pay settings

    Returns:
        PayrollBreakdown where total is the sum of the pay components
    """
    entries = list(entries)
    holiday_days = holiday_days_in_month(entries, year, month)

    base_pay_hours = 0.0
    rest_days = 0
    shift_summary: dict[str, float] = {}

    for day in _month_days(year, month):
        if day in holiday_days:
            continue

        shift = resolve_shift(day, cycle, pattern, overrides)
        if shift is None:
            continue
        if is_rest(shift):
            rest_days += 1
            continue

        try:
            hours = shift_hours(day, shift)
        except TimeArithmeticError as e:
            logger.warning("Skipping shift %s on %s: %s", shift.name, day, e)
            continue

        if hours <= 0:
            continue

        base_pay_hours += hours
        shift_summary[shift.name] = shift_summary.get(shift.name, 0.0) + hours

    month_entries = [e for e in entries if _in_month(e, year, month)]

    overtime = [e for e in month_entries if isinstance(e, OvertimeEntry)]
    overtime_hours = paid_overtime_hours_by_slot(overtime)
    overtime_pay = overtime_pay_by_slot(overtime_hours, rates)

    on_call = [e for e in month_entries if isinstance(e, OnCallEntry)]
    on_call_hours = {
        on_call_type: sum(e.value for e in on_call if e.on_call_type == on_call_type)
        for on_call_type in OnCallType
    }

    project_hours = sum(e.value for e in month_entries if isinstance(e, ProjectEntry))

    breakdown = PayrollBreakdown(
        year=year,
        month=month,
        base_pay_hours=base_pay_hours,
        base_pay=base_pay_hours * rates.base_rate,
        overtime_day_hours=overtime_hours[OvertimeTimeSlot.DAY],
        overtime_day_pay=overtime_pay[OvertimeTimeSlot.DAY],
        overtime_night_hours=overtime_hours[OvertimeTimeSlot.NIGHT],
        overtime_night_pay=overtime_pay[OvertimeTimeSlot.NIGHT],
        overtime_holiday_hours=overtime_hours[OvertimeTimeSlot.HOLIDAY],
        overtime_holiday_pay=overtime_pay[OvertimeTimeSlot.HOLIDAY],
        on_call_weekday_hours=on_call_hours[OnCallType.WEEKDAY],
        on_call_weekday_pay=on_call_hours[OnCallType.WEEKDAY] * rates.on_call_rate(OnCallType.WEEKDAY),
        on_call_holiday_hours=on_call_hours[OnCallType.HOLIDAY],
        on_call_holiday_pay=on_call_hours[OnCallType.HOLIDAY] * rates.on_call_rate(OnCallType.HOLIDAY),
        project_hours=project_hours,
        project_pay=project_hours * rates.project_rate,
        rest_days=rest_days,
        shift_summary=shift_summary,
        banked_overtime_hours=banked_overtime_hours(overtime),
    )
    breakdown.total = sum(breakdown.pay_components().values())
    return breakdown


def compute_payroll_for_profile(profile: ProfileState, year: int, month: int) -> PayrollBreakdown:
    """Payroll for a stored profile, using its current shift definitions."""
    pattern = apply_shift_definitions(parse_pattern(profile.shift_pattern), profile.shift_definitions)
    return compute_monthly_payroll(
        month,
        year,
        profile.entries,
        profile.cycle,
        pattern,
        profile.shift_overrides,
        profile.salary_settings,
    )


def monthly_stats(entries: Iterable, year: int, month: int) -> MonthStats:
    """Overtime, permit and project hours booked in a month."""
    month_entries = [e for e in entries if _in_month(e, year, month)]
    return {
        "year": year,
        "month": month,
        "overtime_hours": sum(e.value for e in month_entries if isinstance(e, OvertimeEntry)),
        "permit_hours": sum(e.value for e in month_entries if isinstance(e, PermitEntry)),
        "project_hours": sum(e.value for e in month_entries if isinstance(e, ProjectEntry)),
    }


def build_report(profile: ProfileState, start, end) -> RangeReport:
    """
    Report over an inclusive date range.

    Holidays count per day, so a holiday starting before the range still
    counts for its days inside it. Overtime and permits count by entry date.
    An inverted range gives an empty report.
    """
    start_day = parse_calendar_date(start)
    end_day = parse_calendar_date(end)

    report: RangeReport = {
        "start": start_day,
        "end": end_day,
        "used_holidays_in_range": 0,
        "overtime_by_month": {},
        "permits_by_category": {category.value: 0.0 for category in PermitCategory},
        "total_permit_hours": 0.0,
        "remaining_holidays": remaining_holidays(profile),
    }
    if start_day > end_day:
        logger.info("Empty report: start %s is after end %s", start_day, end_day)
        return report

    for entry in profile.entries_of(KIND_HOLIDAY):
        report["used_holidays_in_range"] += len(holiday_days_between(entry, start_day, end_day))

    in_range = [e for e in profile.entries if start_day <= e.date <= end_day]

    for entry in in_range:
        if isinstance(entry, OvertimeEntry):
            month_key = entry.date.strftime("%Y-%m")
            report["overtime_by_month"][month_key] = report["overtime_by_month"].get(month_key, 0.0) + entry.value
        elif isinstance(entry, PermitEntry):
            report["permits_by_category"][entry.category.value] += entry.value
            report["total_permit_hours"] += entry.value

    return report
