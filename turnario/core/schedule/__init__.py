"""
Schedule module - shift cycle resolution, holidays and payroll.

Exports the public functions of the submodules.
"""

from .core import (
    apply_shift_definitions,
    build_pattern_text,
    cycle_start_warning,
    is_rest,
    parse_pattern,
    resolve_shift,
    shift_hours,
    weekday_names,
)
from .net_salary import compute_net_salary, employment_deduction, income_tax_gross
from .overtime import (
    banked_overtime_hours,
    calculate_overtime_pay,
    overtime_pay_by_slot,
    paid_overtime_hours_by_slot,
)
from .period import generate_month_data
from .summary import (
    build_report,
    compute_monthly_payroll,
    compute_payroll_for_profile,
    monthly_stats,
)
from .vacation import (
    expand_holiday_days,
    holiday_days_between,
    holiday_days_in_month,
    holiday_end_date,
    holiday_from_range,
    remaining_holidays,
    split_holiday_at_day,
    used_holiday_days,
)

__all__ = [
    # core
    "parse_pattern",
    "apply_shift_definitions",
    "build_pattern_text",
    "resolve_shift",
    "cycle_start_warning",
    "is_rest",
    "shift_hours",
    "weekday_names",
    # overtime
    "calculate_overtime_pay",
    "paid_overtime_hours_by_slot",
    "banked_overtime_hours",
    "overtime_pay_by_slot",
    # vacation
    "expand_holiday_days",
    "holiday_end_date",
    "split_holiday_at_day",
    "holiday_from_range",
    "holiday_days_between",
    "holiday_days_in_month",
    "used_holiday_days",
    "remaining_holidays",
    # net salary
    "compute_net_salary",
    "income_tax_gross",
    "employment_deduction",
    # period
    "generate_month_data",
    # summary
    "compute_monthly_payroll",
    "compute_payroll_for_profile",
    "monthly_stats",
    "build_report",
]
