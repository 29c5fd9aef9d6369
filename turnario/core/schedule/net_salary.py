"""Net salary estimate from the annual gross salary (2024 Italian rates)."""

import logging

from turnario.core.config import (
    EMPLOYMENT_DEDUCTION_BASE,
    EMPLOYMENT_DEDUCTION_BONUS,
    EMPLOYMENT_DEDUCTION_BONUS_RANGE,
    EMPLOYMENT_DEDUCTION_END_LIMIT,
    EMPLOYMENT_DEDUCTION_EXTRA,
    EMPLOYMENT_DEDUCTION_FULL_LIMIT,
    EMPLOYMENT_DEDUCTION_MID_LIMIT,
    INCOME_TAX_BRACKETS,
    SALARY_PAYMENTS_PER_YEAR,
    SOCIAL_SECURITY_RATE,
    SURTAX_INSTALMENTS,
)
from turnario.core.models import NetSalaryBreakdown, NetSalarySettings

logger = logging.getLogger(__name__)


def income_tax_gross(taxable_income: float) -> float:
    """
    Yearly income tax before deductions.

    Each bracket taxes only the part of the income that falls inside it, so
    28000 gives 28000 * 23% and 50000 gives that plus 22000 * 35%.
    """
    tax = 0.0
    lower = 0.0
    for upper, rate in INCOME_TAX_BRACKETS:
        if taxable_income <= lower:
            break
        top = taxable_income if upper is None else min(taxable_income, upper)
        tax += (top - lower) * rate
        if upper is None:
            break
        lower = upper
    return tax


def employment_deduction(taxable_income: float) -> float:
    """Yearly deduction for employees, tapering off between 28000 and 50000."""
    if taxable_income <= EMPLOYMENT_DEDUCTION_FULL_LIMIT:
        deduction = EMPLOYMENT_DEDUCTION_BASE
    elif taxable_income <= EMPLOYMENT_DEDUCTION_MID_LIMIT:
        span = EMPLOYMENT_DEDUCTION_MID_LIMIT - EMPLOYMENT_DEDUCTION_FULL_LIMIT
        deduction = EMPLOYMENT_DEDUCTION_BASE + EMPLOYMENT_DEDUCTION_EXTRA * (
            (EMPLOYMENT_DEDUCTION_MID_LIMIT - taxable_income) / span
        )
    elif taxable_income <= EMPLOYMENT_DEDUCTION_END_LIMIT:
        span = EMPLOYMENT_DEDUCTION_END_LIMIT - EMPLOYMENT_DEDUCTION_MID_LIMIT
        deduction = EMPLOYMENT_DEDUCTION_BASE * ((EMPLOYMENT_DEDUCTION_END_LIMIT - taxable_income) / span)
    else:
        deduction = 0.0

    bonus_low, bonus_high = EMPLOYMENT_DEDUCTION_BONUS_RANGE
    if bonus_low < taxable_income <= bonus_high:
        deduction += EMPLOYMENT_DEDUCTION_BONUS
    return deduction


def compute_net_salary(settings: NetSalarySettings) -> NetSalaryBreakdown:
    """
    Estimate the monthly net salary.

    Steps:
        1. gross per month = annual gross / 12
        2. social security = gross per month * 9.19%
        3. taxable income = annual gross - 12 * social security
        4. income tax per month = (bracket tax - employment and family
           deductions) / 12, never below 0
        5. regional + municipal surtaxes on the taxable income, in 11 instalments
        6. net = gross - social security - income tax - surtaxes + bonus

    A non-positive annual gross gives an all-zero estimate.
    """
    if settings.annual_gross <= 0:
        return NetSalaryBreakdown()

    gross_monthly = settings.annual_gross / SALARY_PAYMENTS_PER_YEAR
    social_security = gross_monthly * SOCIAL_SECURITY_RATE
    taxable_income = settings.annual_gross - social_security * SALARY_PAYMENTS_PER_YEAR

    deductions = employment_deduction(taxable_income) + settings.family_deductions
    income_tax = max((income_tax_gross(taxable_income) - deductions) / SALARY_PAYMENTS_PER_YEAR, 0.0)

    surtax_percent = settings.regional_surtax_percent + settings.municipal_surtax_percent
    surtaxes = taxable_income * surtax_percent / 100 / SURTAX_INSTALMENTS

    net_monthly = gross_monthly - social_security - income_tax - surtaxes + settings.monthly_bonus
    logger.debug("Net salary estimate for gross %.2f: %.2f per month", settings.annual_gross, net_monthly)

    return NetSalaryBreakdown(
        gross_monthly=gross_monthly,
        social_security=social_security,
        taxable_income=taxable_income,
        income_tax=income_tax,
        surtaxes=surtaxes,
        bonus=settings.monthly_bonus,
        net_monthly=net_monthly,
    )
