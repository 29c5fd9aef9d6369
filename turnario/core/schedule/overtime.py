"""Overtime pay and banked hours."""

from collections.abc import Iterable

from turnario.core.models import OvertimeDestination, OvertimeEntry, OvertimeTimeSlot, RateTable


def calculate_overtime_pay(hours: float, base_rate: float, surcharge_percent: float) -> float:
    """
    Overtime pay for a number of hours.

    Formula: hours * base_rate * (1 + surcharge / 100)

    Args:
        hours: Overtime hours
        base_rate: Hourly base pay
        surcharge_percent: Surcharge for the time slot, in percent

    Returns:
        Overtime pay
    """
    return hours * (base_rate * (1 + surcharge_percent / 100))


def paid_overtime_hours_by_slot(entries: Iterable[OvertimeEntry]) -> dict[OvertimeTimeSlot, float]:
    """Sum of paid overtime hours per time slot. Banked overtime is ignored."""
    totals = {slot: 0.0 for slot in OvertimeTimeSlot}
    for entry in entries:
        if entry.destination == OvertimeDestination.PAID:
            totals[entry.time_slot] += entry.value
    return totals


def banked_overtime_hours(entries: Iterable[OvertimeEntry]) -> float:
    """Hours moved to the time bank instead of being paid."""
    return sum(e.value for e in entries if e.destination == OvertimeDestination.BANKED)


def overtime_pay_by_slot(hours_by_slot: dict[OvertimeTimeSlot, float], rates: RateTable) -> dict[OvertimeTimeSlot, float]:
    return {
        slot: calculate_overtime_pay(hours, rates.base_rate, rates.overtime_surcharge(slot))
        for slot, hours in hours_by_slot.items()
    }
