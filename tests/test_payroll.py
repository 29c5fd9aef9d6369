"""
Tests for the monthly payroll, month statistics and range reports.

The sample profile (see conftest) starts on Monday 2024-01-01 with the cycle
Morning 6h, Afternoon 6h, Night 8h, Rest, and a holiday on 9-10 January.
"""

import datetime
import sys
from pathlib import Path

import pytest

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

# ruff: noqa: E402
from turnario.core.models import (
    Cycle,
    HolidayEntry,
    OvertimeDestination,
    OvertimeEntry,
    RateTable,
    ShiftOverride,
)
from turnario.core.schedule import (
    build_report,
    calculate_overtime_pay,
    compute_monthly_payroll,
    compute_payroll_for_profile,
    generate_month_data,
    monthly_stats,
    parse_pattern,
)


class TestMonthlyPayroll:
    def test_shift_hours_skip_holidays(self, sample_profile):
        payroll = compute_payroll_for_profile(sample_profile, 2024, 1)

        assert payroll.shift_summary == {"Morning": 42, "Afternoon": 42, "Night": 64}
        assert payroll.base_pay_hours == 148
        assert payroll.rest_days == 7
        assert payroll.base_pay == pytest.approx(1480)

    def test_overtime_gets_slot_surcharge(self, sample_profile):
        payroll = compute_payroll_for_profile(sample_profile, 2024, 1)

        assert payroll.overtime_day_hours == 2
        assert payroll.overtime_day_pay == pytest.approx(23)
        assert payroll.overtime_night_hours == 1.5
        assert payroll.overtime_night_pay == pytest.approx(19.5)
        assert payroll.overtime_holiday_pay == 0

    def test_banked_overtime_is_not_paid(self, sample_profile):
        payroll = compute_payroll_for_profile(sample_profile, 2024, 1)

        assert payroll.banked_overtime_hours == 4
        sample_profile.entries = [
            e
            for e in sample_profile.entries
            if not (isinstance(e, OvertimeEntry) and e.destination == OvertimeDestination.BANKED)
        ]
        assert compute_payroll_for_profile(sample_profile, 2024, 1).total == payroll.total

    def test_banking_paid_overtime_moves_its_hours_out_of_total(self, sample_profile):
        before = compute_payroll_for_profile(sample_profile, 2024, 1)
        index = next(i for i, e in enumerate(sample_profile.entries) if e.id == "ot-1")
        paid = sample_profile.entries[index]
        sample_profile.entries[index] = paid.model_copy(update={"destination": OvertimeDestination.BANKED})

        after = compute_payroll_for_profile(sample_profile, 2024, 1)

        contribution = calculate_overtime_pay(paid.value, 10.0, 15.0)
        assert contribution == pytest.approx(23)
        assert after.total == pytest.approx(before.total - contribution)
        assert after.banked_overtime_hours == before.banked_overtime_hours + paid.value
        assert after.overtime_day_hours == before.overtime_day_hours - paid.value

    def test_on_call_and_project_pay(self, sample_profile):
        payroll = compute_payroll_for_profile(sample_profile, 2024, 1)

        assert payroll.on_call_weekday_hours == 2
        assert payroll.on_call_weekday_pay == pytest.approx(4)
        assert payroll.on_call_holiday_hours == 7
        assert payroll.on_call_holiday_pay == pytest.approx(21)
        assert payroll.project_pay == pytest.approx(100)

    def test_total_is_sum_of_components(self, sample_profile):
        payroll = compute_payroll_for_profile(sample_profile, 2024, 1)

        assert payroll.total == pytest.approx(1647.5)
        assert payroll.total == sum(payroll.pay_components().values())

    def test_other_month_entries_are_ignored(self, sample_profile):
        payroll = compute_payroll_for_profile(sample_profile, 2024, 2)

        assert payroll.overtime_day_hours == 0
        assert payroll.on_call_holiday_hours == 0
        assert payroll.project_hours == 0

    def test_holiday_from_previous_month_blocks_shifts(self, rates):
        pattern = parse_pattern("Monday,Morning,08:00,14:00")
        entries = [HolidayEntry(date="2024-01-30", value=4)]

        payroll = compute_monthly_payroll(2, 2024, entries, Cycle(start_date="2024-01-01"), pattern, {}, rates)

        # 29 days in February 2024, the first two on holiday
        assert payroll.base_pay_hours == 27 * 6

    def test_cycle_end_stops_shifts(self, rates):
        pattern = parse_pattern("Monday,Morning,08:00,14:00")
        cycle = Cycle(start_date="2024-01-01", end_date="2024-01-10")

        payroll = compute_monthly_payroll(1, 2024, [], cycle, pattern, {}, rates)

        assert payroll.base_pay_hours == 60

    def test_override_is_paid_instead_of_pattern(self, rates):
        pattern = parse_pattern("Monday,Rest,,")
        overrides = {"2024-01-05": ShiftOverride(name="Morning", start="08:00", end="12:00")}

        payroll = compute_monthly_payroll(1, 2024, [], Cycle(start_date="2024-01-01"), pattern, overrides, rates)

        assert payroll.base_pay_hours == 4
        assert payroll.rest_days == 30

    def test_malformed_shift_times_are_skipped(self, rates, caplog):
        pattern = parse_pattern("Monday,Morning,8 o'clock,14:00\nTuesday,Afternoon,16:00,22:00")

        payroll = compute_monthly_payroll(1, 2024, [], Cycle(start_date="2024-01-01"), pattern, {}, rates)

        assert payroll.shift_summary == {"Afternoon": 15 * 6}
        assert "Skipping shift Morning" in caplog.text

    def test_holiday_near_the_last_date_does_not_break_payroll(self, rates):
        pattern = parse_pattern("Monday,Morning,08:00,14:00")
        entries = [HolidayEntry(date="9999-12-20", value=30)]

        payroll = compute_monthly_payroll(1, 2024, entries, Cycle(start_date="2024-01-01"), pattern, {}, rates)

        assert payroll.base_pay_hours == 31 * 6

    def test_no_cycle_and_no_entries_is_all_zero(self):
        payroll = compute_monthly_payroll(1, 2024, [], Cycle(), [], None, RateTable())

        assert payroll.total == 0
        assert payroll.shift_summary == {}
        assert payroll.rest_days == 0


class TestMonthlyStats:
    def test_hours_per_kind(self, sample_profile):
        stats = monthly_stats(sample_profile.entries, 2024, 1)

        assert stats["overtime_hours"] == 7.5
        assert stats["permit_hours"] == 3
        assert stats["project_hours"] == 5

    def test_empty_month(self, sample_profile):
        stats = monthly_stats(sample_profile.entries, 2024, 5)
        assert stats["overtime_hours"] == 0


class TestReport:
    def test_report_over_month(self, sample_profile):
        report = build_report(sample_profile, "2024-01-01", "2024-01-31")

        assert report["used_holidays_in_range"] == 2
        assert report["overtime_by_month"] == {"2024-01": 7.5}
        assert report["permits_by_category"]["Study"] == 3
        assert report["permits_by_category"]["Personal"] == 0
        assert report["total_permit_hours"] == 3
        assert report["remaining_holidays"] == 28

    def test_holiday_days_counted_inside_range_only(self, sample_profile):
        report = build_report(sample_profile, "2024-01-10", "2024-01-20")
        assert report["used_holidays_in_range"] == 1

    def test_inverted_range_is_empty(self, sample_profile):
        report = build_report(sample_profile, "2024-02-01", "2024-01-01")

        assert report["used_holidays_in_range"] == 0
        assert report["overtime_by_month"] == {}
        assert report["total_permit_hours"] == 0


class TestMonthData:
    def test_one_entry_per_day(self, sample_profile):
        days = generate_month_data(sample_profile, 2024, 2)
        assert len(days) == 29
        assert days[0]["date"] == datetime.date(2024, 2, 1)

    def test_holiday_days_have_no_hours(self, sample_profile):
        days = generate_month_data(sample_profile, 2024, 1)
        jan_9 = days[8]

        assert jan_9["on_holiday"] is True
        assert jan_9["shift"].name == "Morning"
        assert jan_9["hours"] == 0

    def test_public_holidays_and_entries(self, sample_profile):
        days = generate_month_data(sample_profile, 2024, 1)

        assert days[0]["is_public_holiday"] is True  # Capodanno
        assert days[5]["is_public_holiday"] is True  # Epifania
        assert days[1]["is_public_holiday"] is False
        assert [e.id for e in days[14]["entries"]] == ["ot-1"]
        assert days[2]["hours"] == 8
