"""
Unit tests for shift pattern parsing and shift resolution.

The cycle repeats every L days from its start date; an override for a date
always wins.
"""

import datetime
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

# ruff: noqa: E402
from turnario.core.constants import CYCLE_START_NOT_MONDAY_WARNING, SHIFT_UNDEFINED
from turnario.core.models import Cycle, ShiftDefinition, ShiftOverride
from turnario.core.schedule import (
    apply_shift_definitions,
    build_pattern_text,
    cycle_start_warning,
    parse_pattern,
    resolve_shift,
    shift_hours,
)

START = datetime.date(2024, 1, 1)

FOUR_DAY_PATTERN = """
Monday,Morning,08:00,14:00
Tuesday,Afternoon,16:00,22:00
Wednesday,Night,22:00,06:00
Thursday,Rest,,
"""


class TestParsePattern:
    def test_rows_keep_their_order(self):
        pattern = parse_pattern(FOUR_DAY_PATTERN)

        assert [s.name for s in pattern] == ["Morning", "Afternoon", "Night", "Rest"]
        assert pattern[2].start == "22:00"
        assert pattern[2].end == "06:00"

    def test_blank_lines_and_whitespace_are_ignored(self):
        pattern = parse_pattern("\n  Monday , Morning , 08:00 , 14:00  \n\n")

        assert len(pattern) == 1
        assert pattern[0].day_of_week == "Monday"
        assert pattern[0].start == "08:00"

    def test_missing_name_becomes_sentinel(self):
        pattern = parse_pattern("Monday,,08:00,14:00")
        assert pattern[0].name == SHIFT_UNDEFINED

    def test_missing_columns_are_empty(self):
        pattern = parse_pattern("Sunday,Rest")
        assert pattern[0].start == ""
        assert pattern[0].end == ""

    def test_empty_text_gives_empty_pattern(self):
        assert parse_pattern("") == []
        assert parse_pattern(None) == []


class TestShiftDefinitions:
    def test_definitions_replace_pattern_times(self):
        pattern = parse_pattern("Monday,Morning,07:00,13:00\nTuesday,Rest,09:00,10:00")
        defs = {"Morning": ShiftDefinition(start="06:00", end="12:00")}

        result = apply_shift_definitions(pattern, defs)

        assert (result[0].start, result[0].end) == ("06:00", "12:00")
        # Rest never carries times
        assert (result[1].start, result[1].end) == ("", "")

    def test_unknown_shift_keeps_its_times(self):
        pattern = parse_pattern("Monday,Custom,09:00,17:00")
        result = apply_shift_definitions(pattern, {})
        assert result[0].start == "09:00"

    def test_build_pattern_text_cycles_weekdays(self):
        defs = {"Morning": ShiftDefinition(start="08:00", end="14:00")}
        names = ["Morning"] * 7 + ["Rest"]

        text = build_pattern_text(names, defs)
        lines = text.split("\n")

        assert len(lines) == 8
        assert lines[0] == "Monday,Morning,08:00,14:00"
        assert lines[6].startswith("Sunday,")
        assert lines[7] == "Monday,Rest,,"

    def test_built_text_parses_back(self):
        defs = {"Night": ShiftDefinition(start="22:00", end="06:00")}
        pattern = parse_pattern(build_pattern_text(["Night", "Empty"], defs))
        assert [(s.name, s.start, s.end) for s in pattern] == [("Night", "22:00", "06:00"), ("Empty", "", "")]


class TestResolveShift:
    def setup_method(self):
        self.pattern = parse_pattern(FOUR_DAY_PATTERN)
        self.cycle = Cycle(start_date=START)

    def test_pattern_repeats_every_cycle(self):
        length = len(self.pattern)
        for k in range(3):
            for i in range(length):
                day = START + datetime.timedelta(days=k * length + i)
                assert resolve_shift(day, self.cycle, self.pattern) == self.pattern[i]

    def test_before_start_gives_none(self):
        assert resolve_shift("2023-12-31", self.cycle, self.pattern) is None

    def test_after_end_gives_none(self):
        cycle = Cycle(start_date=START, end_date="2024-01-10")
        assert resolve_shift("2024-01-10", cycle, self.pattern) is not None
        assert resolve_shift("2024-01-11", cycle, self.pattern) is None

    def test_no_start_gives_none(self):
        assert resolve_shift("2024-01-05", Cycle(), self.pattern) is None

    def test_empty_pattern_gives_none(self):
        assert resolve_shift("2024-01-05", self.cycle, []) is None

    def test_override_wins(self):
        overrides = {"2024-01-02": ShiftOverride(name="Morning", start="06:00", end="12:00")}
        shift = resolve_shift("2024-01-02", self.cycle, self.pattern, overrides)
        assert shift.name == "Morning"
        assert shift.start == "06:00"

    def test_override_applies_outside_cycle(self):
        overrides = {"2023-06-01": ShiftOverride(name="Rest")}
        shift = resolve_shift("2023-06-01", self.cycle, self.pattern, overrides)
        assert shift.name == "Rest"


class TestCycleWarning:
    def test_monday_start_has_no_warning(self):
        assert cycle_start_warning(Cycle(start_date=START)) is None

    def test_other_weekday_warns(self):
        assert cycle_start_warning(Cycle(start_date="2024-01-03")) == CYCLE_START_NOT_MONDAY_WARNING

    def test_no_start_has_no_warning(self):
        assert cycle_start_warning(Cycle()) is None


class TestShiftHours:
    def test_night_shift_crosses_midnight(self):
        pattern = parse_pattern(FOUR_DAY_PATTERN)
        assert shift_hours(datetime.date(2024, 1, 3), pattern[2]) == 8

    def test_rest_and_none_are_zero(self):
        pattern = parse_pattern(FOUR_DAY_PATTERN)
        assert shift_hours(datetime.date(2024, 1, 4), pattern[3]) == 0
        assert shift_hours(datetime.date(2024, 1, 4), None) == 0
