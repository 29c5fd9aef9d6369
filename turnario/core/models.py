import datetime
import enum
import uuid
from typing import Annotated, Literal, Union

from pydantic import BaseModel, BeforeValidator, Field, field_validator

from turnario.core.config import DEFAULT_ON_CALL_END, DEFAULT_ON_CALL_START
from turnario.core.constants import DEFAULT_SHIFT_DEFINITIONS
from turnario.core.time_utils import parse_calendar_date, parse_clock_time


def new_entry_id() -> str:
    return uuid.uuid4().hex


def _validate_day(value):
    return parse_calendar_date(value)


def _validate_optional_time(value):
    """Accept "" (no time) or a parseable clock time, normalized to HH:MM."""
    if value is None or (isinstance(value, str) and not value.strip()):
        return ""
    return parse_clock_time(value).strftime("%H:%M")


CalendarDay = Annotated[datetime.date, BeforeValidator(_validate_day)]
ClockTime = Annotated[str, BeforeValidator(_validate_optional_time)]


class PermitCategory(str, enum.Enum):
    L104 = "L.104"
    STUDY = "Study"
    UNION = "Union"
    PERSONAL = "Personal"


class OvertimeTimeSlot(str, enum.Enum):
    DAY = "Day"
    NIGHT = "Night"
    HOLIDAY = "Holiday"


class OvertimeDestination(str, enum.Enum):
    PAID = "paid"
    BANKED = "banked"


class OnCallType(str, enum.Enum):
    WEEKDAY = "Weekday"
    HOLIDAY = "Holiday"


class Shift(BaseModel):
    """One slot of the shift cycle, as parsed from the pattern text."""
    day_of_week: str = ""
    name: str
    start: str = ""
    end: str = ""


class ShiftOverride(BaseModel):
    """One-off replacement of the cycle shift for a single date."""
    name: str
    start: ClockTime = ""
    end: ClockTime = ""


class ShiftDefinition(BaseModel):
    start: ClockTime = ""
    end: ClockTime = ""


class Cycle(BaseModel):
    """Anchor of the repeating pattern. No shift resolves after end_date."""
    start_date: datetime.date | None = None
    end_date: datetime.date | None = None

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def _parse_bounds(cls, value):
        if value is None or value == "":
            return None
        return parse_calendar_date(value)


class RateTable(BaseModel):
    """Pay settings. Overtime rates are surcharge percentages, the rest are per hour."""
    base_rate: float = 0.0
    overtime_day_rate: float = 0.0
    overtime_night_rate: float = 0.0
    overtime_holiday_rate: float = 0.0
    on_call_weekday_rate: float = 0.0
    on_call_holiday_rate: float = 0.0
    project_rate: float = 0.0

    @field_validator("*", mode="before")
    @classmethod
    def _missing_is_zero(cls, value):
        return 0.0 if value is None or value == "" else value

    def overtime_surcharge(self, slot: OvertimeTimeSlot) -> float:
        if slot == OvertimeTimeSlot.DAY:
            return self.overtime_day_rate
        if slot == OvertimeTimeSlot.NIGHT:
            return self.overtime_night_rate
        return self.overtime_holiday_rate

    def on_call_rate(self, on_call_type: OnCallType) -> float:
        if on_call_type == OnCallType.HOLIDAY:
            return self.on_call_holiday_rate
        return self.on_call_weekday_rate


class NetSalarySettings(BaseModel):
    """Inputs of the net salary estimate. Surtaxes are percentages, family deductions per year."""
    annual_gross: float = 0.0
    regional_surtax_percent: float = 0.0
    municipal_surtax_percent: float = 0.0
    family_deductions: float = 0.0
    monthly_bonus: float = 0.0

    @field_validator("*", mode="before")
    @classmethod
    def _missing_is_zero(cls, value):
        return 0.0 if value is None or value == "" else value


# === Entries ===


class BaseEntry(BaseModel):
    id: str = Field(default_factory=new_entry_id)
    date: CalendarDay
    notes: str = ""


class TimedEntry(BaseEntry):
    """Entry measured in hours between start_time and end_time."""
    value: float = 0.0
    start_time: ClockTime = ""
    end_time: ClockTime = ""


class HolidayEntry(BaseEntry):
    kind: Literal["holiday"] = "holiday"
    value: int = 1  # days


class PermitEntry(TimedEntry):
    kind: Literal["permit"] = "permit"
    category: PermitCategory = PermitCategory.PERSONAL


class OvertimeEntry(TimedEntry):
    kind: Literal["overtime"] = "overtime"
    time_slot: OvertimeTimeSlot = OvertimeTimeSlot.DAY
    destination: OvertimeDestination = OvertimeDestination.PAID


class OnCallEntry(TimedEntry):
    kind: Literal["on_call"] = "on_call"
    on_call_type: OnCallType = OnCallType.WEEKDAY


class ProjectEntry(TimedEntry):
    kind: Literal["project"] = "project"


class AppointmentEntry(TimedEntry):
    kind: Literal["appointment"] = "appointment"
    title: str = ""


Entry = Annotated[
    Union[HolidayEntry, PermitEntry, OvertimeEntry, OnCallEntry, ProjectEntry, AppointmentEntry],
    Field(discriminator="kind"),
]


class OnCallWindow(BaseModel):
    start: ClockTime = DEFAULT_ON_CALL_START
    end: ClockTime = DEFAULT_ON_CALL_END


# === Profile ===


def _default_definitions() -> dict[str, ShiftDefinition]:
    return {name: ShiftDefinition(**times) for name, times in DEFAULT_SHIFT_DEFINITIONS.items()}


class ProfileState(BaseModel):
    """Everything the engine needs for one person."""
    entries: list[Entry] = Field(default_factory=list)
    shift_pattern: str = ""
    shift_definitions: dict[str, ShiftDefinition] = Field(default_factory=_default_definitions)
    shift_overrides: dict[str, ShiftOverride] = Field(default_factory=dict)
    cycle_start_date: datetime.date | None = None
    cycle_end_date: datetime.date | None = None
    salary_settings: RateTable = Field(default_factory=RateTable)
    net_salary: NetSalarySettings = Field(default_factory=NetSalarySettings)
    total_current_year_holidays: int = 0
    total_previous_years_holidays: int = 0
    on_call_filter_name: str = ""
    patron_day: str | None = None  # "MM-DD"

    @field_validator("shift_overrides", mode="before")
    @classmethod
    def _normalize_override_keys(cls, value):
        if not value:
            return {}
        return {parse_calendar_date(key).isoformat(): override for key, override in value.items()}

    @field_validator("cycle_start_date", "cycle_end_date", mode="before")
    @classmethod
    def _parse_cycle_dates(cls, value):
        if value is None or value == "":
            return None
        return parse_calendar_date(value)

    @field_validator("patron_day")
    @classmethod
    def _check_patron_day(cls, value):
        if value is None or value == "":
            return None
        # Validate against a leap year so 02-29 is accepted
        parse_calendar_date(f"2000-{value}")
        return value

    @property
    def cycle(self) -> Cycle:
        return Cycle(start_date=self.cycle_start_date, end_date=self.cycle_end_date)

    def find_entry(self, entry_id: str):
        return next((e for e in self.entries if e.id == entry_id), None)

    def entries_of(self, kind: str) -> list:
        return [e for e in self.entries if e.kind == kind]


class PayrollBreakdown(BaseModel):
    """Monthly gross pay estimate. ``total`` is the plain sum of the pay components."""
    year: int
    month: int
    base_pay_hours: float = 0.0
    base_pay: float = 0.0
    overtime_day_hours: float = 0.0
    overtime_day_pay: float = 0.0
    overtime_night_hours: float = 0.0
    overtime_night_pay: float = 0.0
    overtime_holiday_hours: float = 0.0
    overtime_holiday_pay: float = 0.0
    on_call_weekday_hours: float = 0.0
    on_call_weekday_pay: float = 0.0
    on_call_holiday_hours: float = 0.0
    on_call_holiday_pay: float = 0.0
    project_hours: float = 0.0
    project_pay: float = 0.0
    total: float = 0.0
    rest_days: int = 0
    shift_summary: dict[str, float] = Field(default_factory=dict)
    banked_overtime_hours: float = 0.0

    def pay_components(self) -> dict[str, float]:
        return {
            "base_pay": self.base_pay,
            "overtime_day_pay": self.overtime_day_pay,
            "overtime_night_pay": self.overtime_night_pay,
            "overtime_holiday_pay": self.overtime_holiday_pay,
            "on_call_weekday_pay": self.on_call_weekday_pay,
            "on_call_holiday_pay": self.on_call_holiday_pay,
            "project_pay": self.project_pay,
        }


class NetSalaryBreakdown(BaseModel):
    """Monthly net salary estimate. Every amount is per month except ``taxable_income``."""
    gross_monthly: float = 0.0
    social_security: float = 0.0
    taxable_income: float = 0.0
    income_tax: float = 0.0
    surtaxes: float = 0.0
    bonus: float = 0.0
    net_monthly: float = 0.0
