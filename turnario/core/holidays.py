import datetime
from functools import lru_cache

from turnario.core.models import OnCallType


def easter_sunday(year: int) -> datetime.date:
    """Anonymous Gregorian algorithm."""
    a = year % 19
    b = year // 100
    c = year % 100
    d = b // 4
    e = b % 4
    f = (b + 8) // 25
    g = (b - f + 1) // 3
    h = (19 * a + b - d - g + 15) % 30
    i = c // 4
    k = c % 4
    l = (32 + 2 * e + 2 * i - h - k) % 7
    m = (a + 11 * h + 22 * l) // 451
    month = (h + l - 7 * m + 114) // 31
    day = ((h + l - 7 * m + 114) % 31) + 1
    return datetime.date(year, month, day)


def pasquetta(year: int) -> datetime.date:
    """Easter Monday."""
    return easter_sunday(year) + datetime.timedelta(days=1)


#: Fixed national holidays as (month, day).
FIXED_HOLIDAYS: tuple[tuple[int, int], ...] = (
    (1, 1),  # Capodanno
    (1, 6),  # Epifania
    (4, 25),  # Liberazione
    (5, 1),  # Festa del lavoro
    (6, 2),  # Festa della Repubblica
    (8, 15),  # Ferragosto
    (11, 1),  # Ognissanti
    (12, 8),  # Immacolata
    (12, 25),  # Natale
    (12, 26),  # Santo Stefano
)


def _parse_patron_day(patron_day: str | None) -> tuple[int, int] | None:
    if not patron_day:
        return None
    month, day = patron_day.split("-")
    return int(month), int(day)


@lru_cache(maxsize=32)
def public_holidays(year: int, patron_day: str | None = None) -> frozenset[datetime.date]:
    """
    Return the national public holidays for the year.

    ``patron_day`` ("MM-DD") adds the local patron saint's day. Sundays are not
    listed here, see :func:`is_public_holiday`.
    """
    days = {datetime.date(year, month, day) for month, day in FIXED_HOLIDAYS}
    days.add(easter_sunday(year))
    days.add(pasquetta(year))

    patron = _parse_patron_day(patron_day)
    if patron is not None:
        try:
            days.add(datetime.date(year, *patron))
        except ValueError:
            # 02-29 outside leap years
            pass

    return frozenset(days)


def is_public_holiday(day: datetime.date, patron_day: str | None = None) -> bool:
    """True for Sundays and for public holidays."""
    if day.weekday() == 6:
        return True
    return day in public_holidays(day.year, patron_day)


def on_call_type_for_date(day: datetime.date, patron_day: str | None = None) -> OnCallType:
    """Suggested on-call type for a booking starting on ``day``."""
    if is_public_holiday(day, patron_day):
        return OnCallType.HOLIDAY
    return OnCallType.WEEKDAY
