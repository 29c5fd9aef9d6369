# turnario/core/config.py

import os
from pathlib import Path
from typing import Final


# ==========================
# Date and time formats
# ==========================

#: ISO format for calendar dates (entry dates, cycle bounds, override keys).
DATE_FORMAT_ISO: Final[str] = "%Y-%m-%d"

#: Clock times in shift definitions and entries (for example "14:00").
TIME_FORMAT_HM: Final[str] = "%H:%M"

#: Clock times with seconds, accepted for compatibility with older exports.
TIME_FORMAT_HMS: Final[str] = "%H:%M:%S"

#: Midnight, the boundary between the two parts of an on-call booking.
MIDNIGHT: Final[str] = "00:00"


# ==========================
# On-call (reperibilità)
# ==========================

#: Default on-call window. Starts in the evening and ends the next morning.
DEFAULT_ON_CALL_START: Final[str] = "22:00"
DEFAULT_ON_CALL_END: Final[str] = "07:00"


# ==========================
# Net salary estimate (2024 rates)
# ==========================

#: Employee social security contribution (INPS), share of gross pay.
SOCIAL_SECURITY_RATE: Final[float] = 0.0919

#: Monthly salaries per year.
SALARY_PAYMENTS_PER_YEAR: Final[int] = 12

#: Regional and municipal surtaxes are withheld in this many instalments.
SURTAX_INSTALMENTS: Final[int] = 11

#: Progressive income tax (IRPEF) brackets as (upper bound, rate). None is unbounded.
INCOME_TAX_BRACKETS: Final[tuple[tuple[float | None, float], ...]] = (
    (28000.0, 0.23),
    (50000.0, 0.35),
    (None, 0.43),
)

#: Employment income deduction: full amount up to the first limit, tapering to 0 at the last.
EMPLOYMENT_DEDUCTION_BASE: Final[float] = 1910.0
EMPLOYMENT_DEDUCTION_EXTRA: Final[float] = 1190.0
EMPLOYMENT_DEDUCTION_FULL_LIMIT: Final[float] = 15000.0
EMPLOYMENT_DEDUCTION_MID_LIMIT: Final[float] = 28000.0
EMPLOYMENT_DEDUCTION_END_LIMIT: Final[float] = 50000.0

#: Extra deduction for taxable income in (25000, 35000].
EMPLOYMENT_DEDUCTION_BONUS: Final[float] = 65.0
EMPLOYMENT_DEDUCTION_BONUS_RANGE: Final[tuple[float, float]] = (25000.0, 35000.0)


# ==========================
# Runtime / environment
# ==========================

#: Production mode switches logging to JSON and tightens CORS.
IS_PRODUCTION: Final[bool] = os.getenv("PRODUCTION", "false").lower() == "true"

#: Directory holding the profile document.
DATA_DIR: Final[Path] = Path(os.getenv("TURNARIO_DATA_DIR", "data"))

#: Profile document file name inside DATA_DIR.
PROFILE_FILE_NAME: Final[str] = "profile.json"

#: Directory for rotating log files.
LOG_DIR: Final[Path] = Path(os.getenv("TURNARIO_LOG_DIR", "logs"))

#: Comma separated list of allowed origins in production.
CORS_ORIGINS: Final[list[str]] = [
    origin.strip() for origin in os.getenv("CORS_ORIGINS", "").split(",") if origin.strip()
]

APP_VERSION: Final[str] = "0.3.0"
