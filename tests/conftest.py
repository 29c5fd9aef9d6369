"""
Pytest configuration and shared fixtures for testing.

Provides reusable test fixtures:
- repository: JSON profile repository in a temporary directory
- pending: fresh PendingChanges object per test
- test_client: FastAPI TestClient wired to both
- sample_profile: profile with a four day cycle and some entries
"""

import datetime
import os
import sys
import tempfile
from pathlib import Path

import pytest

# Keep log files out of the working tree
os.environ.setdefault("TURNARIO_LOG_DIR", str(Path(tempfile.gettempdir()) / "turnario-test-logs"))

# Add project root to path for imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

# ruff: noqa: E402
from fastapi.testclient import TestClient

from turnario.core.models import (
    HolidayEntry,
    OnCallEntry,
    OnCallType,
    OvertimeDestination,
    OvertimeEntry,
    OvertimeTimeSlot,
    PermitCategory,
    PermitEntry,
    ProfileState,
    ProjectEntry,
    RateTable,
)
from turnario.core.storage import JsonProfileRepository, PendingChanges
from turnario.main import app
from turnario.routes.shared import get_repository

FOUR_DAY_PATTERN = "\n".join(
    [
        "Monday,Morning,08:00,14:00",
        "Tuesday,Afternoon,16:00,22:00",
        "Wednesday,Night,22:00,06:00",
        "Thursday,Rest,,",
    ]
)


@pytest.fixture
def repository(tmp_path):
    """Repository writing to a temporary profile file."""
    return JsonProfileRepository(tmp_path / "profile.json")


@pytest.fixture
def pending():
    return PendingChanges()


@pytest.fixture
def test_client(repository, pending):
    """
    FastAPI TestClient using the temporary repository.

    Yields:
        TestClient: FastAPI test client for API testing
    """
    app.dependency_overrides[get_repository] = lambda: repository
    previous_pending = app.state.pending
    app.state.pending = pending

    with TestClient(app) as client:
        yield client

    app.dependency_overrides.clear()
    app.state.pending = previous_pending


@pytest.fixture
def rates():
    return RateTable(
        base_rate=10.0,
        overtime_day_rate=15.0,
        overtime_night_rate=30.0,
        overtime_holiday_rate=50.0,
        on_call_weekday_rate=2.0,
        on_call_holiday_rate=3.0,
        project_rate=20.0,
    )


@pytest.fixture
def sample_profile(rates):
    """
    Profile starting on Monday 2024-01-01 with a four day cycle.

    January 2024 holds a 2 day holiday, paid and banked overtime, one on-call
    pair, a permit and project hours.
    """
    return ProfileState(
        shift_pattern=FOUR_DAY_PATTERN,
        cycle_start_date=datetime.date(2024, 1, 1),
        salary_settings=rates,
        total_current_year_holidays=26,
        total_previous_years_holidays=4,
        entries=[
            HolidayEntry(id="hol-1", date="2024-01-09", value=2),
            OvertimeEntry(id="ot-1", date="2024-01-15", value=2, time_slot=OvertimeTimeSlot.DAY),
            OvertimeEntry(id="ot-2", date="2024-01-16", value=1.5, time_slot=OvertimeTimeSlot.NIGHT),
            OvertimeEntry(
                id="ot-3",
                date="2024-01-17",
                value=4,
                destination=OvertimeDestination.BANKED,
            ),
            OnCallEntry(
                id="oc-1",
                date="2024-01-20",
                value=2,
                start_time="22:00",
                end_time="00:00",
                on_call_type=OnCallType.WEEKDAY,
            ),
            OnCallEntry(
                id="oc-2",
                date="2024-01-21",
                value=7,
                start_time="00:00",
                end_time="07:00",
                on_call_type=OnCallType.HOLIDAY,
            ),
            PermitEntry(id="perm-1", date="2024-01-22", value=3, category=PermitCategory.STUDY),
            ProjectEntry(id="prj-1", date="2024-01-23", value=5),
        ],
    )
