from datetime import time

import pytest

from jobtrack.core.config import Settings
from jobtrack.domain.scheduling.entities.work_center import WorkCenter
from jobtrack.domain.scheduling.services.capacity_clock import CapacityClock
from jobtrack.domain.scheduling.services.scheduling_engine import SchedulingEngine
from jobtrack.domain.scheduling.value_objects.working_calendar import WorkingCalendar

from .factories import make_settings, make_work_center


@pytest.fixture
def test_settings() -> Settings:
    return make_settings()


@pytest.fixture
def engine(test_settings: Settings) -> SchedulingEngine:
    return SchedulingEngine(test_settings)


@pytest.fixture
def calendar() -> WorkingCalendar:
    """08:00-16:00 every day."""
    return WorkingCalendar(day_start=time(8, 0), hours_per_day=8)


@pytest.fixture
def clock() -> CapacityClock:
    return CapacityClock(horizon_days=90)


@pytest.fixture
def work_center() -> WorkCenter:
    return make_work_center("wc-1", hours=8)
