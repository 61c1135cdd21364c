# File: tests/conftest.py
"""
Pytest configuration and shared fixtures.
Provides reusable events, calendars and listeners for all tests.
"""

import os
import sys
from datetime import date, time
from pathlib import Path
from unittest.mock import Mock

# Keep test runs from writing log files
os.environ["CALENDAR_LOG_TO_FILE"] = "false"

import pytest

# Add project root to path for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from personal_calendar.models import Event, Visibility
from personal_calendar.core.calendar import Calendar
from personal_calendar.core.listeners import CalendarListener


# ==================== Date/Time Fixtures ====================

@pytest.fixture
def new_year():
    """Wednesday, 2025-01-01."""
    return date(2025, 1, 1)


@pytest.fixture
def first_monday():
    """Monday, 2025-01-06."""
    return date(2025, 1, 6)


# ==================== Event Fixtures ====================

@pytest.fixture
def meeting(new_year):
    """Timed event, 2025-01-01 10:00-11:00."""
    return Event("Meeting", new_year, new_year, time(10, 0), time(11, 0))


@pytest.fixture
def lunch(new_year):
    """Timed event directly after the meeting, 11:00-12:00."""
    return Event("Lunch", new_year, new_year, time(11, 0), time(12, 0),
                 location="Cafeteria")


@pytest.fixture
def holiday():
    """All-day event on 2025-12-25."""
    return Event("Holiday", date(2025, 12, 25))


# ==================== Calendar Fixtures ====================

@pytest.fixture
def calendar():
    """Empty calendar."""
    return Calendar("Work")


@pytest.fixture
def recording_listener():
    """Listener that records every notification."""

    class RecordingListener(CalendarListener):
        def __init__(self):
            self.added = []
            self.modified = []

        def on_event_added(self, event):
            self.added.append(event)

        def on_event_modified(self, event):
            self.modified.append(event)

    return RecordingListener()


@pytest.fixture
def mock_listener():
    """Mock listener exposing both callbacks."""
    return Mock(spec=CalendarListener)


@pytest.fixture
def create_event():
    """Factory fixture for timed events on a single day."""
    def _create(
        subject: str = "Event",
        day: date = date(2025, 1, 1),
        start: time = time(9, 0),
        end: time = time(10, 0),
        visibility: Visibility = Visibility.PUBLIC
    ) -> Event:
        return Event(subject, day, day, start, end, visibility)

    return _create


# ==================== Temporary Directory Fixtures ====================

@pytest.fixture
def data_dir(tmp_path):
    """Empty directory for saved calendars."""
    path = tmp_path / "calendars"
    path.mkdir()
    return path


# ==================== Pytest Markers ====================

def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test"
    )
    config.addinivalue_line(
        "markers", "slow: mark test as slow running"
    )
