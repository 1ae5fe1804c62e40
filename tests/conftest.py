"""
Pytest fixtures for Smart Calendar Assistant tests.

Provides:
- A fixed reference time (Monday 2030-01-07, 08:00)
- An event factory working in "HH:MM" clock times
- Default settings and a Flask test client
"""

import pytest
from datetime import datetime, timedelta

from config.settings import SuggestionSettings
from src.api.flask_server import SmartCalendarAPI
from src.calendar.calendar_manager import CalendarEvent


REFERENCE_NOW = datetime(2030, 1, 7, 8, 0)


def at(clock: str, day_offset: int = 0) -> datetime:
    """Datetime on the reference day (plus ``day_offset`` days) at ``clock``"""
    hours, minutes = clock.split(":")
    day = REFERENCE_NOW + timedelta(days=day_offset)
    return day.replace(hour=int(hours), minute=int(minutes), second=0, microsecond=0)


@pytest.fixture
def now():
    return REFERENCE_NOW


@pytest.fixture
def settings():
    return SuggestionSettings()


@pytest.fixture
def make_event():
    """Factory: make_event("10:00", "10:30", day_offset=0, **fields)"""
    counter = {"n": 0}

    def _make(start: str, end: str, day_offset: int = 0, **fields) -> CalendarEvent:
        counter["n"] += 1
        data = {
            "id": f"test-event-{counter['n']}",
            "title": f"Event {counter['n']}",
            "start": at(start, day_offset),
            "end": at(end, day_offset),
        }
        data.update(fields)
        return CalendarEvent(**data)

    return _make


@pytest.fixture
def api():
    return SmartCalendarAPI(clock=lambda: REFERENCE_NOW)


@pytest.fixture
def client(api):
    api.app.config["TESTING"] = True
    return api.app.test_client()
