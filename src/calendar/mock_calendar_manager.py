"""
Mock Calendar Manager for demos and tests without any real calendar data
"""
import logging
import random
from datetime import datetime, timedelta
from typing import List, Optional

from config.settings import Config
from src.calendar.calendar_manager import (
    EVENT_PRIORITIES, EVENT_TYPES, CalendarEvent, CalendarManager,
)

logger = logging.getLogger(__name__)

MOCK_TITLES = [
    "Team Meeting",
    "Client Call",
    "Project Review",
    "Sprint Planning",
    "Lunch Break",
    "Code Review",
    "Design Session",
    "One-on-One",
    "Product Demo",
    "Documentation",
]

MOCK_PARTICIPANTS = ("Jane Doe", "John Smith")


def generate_mock_events(count: int, start_date: datetime,
                         rng: Optional[random.Random] = None) -> List[CalendarEvent]:
    """
    Generate ``count`` random events within a week either side of ``start_date``.

    Events start between 09:00 and 16:45 on a quarter hour and last 30 to 120
    minutes. Pass a seeded ``rng`` for reproducible output.
    """
    rng = rng or random.Random()
    events = []

    for i in range(count):
        day_offset = rng.randrange(14) - 7
        hour = 9 + rng.randrange(8)
        minute = rng.randrange(4) * 15
        start = (start_date + timedelta(days=day_offset)).replace(
            hour=hour, minute=minute, second=0, microsecond=0
        )
        duration_minutes = (rng.randrange(4) + 1) * 30
        title = rng.choice(MOCK_TITLES)

        events.append(CalendarEvent(
            id=f"event-{i}",
            title=title,
            start=start,
            end=start + timedelta(minutes=duration_minutes),
            type=rng.choice(EVENT_TYPES),
            priority=rng.choice(EVENT_PRIORITIES),
            description=f"Description for {title}",
            participants=MOCK_PARTICIPANTS,
        ))

    return events


class MockCalendarManager(CalendarManager):
    """Calendar pre-populated with mock events around today"""

    def __init__(self, count: int = Config.MOCK_EVENT_COUNT, seed: Optional[int] = None):
        today = datetime.now().replace(hour=0, minute=0, second=0, microsecond=0)
        super().__init__(generate_mock_events(count, today, random.Random(seed)))
        logger.info(f"📋 MOCK: Seeded calendar with {count} events")
