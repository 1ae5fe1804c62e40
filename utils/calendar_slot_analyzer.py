"""
Calendar Slot Analyzer - summary statistics and open slots for a calendar
"""
import logging
from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional, Sequence

from config.settings import Config, SuggestionSettings
from src.calendar.calendar_manager import CalendarEvent, get_events_for_day
from src.scheduler.time_slots import find_available_time_slots, parse_time_to_date

logger = logging.getLogger(__name__)

# Sunday first, matching the week layout of the calendar grid
DAY_NAMES = ["Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"]


class CalendarSlotAnalyzer:
    """Analyze a set of calendar events"""

    def __init__(self, settings: Optional[SuggestionSettings] = None):
        self.settings = settings or SuggestionSettings()

    def meeting_hours_by_day(self, events: Sequence[CalendarEvent]) -> List[Dict[str, Any]]:
        """Hours of regular events per weekday; focus time and suggestions are ignored"""
        minutes_by_day = [0.0] * 7

        for event in events:
            if event.type != "event":
                continue
            # datetime.weekday() is Monday=0
            day_index = (event.start.weekday() + 1) % 7
            minutes_by_day[day_index] += event.duration_minutes

        return [
            {"name": name[:3], "hours": round(minutes_by_day[i] / 60, 1)}
            for i, name in enumerate(DAY_NAMES)
        ]

    def events_by_priority(self, events: Sequence[CalendarEvent]) -> Dict[str, int]:
        counts = {"high": 0, "medium": 0, "low": 0}
        for event in events:
            counts[event.priority] = counts.get(event.priority, 0) + 1
        return counts

    def upcoming_events(self, events: Sequence[CalendarEvent], now: Optional[datetime] = None,
                        limit: int = 5) -> List[CalendarEvent]:
        """Next ``limit`` events starting within the coming week"""
        now = now or datetime.now()
        next_week = now + timedelta(days=7)
        upcoming = [e for e in events if now < e.start < next_week]
        return sorted(upcoming, key=lambda e: e.start)[:limit]

    def available_slots(self, events: Sequence[CalendarEvent], start_date: datetime,
                        days: int = 7, duration_minutes: Optional[int] = None) -> Dict[str, List[Dict[str, str]]]:
        """Open slots inside working hours for each day of the window, keyed by date"""
        duration = duration_minutes or self.settings.preferred_meeting_duration
        result = {}

        for day_offset in range(days):
            day = start_date + timedelta(days=day_offset)
            day_events = sorted(get_events_for_day(events, day), key=lambda e: e.start)
            slots = find_available_time_slots(
                day_events,
                parse_time_to_date(self.settings.working_hours.start, day),
                parse_time_to_date(self.settings.working_hours.end, day),
                duration,
            )
            result[day.strftime(Config.DATE_FORMAT)] = [slot.to_dict() for slot in slots]

        return result

    def analyze(self, events: Sequence[CalendarEvent], now: Optional[datetime] = None,
                days: int = 7) -> Dict[str, Any]:
        """Full breakdown used by the analytics endpoint"""
        now = now or datetime.now()

        analysis = {
            "total_events": len(events),
            "meeting_hours_by_day": self.meeting_hours_by_day(events),
            "events_by_priority": self.events_by_priority(events),
            "upcoming_events": [e.to_dict() for e in self.upcoming_events(events, now)],
            "available_slots": self.available_slots(events, now, days),
        }

        logger.debug(f"📊 Analyzed {len(events)} events over {days} days")
        return analysis
