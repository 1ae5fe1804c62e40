"""
Tests for calendar analytics
"""

from config.settings import SuggestionSettings
from utils.calendar_slot_analyzer import CalendarSlotAnalyzer
from conftest import at


class TestCalendarSlotAnalyzer:

    def test_meeting_hours_by_day_counts_regular_events_only(self, make_event):
        # Reference day 2030-01-07 is a Monday
        events = [
            make_event("09:00", "10:30"),
            make_event("13:00", "14:00", type="focus"),
            make_event("10:00", "10:30", day_offset=-1),
        ]

        hours = CalendarSlotAnalyzer().meeting_hours_by_day(events)

        assert [d["name"] for d in hours] == ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]
        assert hours[0]["hours"] == 0.5
        assert hours[1]["hours"] == 1.5
        assert sum(d["hours"] for d in hours) == 2.0

    def test_events_by_priority(self, make_event):
        events = [
            make_event("09:00", "10:00", priority="high"),
            make_event("10:00", "11:00", priority="low"),
            make_event("11:00", "12:00", priority="low"),
        ]
        assert CalendarSlotAnalyzer().events_by_priority(events) == {"high": 1, "medium": 0, "low": 2}

    def test_upcoming_events(self, now, make_event):
        past = make_event("07:00", "07:30")
        soon = [make_event("09:00", "10:00", day_offset=d) for d in range(6)]
        far = make_event("09:00", "10:00", day_offset=8)

        upcoming = CalendarSlotAnalyzer().upcoming_events([far, past] + soon, now)

        assert upcoming == soon[:5]

    def test_available_slots_per_day(self, now, make_event):
        settings = SuggestionSettings().merge({"preferred_meeting_duration": 60})
        events = [make_event("09:00", "12:00")]

        slots = CalendarSlotAnalyzer(settings).available_slots(events, now, days=2)

        assert list(slots) == ["2030-01-07", "2030-01-08"]
        assert slots["2030-01-07"] == [{"start": at("12:00").isoformat(), "end": at("13:00").isoformat()}]
        assert slots["2030-01-08"][0]["start"] == at("09:00", 1).isoformat()

    def test_analyze(self, now, make_event):
        analysis = CalendarSlotAnalyzer().analyze([make_event("09:00", "10:00")], now)

        assert analysis["total_events"] == 1
        assert len(analysis["available_slots"]) == 7
        assert analysis["upcoming_events"][0]["title"] == "Event 1"
