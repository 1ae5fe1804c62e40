"""
Tests for the in-memory calendar, event helpers and mock data
"""

import random
from dataclasses import replace
from datetime import date, datetime, timedelta, timezone

import pytest

from src.calendar.calendar_manager import (
    CalendarEvent,
    CalendarManager,
    EventNotFoundError,
    format_event_time,
    get_events_for_day,
)
from src.calendar.mock_calendar_manager import MOCK_TITLES, MockCalendarManager, generate_mock_events
from conftest import at


def event_data(start, end, **fields):
    data = {"title": "Planning", "start": start.isoformat(), "end": end.isoformat()}
    data.update(fields)
    return data


class TestCalendarManager:

    def test_add_event_assigns_id(self):
        calendar = CalendarManager()
        event = calendar.add_event(event_data(at("10:00"), at("11:00")))

        assert event.id.startswith("event-")
        assert calendar.get_event(event.id) == event
        assert len(calendar) == 1

    def test_ids_are_unique(self):
        calendar = CalendarManager()
        ids = {calendar.add_event(event_data(at("10:00"), at("11:00"))).id for _ in range(20)}
        assert len(ids) == 20

    def test_end_before_start_rolls_to_next_day(self):
        calendar = CalendarManager()
        event = calendar.add_event(event_data(at("15:00"), at("09:00")))
        assert event.end == at("15:00") + timedelta(days=1)

    def test_update_replaces_whole_event(self):
        calendar = CalendarManager()
        event = calendar.add_event(event_data(at("10:00"), at("11:00"), location="Room 1"))

        updated = calendar.update_event(replace(event, title="Renamed", location=None))

        assert calendar.get_event(event.id) == updated
        assert updated.title == "Renamed"
        assert updated.location is None
        assert len(calendar) == 1

    def test_unknown_id_raises(self, make_event):
        calendar = CalendarManager()
        with pytest.raises(EventNotFoundError):
            calendar.get_event("missing")
        with pytest.raises(EventNotFoundError):
            calendar.update_event(make_event("09:00", "10:00"))
        with pytest.raises(EventNotFoundError):
            calendar.delete_event("missing")

    def test_delete(self, make_event):
        event = make_event("09:00", "10:00")
        calendar = CalendarManager([event])

        assert calendar.delete_event(event.id) == event
        assert calendar.list_events() == []

    def test_list_and_day_queries_are_sorted(self, make_event):
        late = make_event("15:00", "16:00")
        early = make_event("09:00", "10:00")
        other_day = make_event("08:00", "09:00", day_offset=1)
        calendar = CalendarManager([late, other_day, early])

        assert calendar.list_events() == [early, late, other_day]
        assert calendar.events_for_day(at("00:00")) == [early, late]


class TestEventHelpers:

    def test_get_events_for_day_accepts_date(self, make_event):
        today = make_event("09:00", "10:00")
        tomorrow = make_event("09:00", "10:00", day_offset=1)
        assert get_events_for_day([today, tomorrow], date(2030, 1, 8)) == [tomorrow]

    def test_format_event_time(self, make_event):
        assert format_event_time(make_event("09:00", "10:30")) == "9:00 AM - 10:30 AM"
        assert format_event_time(make_event("12:15", "13:00")) == "12:15 PM - 1:00 PM"

    def test_format_all_day(self, make_event):
        assert format_event_time(make_event("00:00", "23:59", is_all_day=True)) == "All day"

    def test_overlaps_is_strict(self, make_event):
        event = make_event("10:00", "11:00")
        assert event.overlaps_with(at("10:30"), at("12:00"))
        assert not event.overlaps_with(at("11:00"), at("12:00"))
        assert not event.overlaps_with(at("09:00"), at("10:00"))

    def test_offset_timestamps_become_local_time(self):
        event = CalendarEvent.from_dict({
            "id": "event-utc",
            "title": "Standup",
            "start": "2030-01-07T10:00:00+00:00",
            "end": "2030-01-07T10:15:00+00:00",
        })

        expected = datetime(2030, 1, 7, 10, tzinfo=timezone.utc).astimezone().replace(tzinfo=None)
        assert event.start == expected
        assert event.start.tzinfo is None
        assert event.duration_minutes == 15

    def test_dict_conversion(self, make_event):
        event = make_event("10:00", "11:00", participants=("Ann", "Bo"), priority="high")
        body = event.to_dict()

        assert body["participants"] == ["Ann", "Bo"]
        assert body["start"] == "2030-01-07T10:00:00"
        assert CalendarEvent.from_dict(body) == event


class TestMockEvents:

    def test_seeded_generation_is_reproducible(self):
        start = datetime(2030, 1, 7)
        first = generate_mock_events(15, start, random.Random(42))
        second = generate_mock_events(15, start, random.Random(42))
        assert first == second

    def test_generated_events_follow_mock_rules(self):
        start = datetime(2030, 1, 7)
        events = generate_mock_events(200, start, random.Random(7))

        assert len(events) == 200
        for event in events:
            assert -7 <= (event.start.date() - start.date()).days <= 6
            assert 9 <= event.start.hour <= 16
            assert event.start.minute in (0, 15, 30, 45)
            assert event.duration_minutes in (30, 60, 90, 120)
            assert event.title in MOCK_TITLES
            assert event.description == f"Description for {event.title}"
            assert event.participants == ("Jane Doe", "John Smith")

    def test_mock_calendar_is_populated(self):
        assert len(MockCalendarManager(count=5, seed=1)) == 5
