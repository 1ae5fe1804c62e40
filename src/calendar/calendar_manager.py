"""
In-memory calendar store for the Smart Calendar Assistant
"""
import logging
import uuid
from dataclasses import dataclass, replace
from datetime import date, datetime, timedelta
from typing import Any, Dict, Iterable, List, Optional, Tuple, Union

from config.settings import Config

logger = logging.getLogger(__name__)

EVENT_PRIORITIES = ("low", "medium", "high")
EVENT_TYPES = ("event", "focus", "suggestion")
TIME_BLOCK_TYPES = ("focus", "meeting", "break")


class EventNotFoundError(KeyError):
    """Raised when an event id is not in the calendar"""


def _parse_datetime(value: Union[str, datetime]) -> datetime:
    parsed = value if isinstance(value, datetime) else datetime.fromisoformat(value)
    if parsed.tzinfo is not None:
        # Events are kept in naive local time
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


@dataclass(frozen=True)
class CalendarEvent:
    """Represents a calendar event. Edits replace the whole record."""
    id: str
    title: str
    start: datetime
    end: datetime
    priority: str = "medium"
    type: str = "event"
    description: Optional[str] = None
    location: Optional[str] = None
    participants: Optional[Tuple[str, ...]] = None
    is_all_day: bool = False
    color: Optional[str] = None

    @property
    def duration_minutes(self) -> float:
        return (self.end - self.start).total_seconds() / 60

    def overlaps_with(self, other_start: datetime, other_end: datetime) -> bool:
        """Check if this event overlaps with another time range"""
        return self.start < other_end and self.end > other_start

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary format for JSON serialization"""
        return {
            "id": self.id,
            "title": self.title,
            "start": self.start.isoformat(),
            "end": self.end.isoformat(),
            "priority": self.priority,
            "type": self.type,
            "description": self.description,
            "location": self.location,
            "participants": list(self.participants) if self.participants else None,
            "is_all_day": self.is_all_day,
            "color": self.color,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CalendarEvent":
        participants = data.get("participants")
        return cls(
            id=data["id"],
            title=data["title"],
            start=_parse_datetime(data["start"]),
            end=_parse_datetime(data["end"]),
            priority=data.get("priority", "medium"),
            type=data.get("type", "event"),
            description=data.get("description"),
            location=data.get("location"),
            participants=tuple(participants) if participants else None,
            is_all_day=bool(data.get("is_all_day", False)),
            color=data.get("color"),
        )


@dataclass(frozen=True)
class TimeBlock:
    """A proposed block of time such as a focus period"""
    id: str
    start: datetime
    end: datetime
    type: str
    title: str

    def to_calendar_event(self) -> CalendarEvent:
        """View of this block that can sit in the same grid as real events"""
        return CalendarEvent(
            id=self.id,
            title=self.title,
            start=self.start,
            end=self.end,
            priority="low",
            type="focus",
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "start": self.start.isoformat(),
            "end": self.end.isoformat(),
            "type": self.type,
            "title": self.title,
        }


def get_events_for_day(events: Iterable[CalendarEvent], day: Union[date, datetime]) -> List[CalendarEvent]:
    """Events whose start falls on the same calendar date as ``day``"""
    target = day.date() if isinstance(day, datetime) else day
    return [event for event in events if event.start.date() == target]


def format_event_time(event: CalendarEvent) -> str:
    if event.is_all_day:
        return "All day"
    return f"{_display_time(event.start)} - {_display_time(event.end)}"


def _display_time(value: datetime) -> str:
    # 12-hour clock without a leading zero on the hour
    return value.strftime(Config.DISPLAY_TIME_FORMAT).lstrip("0")


def normalize_event_end(start: datetime, end: datetime) -> datetime:
    """Roll ``end`` to one day after ``start`` when it does not come after it"""
    if end <= start:
        return start + timedelta(days=1)
    return end


class CalendarManager:
    """In-memory calendar. Events live only as long as the process does."""

    def __init__(self, events: Optional[Iterable[CalendarEvent]] = None):
        self._events: List[CalendarEvent] = list(events or [])

    def __len__(self) -> int:
        return len(self._events)

    @staticmethod
    def new_event_id() -> str:
        return f"event-{uuid.uuid4().hex[:12]}"

    def add_event(self, event_data: Dict[str, Any]) -> CalendarEvent:
        """Create an event from ``event_data`` (everything except the id)"""
        data = dict(event_data)
        data["id"] = self.new_event_id()
        event = CalendarEvent.from_dict(data)
        event = replace(event, end=normalize_event_end(event.start, event.end))

        self._events.append(event)
        logger.info(f"📅 Event created: {event.title} ({event.id})")
        return event

    def update_event(self, event: CalendarEvent) -> CalendarEvent:
        """Replace the stored event with the same id"""
        index = self._index_of(event.id)
        event = replace(event, end=normalize_event_end(event.start, event.end))
        self._events[index] = event
        logger.info(f"✏️  Event updated: {event.title} ({event.id})")
        return event

    def delete_event(self, event_id: str) -> CalendarEvent:
        index = self._index_of(event_id)
        event = self._events.pop(index)
        logger.info(f"🗑️  Event deleted: {event.title} ({event.id})")
        return event

    def get_event(self, event_id: str) -> CalendarEvent:
        return self._events[self._index_of(event_id)]

    def list_events(self) -> List[CalendarEvent]:
        """All events sorted by start time"""
        return sorted(self._events, key=lambda e: e.start)

    def events_for_day(self, day: Union[date, datetime]) -> List[CalendarEvent]:
        return sorted(get_events_for_day(self._events, day), key=lambda e: e.start)

    def _index_of(self, event_id: str) -> int:
        for index, event in enumerate(self._events):
            if event.id == event_id:
                return index
        raise EventNotFoundError(event_id)
