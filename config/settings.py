"""
Configuration settings for the Smart Calendar Assistant
"""
import os
from dataclasses import dataclass, field, fields, replace
from typing import Any, Dict, Optional, Tuple


class Config:
    VERSION = "1.0.0"

    # API Configuration
    API_HOST = os.getenv("SMART_CALENDAR_HOST", "0.0.0.0")
    API_PORT = int(os.getenv("SMART_CALENDAR_PORT", "5000"))
    LOG_LEVEL = os.getenv("SMART_CALENDAR_LOG_LEVEL", "INFO")

    # Working hours
    WORKING_HOURS_START = "09:00"
    WORKING_HOURS_END = "17:00"

    # Meeting suggestions
    DEFAULT_MEETING_DURATION = 30  # minutes
    MEETING_DURATION_CHOICES = (15, 30, 45, 60, 90, 120)
    MEETING_LOOKAHEAD_DAYS = 5

    # Focus time
    FOCUS_BLOCK_MINUTES = 120
    FOCUS_BLOCK_OFFSET_MINUTES = 30  # gap from working hours start/end
    DEFAULT_FOCUS_START = "13:00"
    FOCUS_TIME_PREFERENCES = ("morning", "afternoon", "custom")

    # Events parsed from free text always last one hour
    NATURAL_LANGUAGE_EVENT_MINUTES = 60

    # Time picker defaults
    TIME_SLOT_START = "00:00"
    TIME_SLOT_END = "23:59"
    TIME_SLOT_INTERVAL = 30

    # Date/Time Formats
    TIME_FORMAT = "%H:%M"
    DATE_FORMAT = "%Y-%m-%d"
    DISPLAY_TIME_FORMAT = "%I:%M %p"

    # Mock data
    MOCK_EVENT_COUNT = 15


@dataclass(frozen=True)
class WorkingHours:
    start: str = Config.WORKING_HOURS_START
    end: str = Config.WORKING_HOURS_END

    def to_dict(self) -> Dict[str, str]:
        return {"start": self.start, "end": self.end}


@dataclass(frozen=True)
class FocusTimeRange:
    start: str
    end: str

    def to_dict(self) -> Dict[str, str]:
        return {"start": self.start, "end": self.end}


@dataclass(frozen=True)
class SuggestionSettings:
    """
    Complete, immutable record of the assistant's user settings.

    Updates never mutate a record: ``merge`` returns a new complete record with
    the partial update applied on top of this one.
    """
    enable_focus_time: bool = True
    enable_meeting_suggestions: bool = True
    enable_priority_assignment: bool = True
    working_hours: WorkingHours = field(default_factory=WorkingHours)
    preferred_meeting_duration: int = Config.DEFAULT_MEETING_DURATION
    focus_time_preference: str = "morning"
    custom_focus_times: Tuple[FocusTimeRange, ...] = ()

    def merge(self, partial: Optional[Dict[str, Any]] = None) -> "SuggestionSettings":
        """Return a new record with ``partial`` merged onto this one"""
        if not partial:
            return self

        known = {f.name for f in fields(self)}
        unknown = set(partial) - known
        if unknown:
            raise ValueError(f"Unknown settings fields: {sorted(unknown)}")

        changes = dict(partial)
        if "working_hours" in changes:
            changes["working_hours"] = _merge_working_hours(self.working_hours, changes["working_hours"])
        if "custom_focus_times" in changes:
            changes["custom_focus_times"] = _to_focus_ranges(changes["custom_focus_times"])

        return replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "enable_focus_time": self.enable_focus_time,
            "enable_meeting_suggestions": self.enable_meeting_suggestions,
            "enable_priority_assignment": self.enable_priority_assignment,
            "working_hours": self.working_hours.to_dict(),
            "preferred_meeting_duration": self.preferred_meeting_duration,
            "focus_time_preference": self.focus_time_preference,
            "custom_focus_times": [r.to_dict() for r in self.custom_focus_times],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SuggestionSettings":
        return cls().merge(data)


def _merge_working_hours(current: WorkingHours, value) -> WorkingHours:
    if isinstance(value, WorkingHours):
        return value
    unknown = set(value) - {"start", "end"}
    if unknown:
        raise ValueError(f"Unknown working_hours fields: {sorted(unknown)}")
    return replace(current, **value)


def _to_focus_ranges(values) -> Tuple[FocusTimeRange, ...]:
    if not values:
        return ()
    ranges = []
    for value in values:
        if isinstance(value, FocusTimeRange):
            ranges.append(value)
        else:
            ranges.append(FocusTimeRange(start=value["start"], end=value["end"]))
    return tuple(ranges)
