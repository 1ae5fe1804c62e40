"""
Smart Scheduler - meeting time and focus block suggestions

Every function here is pure: the caller passes the current events, the
settings record and a reference time, and gets new data back.
"""
import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional, Sequence

from config.settings import Config, SuggestionSettings
from src.calendar.calendar_manager import CalendarEvent, TimeBlock, get_events_for_day
from src.scheduler.time_slots import TimeRange, find_available_time_slots, parse_time_to_date

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SuggestionSet:
    """Suggestions derived from one snapshot of events and settings"""
    suggestions: List[CalendarEvent] = field(default_factory=list)
    focus_blocks: List[TimeBlock] = field(default_factory=list)

    def find(self, suggestion_id: str):
        for item in list(self.suggestions) + list(self.focus_blocks):
            if item.id == suggestion_id:
                return item
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "suggestions": [s.to_dict() for s in self.suggestions],
            "focus_blocks": [b.to_dict() for b in self.focus_blocks],
            "focus_block_events": [b.to_calendar_event().to_dict() for b in self.focus_blocks],
        }


def _sorted_day_events(events: Sequence[CalendarEvent], day: datetime) -> List[CalendarEvent]:
    return sorted(get_events_for_day(events, day), key=lambda e: e.start)


def _millis(value: datetime) -> int:
    return int(value.timestamp() * 1000)


def suggest_meeting_time(existing_events: Sequence[CalendarEvent],
                         settings: Optional[SuggestionSettings] = None,
                         duration: Optional[int] = None,
                         start_date: Optional[datetime] = None,
                         participant_count: int = 1) -> Optional[TimeRange]:
    """
    Return the first free slot within working hours over the next few days.

    Days are searched in order starting with ``start_date``'s own day; the first
    day with any opening wins and its earliest slot is returned. Returns None
    when every day in the horizon is fully booked. ``participant_count`` is
    accepted but does not affect the search.
    """
    settings = settings or SuggestionSettings()
    duration = duration if duration is not None else settings.preferred_meeting_duration
    start_date = start_date or datetime.now()

    for day_offset in range(Config.MEETING_LOOKAHEAD_DAYS):
        target_date = start_date + timedelta(days=day_offset)
        work_start = parse_time_to_date(settings.working_hours.start, target_date)
        work_end = parse_time_to_date(settings.working_hours.end, target_date)

        day_events = _sorted_day_events(existing_events, target_date)
        slots = find_available_time_slots(day_events, work_start, work_end, duration)

        logger.debug(f"🔍 {target_date.strftime(Config.DATE_FORMAT)}: {len(day_events)} events, "
                     f"{len(slots)} open slot(s) of {duration} mins")

        if slots:
            return slots[0]

    logger.info(f"❌ No {duration} min slot in the next {Config.MEETING_LOOKAHEAD_DAYS} days")
    return None


def _focus_candidate(settings: SuggestionSettings, start_date: datetime) -> TimeRange:
    block = timedelta(minutes=Config.FOCUS_BLOCK_MINUTES)
    offset = timedelta(minutes=Config.FOCUS_BLOCK_OFFSET_MINUTES)
    preference = settings.focus_time_preference

    if preference == "morning":
        focus_start = parse_time_to_date(settings.working_hours.start, start_date) + offset
        return TimeRange(focus_start, focus_start + block)

    if preference == "afternoon":
        focus_end = parse_time_to_date(settings.working_hours.end, start_date) - offset
        return TimeRange(focus_end - block, focus_end)

    if preference == "custom" and settings.custom_focus_times:
        custom = settings.custom_focus_times[0]
        return TimeRange(parse_time_to_date(custom.start, start_date),
                         parse_time_to_date(custom.end, start_date))

    focus_start = parse_time_to_date(Config.DEFAULT_FOCUS_START, start_date)
    return TimeRange(focus_start, focus_start + block)


def suggest_focus_time_blocks(existing_events: Sequence[CalendarEvent],
                              settings: Optional[SuggestionSettings] = None,
                              start_date: Optional[datetime] = None) -> List[TimeBlock]:
    """
    Propose a single focus block on ``start_date``.

    The block is placed according to the focus time preference and dropped
    entirely if any event that day overlaps it; no other time is tried.
    """
    settings = settings or SuggestionSettings()
    if not settings.enable_focus_time:
        return []

    start_date = start_date or datetime.now()
    candidate = _focus_candidate(settings, start_date)
    day_events = _sorted_day_events(existing_events, start_date)

    conflicts = [e for e in day_events if e.overlaps_with(candidate.start, candidate.end)]
    if conflicts:
        logger.debug(f"⚠️  Focus block {candidate.start.strftime(Config.TIME_FORMAT)}-"
                     f"{candidate.end.strftime(Config.TIME_FORMAT)} conflicts with "
                     f"{[e.title for e in conflicts]}")
        return []

    return [TimeBlock(
        id=f"focus-{_millis(candidate.start)}",
        start=candidate.start,
        end=candidate.end,
        type="focus",
        title="Focus Time",
    )]


def generate_suggestions(events: Sequence[CalendarEvent],
                         settings: Optional[SuggestionSettings] = None,
                         now: Optional[datetime] = None) -> SuggestionSet:
    """
    Derive the full set of suggestions from scratch.

    Callers replace any previous set with the result; nothing is carried over.
    """
    settings = settings or SuggestionSettings()
    now = now or datetime.now()
    suggestions = []

    if settings.enable_meeting_suggestions:
        slot = suggest_meeting_time(events, settings, start_date=now)
        if slot:
            suggestions.append(CalendarEvent(
                id=f"suggestion-{_millis(now)}",
                title="Suggested Meeting",
                start=slot.start,
                end=slot.end,
                priority="medium",
                type="suggestion",
                description="AI suggested optimal meeting time",
            ))

    focus_blocks = suggest_focus_time_blocks(events, settings, start_date=now)

    logger.info(f"💡 Generated {len(suggestions)} meeting suggestion(s), {len(focus_blocks)} focus block(s)")
    return SuggestionSet(suggestions=suggestions, focus_blocks=focus_blocks)
