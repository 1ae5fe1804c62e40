"""
Natural language event parser - turns free text into an event draft

This is a heuristic pass over the text, not a language model: a few ordered
rule tables pick out a title, a relative day, and a clock time.
"""
import logging
import re
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Dict, Optional, Tuple

from config.settings import Config, SuggestionSettings
from src.ai_agent.priority_predictor import predict_event_priority

logger = logging.getLogger(__name__)

DEFAULT_TITLE = "New Event"
TITLE_WORDS = 3

# When several phrases are present the one starting latest in the text wins.
TITLE_PHRASES: Tuple[str, ...] = ("meeting with", "call with")

# First matching phrase wins.
DATE_OFFSET_RULES: Tuple[Tuple[str, int], ...] = (
    ("tomorrow", 1),
    ("next week", 7),
)

TIME_TRIGGER = "at "
TIME_PATTERN = re.compile(r"at (\d{1,2})(:\d{2})?\s*(am|pm)?", re.IGNORECASE)
ALL_DAY_PHRASE = "all day"


@dataclass(frozen=True)
class EventDraft:
    """An event shaped record produced from text, not yet on the calendar"""
    title: str
    start: datetime
    end: datetime
    priority: str
    is_all_day: bool = False
    type: str = "event"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "start": self.start.isoformat(),
            "end": self.end.isoformat(),
            "priority": self.priority,
            "is_all_day": self.is_all_day,
            "type": self.type,
        }


def extract_title(text: str) -> str:
    lower_text = text.lower()
    positions = [lower_text.find(phrase) for phrase in TITLE_PHRASES]
    phrase_index = max(positions)

    if phrase_index == -1:
        return " ".join(text.split(" ")[:TITLE_WORDS])

    words = lower_text[phrase_index:].split(" ")
    if len(words) >= TITLE_WORDS:
        return " ".join(words[:TITLE_WORDS])
    return ""


def extract_day_offset(text: str) -> int:
    lower_text = text.lower()
    for phrase, days in DATE_OFFSET_RULES:
        if phrase in lower_text:
            return days
    return 0


def extract_clock_time(text: str) -> Optional[Tuple[int, int]]:
    """Return (hour, minute) on a 24-hour clock, or None when no time is given"""
    match = TIME_PATTERN.search(text.lower())
    if not match:
        return None

    hour = int(match.group(1))
    minute = int(match.group(2)[1:]) if match.group(2) else 0
    meridiem = match.group(3)

    if meridiem == "pm" and hour < 12:
        hour += 12
    if meridiem == "am" and hour == 12:
        hour = 0

    return hour, minute


def parse_natural_language(text: str,
                           settings: Optional[SuggestionSettings] = None,
                           now: Optional[datetime] = None) -> EventDraft:
    """
    Build a best-effort event draft from ``text``.

    Never fails: callers decide whether the draft is usable. Without a clock
    time or "all day" the draft keeps the current time of day.
    """
    now = now or datetime.now()
    lower_text = text.lower()

    title = extract_title(text)

    offset = timedelta(days=extract_day_offset(text))
    start = now + offset
    end = now + offset
    is_all_day = False

    if TIME_TRIGGER in lower_text:
        clock = extract_clock_time(text)
        if clock:
            hour, minute = clock
            midnight = start.replace(hour=0, minute=0, second=0, microsecond=0)
            # Out of range values roll into the following day(s)
            start = midnight + timedelta(hours=hour, minutes=minute)
            end = start + timedelta(minutes=Config.NATURAL_LANGUAGE_EVENT_MINUTES)
    elif ALL_DAY_PHRASE in lower_text:
        is_all_day = True
        start = start.replace(hour=0, minute=0, second=0, microsecond=0)
        end = end.replace(hour=23, minute=59, second=59, microsecond=999000)

    priority = predict_event_priority(text, settings=settings)

    draft = EventDraft(
        title=title or DEFAULT_TITLE,
        start=start,
        end=end,
        priority=priority,
        is_all_day=is_all_day,
    )
    logger.debug(f"Parsed '{text}' -> {draft}")
    return draft
