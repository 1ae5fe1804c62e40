"""
Time slot utilities - clock strings, minute offsets and free slot search
"""
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Dict, List, Sequence

from config.settings import Config

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TimeRange:
    """A start/end pair, used for free slots and meeting suggestions"""
    start: datetime
    end: datetime

    @property
    def duration_minutes(self) -> int:
        return int((self.end - self.start).total_seconds() // 60)

    def to_dict(self) -> Dict[str, str]:
        return {"start": self.start.isoformat(), "end": self.end.isoformat()}


def time_to_minutes(time_str: str) -> int:
    """Convert an "HH:MM" string to minutes since midnight"""
    hours, minutes = time_str.split(":")
    return int(hours) * 60 + int(minutes)


def minutes_to_time(minutes: int) -> str:
    """Convert minutes since midnight to a zero-padded "HH:MM" string"""
    hours, mins = divmod(minutes, 60)
    return f"{hours:02d}:{mins:02d}"


def generate_time_slots(start: str = Config.TIME_SLOT_START,
                        end: str = Config.TIME_SLOT_END,
                        interval: int = Config.TIME_SLOT_INTERVAL) -> List[str]:
    """
    Enumerate "HH:MM" values from ``start`` every ``interval`` minutes.

    Both ends are inclusive when ``end`` falls on the grid.
    """
    slots = []
    current = time_to_minutes(start)
    last = time_to_minutes(end)

    while current <= last:
        slots.append(minutes_to_time(current))
        current += interval

    return slots


def parse_time_to_date(time_str: str, date: datetime) -> datetime:
    """Place an "HH:MM" clock time on the calendar day of ``date``"""
    hours, minutes = time_str.split(":")
    return date.replace(hour=int(hours), minute=int(minutes), second=0, microsecond=0)


def find_available_time_slots(events: Sequence, day_start: datetime, day_end: datetime,
                              duration_minutes: int) -> List[TimeRange]:
    """
    Find free slots of exactly ``duration_minutes`` between ``day_start`` and ``day_end``.

    ``events`` must already be restricted to one day and sorted by start; this
    function does neither. Each gap yields at most one slot, placed at the
    start of the gap. The cursor only moves forward, so overlapping or nested
    events are merged into a single busy interval.
    """
    slots = []
    duration = timedelta(minutes=duration_minutes)
    cursor = day_start

    for event in events:
        if event.start - cursor >= duration:
            slots.append(TimeRange(cursor, cursor + duration))
        if event.end > cursor:
            cursor = event.end

    if day_end - cursor >= duration:
        slots.append(TimeRange(cursor, cursor + duration))

    logger.debug(f"Found {len(slots)} slot(s) of {duration_minutes} mins between "
                 f"{day_start.isoformat()} and {day_end.isoformat()}")
    return slots
