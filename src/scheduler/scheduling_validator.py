"""
Scheduling Validator - checks drafts and proposed times before they are committed
"""
import logging
from datetime import datetime
from typing import List, Sequence

from src.calendar.calendar_manager import CalendarEvent

logger = logging.getLogger(__name__)


class SchedulingValidator:
    """
    Acceptance checks applied by the host application.

    The suggestion engine never rejects anything itself; it always returns a
    best-effort result. These checks decide whether that result can go on the
    calendar.
    """

    @staticmethod
    def validate_draft(draft) -> List[str]:
        """Return a list of problems; empty when the draft can become an event"""
        errors = []

        title = getattr(draft, "title", None)
        start = getattr(draft, "start", None)
        end = getattr(draft, "end", None)

        if not title or not str(title).strip():
            errors.append("Missing title")
        if not isinstance(start, datetime):
            errors.append("Missing start time")
        if not isinstance(end, datetime):
            errors.append("Missing end time")

        if errors:
            logger.info(f"❌ Draft rejected: {', '.join(errors)}")
        return errors

    @staticmethod
    def find_conflicts(events: Sequence[CalendarEvent], start: datetime,
                       end: datetime) -> List[CalendarEvent]:
        """Events overlapping [start, end), ordered by start"""
        conflicts = [event for event in events if event.overlaps_with(start, end)]
        return sorted(conflicts, key=lambda e: e.start)
