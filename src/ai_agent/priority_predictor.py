"""
Keyword based priority prediction for calendar events
"""
import logging
from typing import Optional, Sequence, Tuple

from config.settings import SuggestionSettings

logger = logging.getLogger(__name__)

# Checked in order; the first table with a matching keyword decides.
KEYWORD_RULES: Tuple[Tuple[Tuple[str, ...], str], ...] = (
    (("urgent", "important", "asap", "critical", "deadline"), "high"),
    (("optional", "fyi", "casual", "coffee"), "low"),
)

# (more than N participants, priority), largest threshold first
PARTICIPANT_RULES: Tuple[Tuple[int, str], ...] = (
    (5, "high"),
    (2, "medium"),
)

DEFAULT_PRIORITY = "medium"


def predict_event_priority(title: str,
                           description: Optional[str] = None,
                           participants: Optional[Sequence[str]] = None,
                           settings: Optional[SuggestionSettings] = None) -> str:
    """
    Classify an event as "low", "medium" or "high".

    High keywords beat low keywords, and any keyword beats the participant
    count. Always "medium" when priority assignment is turned off.
    """
    settings = settings or SuggestionSettings()
    if not settings.enable_priority_assignment:
        return DEFAULT_PRIORITY

    combined_text = f"{title} {description or ''}".lower()

    for keywords, priority in KEYWORD_RULES:
        matched = next((k for k in keywords if k in combined_text), None)
        if matched:
            logger.debug(f"Priority {priority} from keyword '{matched}'")
            return priority

    if participants:
        for threshold, priority in PARTICIPANT_RULES:
            if len(participants) > threshold:
                return priority

    return DEFAULT_PRIORITY
