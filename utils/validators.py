"""
Validation utilities for the Smart Calendar Assistant
"""
import re
from datetime import datetime
from typing import Dict, Any, List

from config.settings import Config, SuggestionSettings
from src.calendar.calendar_manager import EVENT_PRIORITIES, EVENT_TYPES

TIME_PATTERN = r'^([01]\d|2[0-3]):[0-5]\d$'


class RequestValidator:
    """Validator for incoming API payloads"""

    @staticmethod
    def validate_time_string(value: Any) -> bool:
        """Validate a zero-padded 24-hour "HH:MM" string"""
        return isinstance(value, str) and bool(re.match(TIME_PATTERN, value))

    @staticmethod
    def validate_datetime_string(value: Any) -> bool:
        """Validate an ISO 8601 timestamp"""
        if not isinstance(value, str):
            return False
        try:
            datetime.fromisoformat(value)
            return True
        except ValueError:
            return False

    @staticmethod
    def validate_date_string(value: Any) -> bool:
        try:
            datetime.strptime(value, Config.DATE_FORMAT)
            return True
        except (TypeError, ValueError):
            return False

    @staticmethod
    def validate_event_payload(event_data: Dict[str, Any]) -> List[str]:
        """Validate an event create/update payload and return list of errors"""
        errors = []

        if not isinstance(event_data, dict):
            return ["Event payload must be a JSON object"]

        # Required fields
        for field in ("title", "start", "end"):
            if field not in event_data:
                errors.append(f"Missing required field: {field}")

        if "title" in event_data:
            title = event_data["title"]
            if not isinstance(title, str) or not DataSanitizer.sanitize_text(title):
                errors.append("'title' must be a non-empty string")

        for field in ("start", "end"):
            if field in event_data and not RequestValidator.validate_datetime_string(event_data[field]):
                errors.append(f"Invalid {field} format: {event_data[field]}. Expected ISO 8601")

        if "priority" in event_data and event_data["priority"] not in EVENT_PRIORITIES:
            errors.append(f"Invalid priority: {event_data['priority']}. Expected one of {list(EVENT_PRIORITIES)}")

        if "type" in event_data and event_data["type"] not in EVENT_TYPES:
            errors.append(f"Invalid type: {event_data['type']}. Expected one of {list(EVENT_TYPES)}")

        if "participants" in event_data and event_data["participants"] is not None:
            participants = event_data["participants"]
            if not isinstance(participants, list) or not all(isinstance(p, str) for p in participants):
                errors.append("'participants' must be a list of names")

        if "is_all_day" in event_data and not isinstance(event_data["is_all_day"], bool):
            errors.append("'is_all_day' must be a boolean")

        return errors

    @staticmethod
    def validate_settings_update(settings_data: Dict[str, Any]) -> List[str]:
        """Validate a partial settings update and return list of errors"""
        errors = []

        if not isinstance(settings_data, dict):
            return ["Settings payload must be a JSON object"]

        known_fields = set(SuggestionSettings().to_dict())
        for field in settings_data:
            if field not in known_fields:
                errors.append(f"Unknown settings field: {field}")

        for field in ("enable_focus_time", "enable_meeting_suggestions", "enable_priority_assignment"):
            if field in settings_data and not isinstance(settings_data[field], bool):
                errors.append(f"'{field}' must be a boolean")

        if "working_hours" in settings_data:
            hours = settings_data["working_hours"]
            if not isinstance(hours, dict):
                errors.append("'working_hours' must be an object with 'start' and 'end'")
            else:
                for key, value in hours.items():
                    if key not in ("start", "end"):
                        errors.append(f"Unknown working_hours field: {key}")
                    elif not RequestValidator.validate_time_string(value):
                        errors.append(f"Invalid working_hours.{key}: {value}. Expected HH:MM")

        if "preferred_meeting_duration" in settings_data:
            duration = settings_data["preferred_meeting_duration"]
            if isinstance(duration, bool) or duration not in Config.MEETING_DURATION_CHOICES:
                errors.append(f"Invalid preferred_meeting_duration: {duration}. "
                              f"Expected one of {list(Config.MEETING_DURATION_CHOICES)}")

        if "focus_time_preference" in settings_data:
            if settings_data["focus_time_preference"] not in Config.FOCUS_TIME_PREFERENCES:
                errors.append(f"Invalid focus_time_preference: {settings_data['focus_time_preference']}. "
                              f"Expected one of {list(Config.FOCUS_TIME_PREFERENCES)}")

        if "custom_focus_times" in settings_data:
            ranges = settings_data["custom_focus_times"]
            if not isinstance(ranges, list):
                errors.append("'custom_focus_times' must be a list")
            else:
                for i, time_range in enumerate(ranges):
                    if not isinstance(time_range, dict):
                        errors.append(f"Custom focus time {i} must be an object")
                        continue
                    for key in ("start", "end"):
                        if not RequestValidator.validate_time_string(time_range.get(key)):
                            errors.append(f"Custom focus time {i} has invalid '{key}'")

        return errors


class DataSanitizer:
    """Sanitize and clean input data"""

    @staticmethod
    def sanitize_text(text: str) -> str:
        """Sanitize text content"""
        # Remove excessive whitespace
        text = re.sub(r'\s+', ' ', text.strip())
        # Strip markup brackets
        text = re.sub(r'[<>]', '', text)
        return text

    @staticmethod
    def sanitize_participants(participants: List[str]) -> List[str]:
        """Trim names and drop empty entries"""
        return [p.strip() for p in participants if p and p.strip()]

    @staticmethod
    def sanitize_event(event_data: Dict[str, Any]) -> Dict[str, Any]:
        """Sanitize an event payload"""
        sanitized = event_data.copy()

        for field in ("title", "description", "location"):
            if isinstance(sanitized.get(field), str):
                sanitized[field] = DataSanitizer.sanitize_text(sanitized[field])

        if sanitized.get("participants"):
            sanitized["participants"] = DataSanitizer.sanitize_participants(sanitized["participants"]) or None

        return sanitized
