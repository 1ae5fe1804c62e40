"""
Logging utilities for the Smart Calendar Assistant
"""
import json
import logging
import sys
from typing import Any, Dict, Optional

from config.settings import Config

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

# Keys copied from a single event body into the request log
EVENT_SUMMARY_KEYS = ("id", "title", "start", "end", "priority", "type", "error")

# List valued keys that are logged as counts
COLLECTION_KEYS = ("events", "suggestions", "focus_blocks", "slots", "conflicts")

request_logger = logging.getLogger("smart_calendar.requests")


class SmartCalendarLogger:
    """Logging setup and request logging for the calendar API"""

    @staticmethod
    def resolve_level(log_level: Optional[str]) -> int:
        """Map a level name such as "debug" to its logging constant"""
        name = (log_level or Config.LOG_LEVEL).upper()
        level = logging.getLevelName(name)
        if not isinstance(level, int):
            raise ValueError(f"Unknown log level: {log_level}")
        return level

    @staticmethod
    def setup_logging(log_level: Optional[str] = None, log_file: Optional[str] = None) -> logging.Logger:
        """Route all loggers to stdout, and to ``log_file`` when one is given"""
        formatter = logging.Formatter(LOG_FORMAT)

        handlers = [logging.StreamHandler(sys.stdout)]
        if log_file:
            handlers.append(logging.FileHandler(log_file))

        root_logger = logging.getLogger()
        root_logger.setLevel(SmartCalendarLogger.resolve_level(log_level))
        root_logger.handlers.clear()
        for handler in handlers:
            handler.setFormatter(formatter)
            root_logger.addHandler(handler)

        # Flask's request log duplicates log_request_response
        logging.getLogger('werkzeug').setLevel(logging.WARNING)

        return root_logger

    @staticmethod
    def summarize_response(response_data: Any) -> Dict[str, Any]:
        """Pick the identifying fields and collection sizes out of a JSON body"""
        if not isinstance(response_data, dict):
            return {}

        summary = {key: response_data[key] for key in EVENT_SUMMARY_KEYS if key in response_data}
        for key in COLLECTION_KEYS:
            if isinstance(response_data.get(key), list):
                summary[f"{key}_count"] = len(response_data[key])
        return summary

    @staticmethod
    def log_request_response(method: str, path: str, status_code: int,
                             response_data: Any, processing_time: float):
        """Log one API call; client and server errors go out as warnings"""
        log_entry = {
            "request": f"{method} {path}",
            "status_code": status_code,
            "processing_time_ms": round(processing_time * 1000, 2),
            "response_summary": SmartCalendarLogger.summarize_response(response_data),
        }

        level = logging.WARNING if status_code >= 400 else logging.INFO
        request_logger.log(level, f"📨 {json.dumps(log_entry)}")
