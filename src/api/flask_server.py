"""
Flask API server for the Smart Calendar Assistant

The server is the application state container: it owns the in-memory event
list, the current settings record and the current suggestions. Suggestions
are recomputed from scratch after every change to events or settings.
"""
import logging
import signal
import sys
import time
from datetime import datetime
from typing import Callable, Optional

from flask import Flask, g, jsonify, request
from flask_cors import CORS

from config.settings import Config, SuggestionSettings
from src.ai_agent.event_parser import parse_natural_language
from src.ai_agent.priority_predictor import predict_event_priority
from src.calendar.calendar_manager import CalendarEvent, CalendarManager, EventNotFoundError, TimeBlock
from src.calendar.mock_calendar_manager import MockCalendarManager
from src.scheduler.scheduling_validator import SchedulingValidator
from src.scheduler.smart_scheduler import SuggestionSet, generate_suggestions
from src.scheduler.time_slots import generate_time_slots
from utils.calendar_slot_analyzer import CalendarSlotAnalyzer
from utils.logger import SmartCalendarLogger
from utils.validators import DataSanitizer, RequestValidator

logger = logging.getLogger(__name__)


class SmartCalendarAPI:
    """
    Flask API server exposing the calendar and the suggestion engine
    """

    def __init__(self, calendar_manager: Optional[CalendarManager] = None,
                 settings: Optional[SuggestionSettings] = None,
                 clock: Optional[Callable[[], datetime]] = None):
        self.config = Config()
        self.app = Flask(__name__)
        CORS(self.app)  # Enable CORS for the browser front end

        self.calendar = calendar_manager if calendar_manager is not None else CalendarManager()
        self.settings = settings or SuggestionSettings()
        self.clock = clock or datetime.now
        self.validator = SchedulingValidator()
        self.suggestion_set = SuggestionSet()
        self.start_time = time.time()

        self._setup_routes()
        self.regenerate_suggestions()

    # ------------------------------------------------------------------
    # State transitions
    # ------------------------------------------------------------------

    def regenerate_suggestions(self) -> SuggestionSet:
        """Discard current suggestions and derive a new set from current state"""
        self.suggestion_set = SuggestionSet()
        self.suggestion_set = generate_suggestions(
            self.calendar.list_events(), self.settings, self.clock()
        )
        return self.suggestion_set

    def update_settings(self, partial: dict) -> SuggestionSettings:
        self.settings = self.settings.merge(partial)
        logger.info(f"⚙️  Settings updated: {sorted(partial)}")
        self.regenerate_suggestions()
        return self.settings

    def _event_data_from_payload(self, payload: dict) -> dict:
        data = DataSanitizer.sanitize_event(payload)
        data.setdefault("type", "event")
        if not data.get("priority"):
            data["priority"] = predict_event_priority(
                data["title"], data.get("description"), data.get("participants"), self.settings
            )
        return data

    def _event_response(self, event: CalendarEvent, status: int = 200):
        others = [e for e in self.calendar.list_events() if e.id != event.id]
        conflicts = self.validator.find_conflicts(others, event.start, event.end)
        body = event.to_dict()
        body["conflicts"] = [c.id for c in conflicts]
        return jsonify(body), status

    # ------------------------------------------------------------------
    # Routes
    # ------------------------------------------------------------------

    def _setup_routes(self):
        """Setup Flask routes"""

        @self.app.before_request
        def start_timer():
            g.request_started = time.time()

        @self.app.after_request
        def log_request(response):
            started = getattr(g, "request_started", None)
            if started is not None and response.is_json:
                SmartCalendarLogger.log_request_response(
                    request.method, request.path, response.status_code,
                    response.get_json(silent=True), time.time() - started,
                )
            return response

        @self.app.route('/health', methods=['GET'])
        def health_check():
            """Health check endpoint"""
            return jsonify({
                "status": "healthy",
                "version": self.config.VERSION,
                "timestamp": datetime.now().isoformat(),
                "uptime": time.time() - self.start_time,
                "events": len(self.calendar),
                "suggestions": len(self.suggestion_set.suggestions),
                "focus_blocks": len(self.suggestion_set.focus_blocks),
            })

        @self.app.route('/events', methods=['GET'])
        def list_events():
            day = request.args.get('date')
            if day is None:
                events = self.calendar.list_events()
            elif not RequestValidator.validate_date_string(day):
                return jsonify({"error": f"Invalid date: {day}. Expected YYYY-MM-DD"}), 400
            else:
                events = self.calendar.events_for_day(datetime.strptime(day, Config.DATE_FORMAT))
            return jsonify({"events": [e.to_dict() for e in events]})

        @self.app.route('/events', methods=['POST'])
        def create_event():
            payload = request.get_json(silent=True)
            errors = RequestValidator.validate_event_payload(payload)
            if errors:
                return jsonify({"error": "Invalid event", "details": errors}), 400

            event = self.calendar.add_event(self._event_data_from_payload(payload))
            self.regenerate_suggestions()
            return self._event_response(event, 201)

        @self.app.route('/events/<event_id>', methods=['GET'])
        def get_event(event_id):
            return jsonify(self.calendar.get_event(event_id).to_dict())

        @self.app.route('/events/<event_id>', methods=['PUT'])
        def update_event(event_id):
            payload = request.get_json(silent=True)
            errors = RequestValidator.validate_event_payload(payload)
            if errors:
                return jsonify({"error": "Invalid event", "details": errors}), 400

            data = self._event_data_from_payload(payload)
            data["id"] = event_id
            event = self.calendar.update_event(CalendarEvent.from_dict(data))
            self.regenerate_suggestions()
            return self._event_response(event)

        @self.app.route('/events/<event_id>', methods=['DELETE'])
        def delete_event(event_id):
            event = self.calendar.delete_event(event_id)
            self.regenerate_suggestions()
            return jsonify({"deleted": event.id, "title": event.title})

        @self.app.route('/events/from-text', methods=['POST'])
        def create_event_from_text():
            payload = request.get_json(silent=True) or {}
            text = payload.get("text")
            if not isinstance(text, str) or not text.strip():
                return jsonify({"error": "Missing required field: text"}), 400

            draft = parse_natural_language(text.strip(), self.settings, now=self.clock())
            errors = self.validator.validate_draft(draft)
            if errors:
                return jsonify({"error": "Couldn't process input", "details": errors}), 422

            event = self.calendar.add_event(draft.to_dict())
            self.regenerate_suggestions()
            return self._event_response(event, 201)

        @self.app.route('/parse', methods=['POST'])
        def parse_text():
            payload = request.get_json(silent=True) or {}
            text = payload.get("text")
            if not isinstance(text, str):
                return jsonify({"error": "Missing required field: text"}), 400

            draft = parse_natural_language(text, self.settings, now=self.clock())
            body = draft.to_dict()
            body["errors"] = self.validator.validate_draft(draft)
            return jsonify(body)

        @self.app.route('/settings', methods=['GET'])
        def get_settings():
            return jsonify(self.settings.to_dict())

        @self.app.route('/settings', methods=['PATCH'])
        def patch_settings():
            payload = request.get_json(silent=True)
            if payload is None:
                payload = {}
            errors = RequestValidator.validate_settings_update(payload)
            if errors:
                return jsonify({"error": "Invalid settings", "details": errors}), 400

            return jsonify(self.update_settings(payload).to_dict())

        @self.app.route('/suggestions', methods=['GET'])
        def get_suggestions():
            return jsonify(self.suggestion_set.to_dict())

        @self.app.route('/suggestions/regenerate', methods=['POST'])
        def regenerate():
            return jsonify(self.regenerate_suggestions().to_dict())

        @self.app.route('/suggestions/<suggestion_id>/accept', methods=['POST'])
        def accept_suggestion(suggestion_id):
            item = self.suggestion_set.find(suggestion_id)
            if item is None:
                return jsonify({"error": f"Suggestion not found: {suggestion_id}"}), 404

            # Focus blocks keep type "focus"; accepted meetings become plain events
            data = item.to_calendar_event().to_dict() if isinstance(item, TimeBlock) else item.to_dict()
            data.pop("id")
            if data["type"] == "suggestion":
                data["type"] = "event"
            event = self.calendar.add_event(data)
            logger.info(f"✅ Suggestion {suggestion_id} accepted as {event.id}")
            self.regenerate_suggestions()
            return self._event_response(event, 201)

        @self.app.route('/time-slots', methods=['GET'])
        def time_slots():
            start = request.args.get('start', Config.TIME_SLOT_START)
            end = request.args.get('end', Config.TIME_SLOT_END)
            interval = request.args.get('interval', Config.TIME_SLOT_INTERVAL, type=int)

            errors = []
            for name, value in (("start", start), ("end", end)):
                if not RequestValidator.validate_time_string(value):
                    errors.append(f"Invalid {name}: {value}. Expected HH:MM")
            if interval is None or interval <= 0:
                errors.append("'interval' must be a positive integer")
            if errors:
                return jsonify({"error": "Invalid time slot request", "details": errors}), 400

            return jsonify({"slots": generate_time_slots(start, end, interval)})

        @self.app.route('/analytics', methods=['GET'])
        def analytics():
            analyzer = CalendarSlotAnalyzer(self.settings)
            return jsonify(analyzer.analyze(self.calendar.list_events(), now=self.clock()))

        @self.app.errorhandler(EventNotFoundError)
        def event_not_found(error):
            return jsonify({"error": f"Event not found: {error.args[0]}"}), 404

        @self.app.errorhandler(404)
        def not_found(error):
            return jsonify({"error": "Endpoint not found"}), 404

        @self.app.errorhandler(405)
        def method_not_allowed(error):
            return jsonify({"error": "Method not allowed"}), 405

        @self.app.errorhandler(500)
        def internal_error(error):
            return jsonify({"error": "Internal server error"}), 500

    # ------------------------------------------------------------------
    # Server lifecycle
    # ------------------------------------------------------------------

    def _setup_signal_handlers(self):
        """Setup graceful shutdown handlers"""
        def signal_handler(signum, frame):
            logger.info(f"Received signal {signum}, shutting down gracefully...")
            self.shutdown()
            sys.exit(0)

        signal.signal(signal.SIGINT, signal_handler)
        signal.signal(signal.SIGTERM, signal_handler)

    def run(self, host=None, port=None, debug=False):
        """Run the Flask server"""
        host = host or self.config.API_HOST
        port = port or self.config.API_PORT

        self._setup_signal_handlers()
        self.start_time = time.time()

        logger.info(f"Starting Smart Calendar API server on {host}:{port}")
        logger.info(f"Calendar holds {len(self.calendar)} events")

        try:
            self.app.run(
                host=host,
                port=port,
                debug=debug,
                use_reloader=False  # State lives in this process only
            )
        except Exception as e:
            logger.error(f"Failed to start server: {e}")
            raise

    def shutdown(self):
        """Graceful shutdown"""
        logger.info(f"Shutting down Smart Calendar API server, discarding {len(self.calendar)} in-memory events")


def create_app(seed_mock_events: bool = False, seed: Optional[int] = None,
               clock: Optional[Callable[[], datetime]] = None) -> Flask:
    """Factory function to create Flask app"""
    return build_api(seed_mock_events, seed, clock).app


def build_api(seed_mock_events: bool = False, seed: Optional[int] = None,
              clock: Optional[Callable[[], datetime]] = None) -> SmartCalendarAPI:
    calendar = MockCalendarManager(seed=seed) if seed_mock_events else CalendarManager()
    return SmartCalendarAPI(calendar_manager=calendar, clock=clock)
