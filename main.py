#!/usr/bin/env python3
"""
Main entry point for the Smart Calendar Assistant

Runs the API server or the suggestion engine directly from the command line.
"""

import json
import logging
import sys
from datetime import datetime

from config.settings import Config, SuggestionSettings
from src.ai_agent.event_parser import parse_natural_language
from src.api.flask_server import build_api
from src.calendar.calendar_manager import CalendarEvent
from src.scheduler.smart_scheduler import generate_suggestions, suggest_meeting_time
from src.scheduler.time_slots import generate_time_slots
from utils.logger import SmartCalendarLogger

logger = logging.getLogger(__name__)


def load_events(path):
    """Load events from a JSON file holding a list (or {"events": [...]})"""
    if not path:
        return []
    with open(path, 'r') as f:
        data = json.load(f)
    if isinstance(data, dict):
        data = data.get("events", [])
    return [CalendarEvent.from_dict(item) for item in data]


def load_settings(path):
    if not path:
        return SuggestionSettings()
    with open(path, 'r') as f:
        return SuggestionSettings.from_dict(json.load(f))


def run_server(host=None, port=None, seed_mock=False, seed=None):
    """Run the Flask API server"""
    logger.info("Starting Smart Calendar Assistant...")

    try:
        api = build_api(seed_mock_events=seed_mock, seed=seed)
        api.run(host=host, port=port)
    except KeyboardInterrupt:
        logger.info("Server shutdown requested")


def main(argv=None):
    """Main CLI entry point"""
    import argparse

    parser = argparse.ArgumentParser(description='Smart Calendar Assistant')
    parser.add_argument('--log-level', default=Config.LOG_LEVEL, help='Logging level')
    parser.add_argument('--log-file', help='Also write logs to this file')
    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    # Server command
    server_parser = subparsers.add_parser('server', help='Run API server')
    server_parser.add_argument('--host', default=Config.API_HOST, help='Host to bind to')
    server_parser.add_argument('--port', type=int, default=Config.API_PORT, help='Port to bind to')
    server_parser.add_argument('--seed-mock', action='store_true', help='Start with mock events')
    server_parser.add_argument('--seed', type=int, help='Random seed for mock events')

    # Parse command
    parse_parser = subparsers.add_parser('parse', help='Parse free text into an event draft')
    parse_parser.add_argument('text', help='Text such as "Call with Bob tomorrow at 3pm"')
    parse_parser.add_argument('--settings', help='Settings JSON file')

    # Suggest command
    suggest_parser = subparsers.add_parser('suggest', help='Suggest a meeting time and focus block')
    suggest_parser.add_argument('--events', help='Events JSON file')
    suggest_parser.add_argument('--settings', help='Settings JSON file')
    suggest_parser.add_argument('--duration', type=int, help='Meeting duration in minutes')
    suggest_parser.add_argument('--date', help='Start date YYYY-MM-DD (default: now)')

    # Slots command
    slots_parser = subparsers.add_parser('slots', help='List time picker slots')
    slots_parser.add_argument('--start', default=Config.TIME_SLOT_START)
    slots_parser.add_argument('--end', default=Config.TIME_SLOT_END)
    slots_parser.add_argument('--interval', type=int, default=Config.TIME_SLOT_INTERVAL)

    args = parser.parse_args(argv)
    SmartCalendarLogger.setup_logging(log_level=args.log_level, log_file=args.log_file)

    if args.command == 'server':
        run_server(host=args.host, port=args.port, seed_mock=args.seed_mock, seed=args.seed)

    elif args.command == 'parse':
        draft = parse_natural_language(args.text, load_settings(args.settings))
        print(json.dumps(draft.to_dict(), indent=2))

    elif args.command == 'suggest':
        events = load_events(args.events)
        settings = load_settings(args.settings)
        now = datetime.strptime(args.date, Config.DATE_FORMAT) if args.date else datetime.now()

        result = generate_suggestions(events, settings, now).to_dict()
        if args.duration:
            slot = suggest_meeting_time(events, settings, duration=args.duration, start_date=now)
            result["meeting_time"] = slot.to_dict() if slot else None
        print(json.dumps(result, indent=2))

    elif args.command == 'slots':
        print(json.dumps(generate_time_slots(args.start, args.end, args.interval)))

    else:
        parser.print_help()
        return 1

    return 0


if __name__ == '__main__':
    sys.exit(main())
