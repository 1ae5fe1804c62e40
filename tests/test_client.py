"""
Smoke test client for a running Smart Calendar API server

Walks through one scenario against a live server: create events by payload
and by text, accept a suggestion, change settings and clean up again.

    python tests/test_client.py --url http://localhost:5000
"""
import json
import logging
import time
from typing import Any, Dict, List, Optional

import requests

logger = logging.getLogger(__name__)

EVENT_FIELDS = ("id", "title", "start", "end", "priority", "type")
PRIORITIES = ("low", "medium", "high")


class SmartCalendarTestClient:
    """Drives the Smart Calendar API and records one result per step"""

    def __init__(self, base_url: str = "http://localhost:5000", timeout: float = 10):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = requests.Session()
        self.results: List[Dict[str, Any]] = []
        self.created_ids: List[str] = []

    def call(self, method: str, path: str, payload: Optional[dict] = None):
        """Send one request; returns (status_code, json_body, seconds), status None on failure"""
        started = time.time()
        try:
            response = self.session.request(method, f"{self.base_url}{path}", json=payload, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            logger.error(f"{method} {path} failed: {e}")
            return None, {"error": str(e)}, time.time() - started

        body = response.json() if response.content else None
        return response.status_code, body, time.time() - started

    @staticmethod
    def event_problems(body: Any) -> List[str]:
        """Shape problems in an event body returned by the API"""
        if not isinstance(body, dict):
            return ["Response is not an event object"]

        problems = [f"Missing field: {f}" for f in EVENT_FIELDS if f not in body]
        if body.get("priority") not in PRIORITIES:
            problems.append(f"Invalid priority: {body.get('priority')}")
        if "start" in body and "end" in body and body["end"] <= body["start"]:
            problems.append("End is not after start")
        return problems

    def step(self, name: str, method: str, path: str, payload: Optional[dict] = None,
             expected_status: int = 200, returns_event: bool = False) -> Any:
        status, body, elapsed = self.call(method, path, payload)

        problems = [] if status == expected_status else [f"Expected {expected_status}, got {status}"]
        if not problems and returns_event:
            problems = self.event_problems(body)
            if not problems and method == "POST":
                self.created_ids.append(body["id"])

        self.results.append({
            "step": len(self.results) + 1,
            "name": name,
            "success": not problems,
            "status_code": status,
            "response_time": elapsed,
            "problems": problems,
        })
        log = logger.info if not problems else logger.error
        log(f"{'✅' if not problems else '❌'} {name} ({status}, {elapsed:.3f}s) {'; '.join(problems)}")
        return body

    def run_scenario(self) -> Dict[str, Any]:
        self.step("health", "GET", "/health")

        self.step("create event", "POST", "/events", {
            "title": "Sprint Planning",
            "start": "2030-01-07T10:00:00",
            "end": "2030-01-07T11:00:00",
            "participants": ["Jane Doe", "John Smith", "Ana Lee"],
        }, expected_status=201, returns_event=True)

        self.step("reject event without times", "POST", "/events", {"title": "Broken"}, expected_status=400)

        self.step("create event from text", "POST", "/events/from-text",
                  {"text": "Urgent call with Bob tomorrow at 3pm"}, expected_status=201, returns_event=True)

        suggestions = self.step("suggestions", "GET", "/suggestions") or {}
        offered = (suggestions.get("suggestions") or []) + (suggestions.get("focus_blocks") or [])
        if offered:
            self.step("accept suggestion", "POST", f"/suggestions/{offered[0]['id']}/accept",
                      expected_status=201, returns_event=True)

        self.step("update settings", "PATCH", "/settings",
                  {"preferred_meeting_duration": 45, "focus_time_preference": "afternoon"})
        self.step("reject bad settings", "PATCH", "/settings",
                  {"preferred_meeting_duration": 50}, expected_status=400)
        self.step("time slots", "GET", "/time-slots?start=09:00&end=12:00&interval=60")
        self.step("analytics", "GET", "/analytics")

        for event_id in list(self.created_ids):
            self.step(f"delete {event_id}", "DELETE", f"/events/{event_id}")
        self.step("deleted event is gone", "GET", f"/events/{self.created_ids[0]}" if self.created_ids
                  else "/events/missing", expected_status=404)

        passed = sum(1 for r in self.results if r["success"])
        return {
            "base_url": self.base_url,
            "steps": self.results,
            "summary": {
                "total": len(self.results),
                "passed": passed,
                "failed": len(self.results) - passed,
                "avg_response_time": sum(r["response_time"] for r in self.results) / len(self.results),
            },
        }


def main():
    import argparse

    parser = argparse.ArgumentParser(description='Smart Calendar smoke test client')
    parser.add_argument('--url', default='http://localhost:5000', help='API base URL')
    parser.add_argument('--output', help='Write the step results to this JSON file')
    parser.add_argument('--verbose', action='store_true', help='Verbose logging')
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format='%(asctime)s - %(levelname)s - %(message)s')

    report = SmartCalendarTestClient(args.url).run_scenario()
    summary = report["summary"]
    print(f"\n{summary['passed']}/{summary['total']} steps passed, "
          f"average response time {summary['avg_response_time']:.3f}s")

    if args.output:
        with open(args.output, 'w') as f:
            json.dump(report, f, indent=2)
        print(f"Results saved to: {args.output}")

    return 0 if summary['failed'] == 0 else 1


if __name__ == '__main__':
    raise SystemExit(main())
