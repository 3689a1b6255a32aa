import json
import os
from collections import Counter
from datetime import datetime, timedelta

INCIDENT_LEVELS = ("CRITICAL", "ERROR")


class SecurityReport:
    def __init__(self, days, events):
        self.days = days
        self.events = events

    @property
    def total_events(self):
        return len(self.events)

    def events_by_level(self):
        return dict(Counter(event.get("level") for event in self.events))

    def top_ips(self, limit=10):
        counts = Counter(event.get("client_ip") for event in self.events if event.get("client_ip"))
        return dict(counts.most_common(limit))

    def top_endpoints(self, limit=10):
        counts = Counter(
            event["context"]["endpoint"]
            for event in self.events
            if isinstance(event.get("context"), dict) and event["context"].get("endpoint")
        )
        return dict(counts.most_common(limit))

    def incidents(self):
        return [
            {
                "timestamp": event.get("timestamp"),
                "event": event.get("event"),
                "client_ip": event.get("client_ip"),
                "level": event.get("level"),
            }
            for event in self.events
            if event.get("level") in INCIDENT_LEVELS
        ]

    def to_dict(self):
        return {
            "days": self.days,
            "total_events": self.total_events,
            "events_by_level": self.events_by_level(),
            "top_ips": self.top_ips(),
            "top_endpoints": self.top_endpoints(),
            "security_incidents": self.incidents(),
        }

    def to_json(self):
        return json.dumps(self.to_dict(), indent=2)


def _parse_timestamp(value):
    if not value:
        return None
    for fmt in ("%Y-%m-%d %H:%M:%S,%f", "%Y-%m-%d %H:%M:%S"):
        try:
            return datetime.strptime(value, fmt)
        except ValueError:
            continue
    return None


def read_security_events(log_file, since=None):
    """Yield decoded entries of the JSON-lines security log newer than since."""
    if not log_file or not os.path.exists(log_file):
        return

    with open(log_file, encoding="utf-8") as fh:
        for line in fh:
            line = line.strip()
            if not line:
                continue
            try:
                event = json.loads(line)
            except json.JSONDecodeError:
                continue
            if since is not None:
                timestamp = _parse_timestamp(event.get("timestamp"))
                if timestamp is None or timestamp < since:
                    continue
            yield event


def generate_security_report(log_file, days=7, now=None):
    since = (now or datetime.now()) - timedelta(days=days)
    return SecurityReport(days, list(read_security_events(log_file, since)))
