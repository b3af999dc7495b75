"""
Incident event model and an in-memory registry for looking up events by id and time window, plus the raw severity/status statistics that also count events not linked to any known component.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""


from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Mapping, Optional

from config import DEFAULT_EVENT_TYPE
from engine.enums import EventStatus, Severity


def parse_timestamp(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=timezone.utc)
    if isinstance(value, (int, float)):
        return datetime.fromtimestamp(float(value), tz=timezone.utc)
    text = str(value or "").strip()
    if not text:
        return datetime.now(timezone.utc)
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    parsed = datetime.fromisoformat(text)
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)


def _parse_status(value: Any) -> EventStatus:
    text = str(value or "").strip().upper()
    return EventStatus(text) if text in EventStatus._value2member_map_ else EventStatus.open


@dataclass(frozen=True)
class Event:
    id: str
    message: str
    severity: Optional[Severity]
    timestamp: datetime
    event_type: str = DEFAULT_EVENT_TYPE
    status: EventStatus = EventStatus.open
    ci_id: Optional[str] = None
    source: str = "unknown"
    metadata: Dict[str, Any] = field(default_factory=dict, compare=False, hash=False)

    @property
    def epoch(self) -> float:
        return self.timestamp.timestamp()

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> Event:
        ci_id = str(raw.get("ci_id", raw.get("ciId")) or "").strip()
        return cls(
            id=str(raw.get("id") or uuid.uuid4()),
            message=str(raw.get("message") or ""),
            severity=Severity.parse(raw.get("severity")),
            timestamp=parse_timestamp(raw.get("timestamp")),
            event_type=str(raw.get("event_type", raw.get("eventType")) or DEFAULT_EVENT_TYPE),
            status=_parse_status(raw.get("status")),
            ci_id=ci_id or None,
            source=str(raw.get("source") or "unknown"),
            metadata=dict(raw.get("metadata") or {}),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "message": self.message,
            "severity": self.severity.value if self.severity else None,
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type,
            "status": self.status.value,
            "ci_id": self.ci_id,
            "source": self.source,
            "metadata": dict(self.metadata),
        }


class EventRegistry:
    def __init__(self, events: Iterable[Event] = ()) -> None:
        self._events: List[Event] = list(events)

    def get(self, event_id: str) -> Optional[Event]:
        for e in self._events:
            if e.id == event_id:
                return e
        return None

    def in_window(self, start: datetime, end: datetime) -> List[Event]:
        return [e for e in self._events if start <= e.timestamp <= end]


def event_stats(events: Iterable[Event]) -> Dict[str, int]:
    stats: Dict[str, int] = {"total_events": 0}
    for sev in Severity:
        stats[sev.value.lower()] = 0
    for status in EventStatus:
        stats[status.value.lower()] = 0
    for e in events:
        stats["total_events"] += 1
        if e.severity is not None:
            stats[e.severity.value.lower()] += 1
        stats[e.status.value.lower()] += 1
    return stats
