"""
Recurring incident pattern detection: events are grouped by the component they were raised on, and components with repeated incidents are flagged for monitoring or, past a higher threshold, for a systematic investigation.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional, Tuple

from config import settings
from engine.enums import PatternRecommendation, Severity
from engine.events.registry import Event
from engine.topology.graph import GraphSnapshot


@dataclass(frozen=True)
class Pattern:
    component_id: str
    event_count: int
    distinct_severities: Tuple[Severity, ...]
    recommendation: PatternRecommendation
    component_name: Optional[str] = None
    component_type: Optional[str] = None
    event_types: Tuple[str, ...] = ()
    first_seen: Optional[datetime] = None
    last_seen: Optional[datetime] = None
    frequency: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "component_id": self.component_id,
            "component_name": self.component_name,
            "component_type": self.component_type,
            "event_count": self.event_count,
            "distinct_severities": [s.value for s in self.distinct_severities],
            "event_types": list(self.event_types),
            "first_seen": self.first_seen.isoformat() if self.first_seen else None,
            "last_seen": self.last_seen.isoformat() if self.last_seen else None,
            "frequency": self.frequency,
            "recommendation": self.recommendation.value,
        }


def _recommendation(count: int) -> PatternRecommendation:
    if count >= settings.pattern_systematic_events:
        return PatternRecommendation.investigate
    return PatternRecommendation.monitor


def detect_patterns(
    events: Iterable[Event],
    graph: GraphSnapshot | None = None,
    observation_window_days: float | None = None,
) -> List[Pattern]:
    """Group events per component and report components with repeats.

    Events whose ``ci_id`` does not resolve in ``graph`` are still counted;
    only events without any component id are skipped. ``frequency`` is the
    event count spread over a fixed observation window rather than the
    actual span of the events.
    """
    if observation_window_days is None or observation_window_days <= 0:
        observation_window_days = settings.pattern_observation_window_days

    grouped: Dict[str, List[Event]] = defaultdict(list)
    for event in events:
        if event.ci_id:
            grouped[event.ci_id].append(event)

    patterns: List[Pattern] = []
    for ci_id, ci_events in grouped.items():
        count = len(ci_events)
        if count < settings.pattern_min_events:
            continue
        ci = graph.component(ci_id) if graph is not None else None
        severities = sorted({e.severity for e in ci_events if e.severity is not None}, key=lambda s: s.rank())
        patterns.append(
            Pattern(
                component_id=ci_id,
                event_count=count,
                distinct_severities=tuple(severities),
                recommendation=_recommendation(count),
                component_name=ci.name if ci else None,
                component_type=ci.type if ci else None,
                event_types=tuple(sorted({e.event_type for e in ci_events})),
                first_seen=min(e.timestamp for e in ci_events),
                last_seen=max(e.timestamp for e in ci_events),
                frequency=round(count / observation_window_days, 4),
            )
        )

    return sorted(patterns, key=lambda p: (-p.event_count, p.component_id))
