"""
Root-cause ranking for a single incident event: earlier events raised on the components the affected component depends on are ranked by a probability derived from dependency distance and how long before the target event they occurred.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from typing import Any, Dict, Iterable, List, Tuple

from config import settings
from engine.enums import Direction
from engine.events.registry import Event, EventRegistry
from engine.exceptions import EventNotFound
from engine.topology.graph import GraphSnapshot
from engine.topology.paths import path_to, reachable


@dataclass(frozen=True)
class RootCauseCandidate:
    event_id: str
    component_id: str
    component_name: str
    distance: int
    delay_seconds: float
    probability: float
    relationship_chain: Tuple[str, ...]
    message: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "event_id": self.event_id,
            "component_id": self.component_id,
            "component_name": self.component_name,
            "distance": self.distance,
            "delay_seconds": self.delay_seconds,
            "probability": self.probability,
            "relationship_chain": list(self.relationship_chain),
            "message": self.message,
        }


def cause_probability(distance: int, delay_seconds: float) -> float:
    for max_distance, max_delay, probability in settings.rca_probability_table:
        if distance == max_distance and delay_seconds <= max_delay:
            return probability
    return settings.rca_fallback_probability


def rank_root_causes(
    graph: GraphSnapshot,
    events: Iterable[Event],
    event_id: str,
    depth: int | None = None,
    lookback_seconds: float | None = None,
) -> List[RootCauseCandidate]:
    """Rank likely causes of ``event_id`` among earlier dependency events.

    The walk follows relationships from source to target, so candidates sit
    on the components the affected one depends on, such as its database or
    host. Components that depend on the affected one are its
    blast radius, not its causes, and their events are never ranked.

    Raises ``EventNotFound`` when the event is not in ``events``. An event
    that is not linked to a known component has no candidates.
    """
    if depth is None:
        depth = settings.rca_default_depth
    if lookback_seconds is None:
        lookback_seconds = settings.rca_lookback_seconds

    registry = EventRegistry(events)
    target = registry.get(event_id)
    if target is None:
        raise EventNotFound(event_id)
    if target.ci_id not in graph:
        return []

    reaches = reachable(graph, target.ci_id, depth, Direction.downstream)
    distance = {r.component_id: r.hops for r in reaches}

    candidates: List[RootCauseCandidate] = []
    window_start = target.timestamp - timedelta(seconds=lookback_seconds)
    for event in registry.in_window(window_start, target.timestamp):
        if event.id == target.id or event.ci_id not in distance:
            continue
        delay = target.epoch - event.epoch
        hops = distance[event.ci_id]
        probability = cause_probability(hops, delay)
        if probability < settings.rca_min_probability:
            continue
        ci = graph.require(event.ci_id)
        path = path_to(target.ci_id, reaches, ci.id)
        candidates.append(
            RootCauseCandidate(
                event_id=event.id,
                component_id=ci.id,
                component_name=ci.name,
                distance=hops,
                delay_seconds=round(delay, 3),
                probability=probability,
                relationship_chain=path.relationships if path else (),
                message=event.message,
            )
        )

    candidates.sort(key=lambda c: (-c.probability, c.delay_seconds, c.event_id))
    return candidates[: settings.rca_result_limit]
