"""
Cascade failure simulation: a CRITICAL root event on one component followed by staggered, jittered impact events on the components that depend on it, up to two dependency levels away.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Dict, List, Optional, Protocol, Tuple

import numpy as np

from config import DATABASE_TYPES, SERVER_TYPES, settings
from engine.enums import Criticality, Direction, EventStatus, Severity
from engine.events.registry import Event
from engine.exceptions import ComponentNotFound
from engine.topology.graph import ConfigurationItem, GraphSnapshot
from engine.topology.paths import Reach, path_to, reachable

log = logging.getLogger(__name__)

ROOT_EVENT_TYPE = "CASCADE_ROOT"
IMPACT_EVENT_TYPE = "CASCADE_IMPACT"


class RandomSource(Protocol):
    def uniform(self, low: float, high: float) -> float: ...


@dataclass(frozen=True)
class CascadeSimulation:
    cascade_id: str
    root_component: str
    events: Tuple[Event, ...]
    time_delay_minutes: float
    levels: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "cascade_id": self.cascade_id,
            "root_component": self.root_component,
            "events_created": len(self.events),
            "time_delay_minutes": self.time_delay_minutes,
            "levels": self.levels,
            "events": [e.to_dict() for e in self.events],
        }


def pick_cascade_root(graph: GraphSnapshot) -> ConfigurationItem:
    """Choose a default root: a database if any exists, otherwise a server.

    Among candidates the one with the most direct dependents wins, ties
    broken by id.
    """
    for types in (DATABASE_TYPES, SERVER_TYPES):
        candidates = graph.of_type(*types)
        if candidates:
            return min(candidates, key=lambda ci: (-len(graph.incoming(ci.id)), ci.id))
    raise ComponentNotFound("no database or server component to cascade from")


def _random_id() -> str:
    return str(uuid.uuid4())


def _criticality_rank(ci: ConfigurationItem) -> int:
    if ci.criticality is None:
        return len(Criticality)
    return list(Criticality).index(ci.criticality)


def cascade_severity(ci: ConfigurationItem, distance: int) -> Severity:
    if ci.is_business_service or ci.criticality == Criticality.critical:
        return Severity.high
    return Severity.high if distance == 1 else Severity.medium


def simulate_cascade(
    graph: GraphSnapshot,
    root_id: str,
    max_affected: int | None = None,
    time_delay_minutes: float | None = None,
    rng: Optional[RandomSource] = None,
    start: datetime | None = None,
    levels: int | None = None,
    id_factory: Optional[Callable[[], str]] = None,
) -> CascadeSimulation:
    """Generate the root event and the staggered impact events of one cascade.

    ``rng`` drives the jitter and ``id_factory`` names the cascade and each
    event; fixing both along with ``start`` makes the output reproducible.
    """
    root = graph.require(root_id)
    if max_affected is None:
        max_affected = settings.cascade_max_affected
    if time_delay_minutes is None:
        time_delay_minutes = settings.cascade_default_delay_minutes
    if levels is None:
        levels = settings.cascade_max_levels
    levels = max(1, min(settings.cascade_max_levels, int(levels)))
    if rng is None:
        rng = np.random.default_rng()
    if start is None:
        start = datetime.now(timezone.utc)
    if id_factory is None:
        id_factory = _random_id

    cascade_id = id_factory()
    delay = float(time_delay_minutes) * 60.0
    stagger = delay / settings.cascade_stagger_divisor
    jitter = delay / settings.cascade_jitter_divisor

    root_event = Event(
        id=id_factory(),
        message=f"Cascade failure initiated from {root.name}",
        severity=Severity.critical,
        timestamp=start,
        event_type=ROOT_EVENT_TYPE,
        status=EventStatus.open,
        ci_id=root.id,
        source="cascade.simulation",
        metadata={"cascade_id": cascade_id, "cascade_root": True, "cascade_distance": 0},
    )

    # dependents are the sources of edges pointing at the failed component
    reaches = reachable(graph, root.id, levels, Direction.upstream)
    ordered: List[Tuple[Reach, ConfigurationItem]] = []
    for reach in reaches:
        ci = graph.component(reach.component_id)
        if ci is not None:
            ordered.append((reach, ci))
    ordered.sort(key=lambda pair: (pair[0].hops, _criticality_rank(pair[1]), pair[1].id))
    ordered = ordered[: max(0, int(max_affected))]

    events: List[Event] = [root_event]
    for reach, ci in ordered:
        offset = reach.hops * stagger + float(rng.uniform(-jitter, jitter))
        path = path_to(root.id, reaches, ci.id)
        events.append(
            Event(
                id=id_factory(),
                message=f"Cascade impact: {ci.type} {ci.name} affected by upstream failure",
                severity=cascade_severity(ci, reach.hops),
                timestamp=start + timedelta(seconds=max(0.0, offset)),
                event_type=IMPACT_EVENT_TYPE,
                status=EventStatus.open,
                ci_id=ci.id,
                source="cascade.propagation",
                metadata={
                    "cascade_id": cascade_id,
                    "cascade_distance": reach.hops,
                    "relationship_chain": list(path.relationships) if path else [reach.relationship_kind],
                    "root_cause": root.id,
                },
            )
        )

    events.sort(key=lambda e: (e.timestamp, e.metadata.get("cascade_distance", 0), e.ci_id or ""))
    log.debug("Simulated cascade %s from %s with %d event(s)", cascade_id, root.id, len(events))

    return CascadeSimulation(
        cascade_id=cascade_id,
        root_component=root.id,
        events=tuple(events),
        time_delay_minutes=float(time_delay_minutes),
        levels=levels,
    )
