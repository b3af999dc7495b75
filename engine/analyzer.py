"""
Operation facade over the engine: applies defaults and clamps caller supplied parameters, restricts events to the analysis window and assembles the result documents returned by the service layer.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Iterable, Optional, Tuple

from config import settings
from engine.cascade.simulator import RandomSource, pick_cascade_root, simulate_cascade
from engine.correlation import CorrelationWeights, correlate, summarize
from engine.enums import CorrelationMode, Direction
from engine.events.registry import Event, event_stats
from engine.impact.blast_radius import analyze_blast_radius, summarize_blast_radius
from engine.impact.business import RevenueTable, assess_impact, summarize_impact
from engine.patterns.recurring import detect_patterns
from engine.rca.root_cause import rank_root_causes
from engine.topology.graph import GraphSnapshot

log = logging.getLogger(__name__)


def _clamp(name: str, value: float, low: float, high: float) -> float:
    clamped = max(low, min(high, value))
    if clamped != value:
        log.debug("Clamped %s from %s to %s", name, value, clamped)
    return clamped


def clamp_hops(value: Optional[int], default: int | None = None) -> int:
    if value is None:
        return default if default is not None else settings.correlation_default_max_hops
    return int(_clamp("max_hops", int(value), settings.max_hops_floor, settings.max_hops_ceiling))


def clamp_confidence(value: Optional[float]) -> float:
    if value is None:
        return settings.correlation_default_min_confidence
    return _clamp("min_confidence", float(value), 0.0, 1.0)


def window_or_default(value: Optional[float]) -> float:
    if value is None or value <= 0:
        if value is not None:
            log.debug("Non-positive time window %s replaced by default", value)
        return settings.correlation_default_window_seconds
    return float(value)


def clamp_levels(value: Optional[int]) -> int:
    if value is None:
        value = settings.cascade_default_depth
    return int(_clamp("cascade_depth", int(value), 1, settings.cascade_max_levels))


def clamp_delay(value: Optional[float]) -> float:
    if value is None:
        return settings.cascade_default_delay_minutes
    return _clamp("time_delay_minutes", float(value), settings.cascade_min_delay_minutes, float("inf"))


def in_window(events: Iterable[Event], window_seconds: float, as_of: datetime | None = None) -> Tuple[Event, ...]:
    end = as_of or datetime.now(timezone.utc)
    if end.tzinfo is None:
        end = end.replace(tzinfo=timezone.utc)
    start = end - timedelta(seconds=window_seconds)
    return tuple(e for e in events if start <= e.timestamp <= end)


def analyze_correlations(
    graph: GraphSnapshot,
    events: Iterable[Event],
    time_window: Optional[float] = None,
    max_hops: Optional[int] = None,
    min_confidence: Optional[float] = None,
    mode: CorrelationMode = CorrelationMode.advanced,
    as_of: datetime | None = None,
    limit: int | None = None,
) -> Dict[str, Any]:
    window = window_or_default(time_window)
    hops = clamp_hops(max_hops)
    confidence = clamp_confidence(min_confidence)
    weights = CorrelationWeights.simplified() if mode == CorrelationMode.simplified else CorrelationWeights.advanced()
    limit = settings.correlation_result_limit if limit is None else max(1, int(limit))

    scoped = in_window(events, window, as_of)
    results = correlate(graph, scoped, window, hops, confidence, weights)

    return {
        "correlations": [r.to_dict() for r in results[:limit]],
        "summary": summarize(results),
        "parameters": {
            "time_window": window,
            "max_hops": weights.fixed_hops or hops,
            "min_confidence": confidence,
            "mode": mode.value,
            "events_considered": len(scoped),
        },
    }


def assess_business_impact(
    graph: GraphSnapshot,
    events: Iterable[Event],
    revenue_table: RevenueTable | None = None,
    time_window: Optional[float] = None,
    as_of: datetime | None = None,
) -> Dict[str, Any]:
    window = window_or_default(time_window)
    scoped = in_window(events, window, as_of)
    results = assess_impact(graph, scoped, revenue_table)
    return {
        "impacts": [r.to_dict() for r in results],
        "summary": summarize_impact(results, scoped),
        "parameters": {"time_window": window},
    }


def find_patterns(graph: GraphSnapshot, events: Iterable[Event]) -> Dict[str, Any]:
    patterns = detect_patterns(events, graph)
    return {
        "patterns": [p.to_dict() for p in patterns],
        "observation_window_days": settings.pattern_observation_window_days,
    }


def run_cascade(
    graph: GraphSnapshot,
    root_component_id: Optional[str] = None,
    cascade_depth: Optional[int] = None,
    time_delay_minutes: Optional[float] = None,
    rng: Optional[RandomSource] = None,
    start: datetime | None = None,
):
    root_id = root_component_id or pick_cascade_root(graph).id
    return simulate_cascade(
        graph,
        root_id,
        time_delay_minutes=clamp_delay(time_delay_minutes),
        rng=rng,
        start=start,
        levels=clamp_levels(cascade_depth),
    )


def root_cause(
    graph: GraphSnapshot,
    events: Iterable[Event],
    event_id: str,
    depth: Optional[int] = None,
) -> Dict[str, Any]:
    hops = clamp_hops(depth, settings.rca_default_depth)
    candidates = rank_root_causes(graph, events, event_id, hops)
    return {
        "event_id": event_id,
        "candidates": [c.to_dict() for c in candidates],
        "depth": hops,
    }


def impact_analysis(
    graph: GraphSnapshot,
    component_id: str,
    max_depth: Optional[int] = None,
    direction: Direction = Direction.downstream,
) -> Dict[str, Any]:
    if max_depth is None:
        depth = settings.blast_radius_default_depth
    else:
        depth = int(_clamp("max_depth", int(max_depth), 1, settings.blast_radius_max_depth))
    impacted = analyze_blast_radius(graph, component_id, depth, direction)
    return {
        "impacted": [c.to_dict() for c in impacted],
        "summary": summarize_blast_radius(component_id, impacted),
        "parameters": {"max_depth": depth, "direction": direction.value},
    }


def statistics(events: Iterable[Event]) -> Dict[str, int]:
    return event_stats(events)
