"""
Pairwise correlation of incident events across the dependency graph. Every unordered pair of linked events is connected through the path finder; topologically unrelated pairs are skipped, related pairs are scored and ranked.

The pairwise loop is quadratic in the number of events and runs a bounded path search per pair, so callers are expected to pre-filter events to an analysis window before invoking it on large batches.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, Iterable, List, Optional, Set, Tuple

from config import settings
from engine.correlation import scoring
from engine.correlation.scoring import CorrelationWeights
from engine.events.registry import Event
from engine.topology.graph import GraphSnapshot
from engine.topology.paths import find_path

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class CorrelationResult:
    event1_id: str
    event2_id: str
    score: float
    hop_distance: int
    path: Tuple[str, ...]
    relationship_chain: Tuple[str, ...]
    event1_timestamp: datetime
    event2_timestamp: datetime
    time_score: float = 0.0
    distance_score: float = 0.0
    severity_score: float = 0.0
    type_score: float = 0.0

    @property
    def pair_key(self) -> Tuple[str, str]:
        return pair_key(self.event1_id, self.event2_id)

    def to_dict(self) -> Dict[str, object]:
        return {
            "event1_id": self.event1_id,
            "event2_id": self.event2_id,
            "score": self.score,
            "hop_distance": self.hop_distance,
            "path": list(self.path),
            "relationship_chain": list(self.relationship_chain),
            "event1_timestamp": self.event1_timestamp.isoformat(),
            "event2_timestamp": self.event2_timestamp.isoformat(),
            "components": {
                "time": self.time_score,
                "distance": self.distance_score,
                "severity": self.severity_score,
                "type": self.type_score,
            },
        }


def pair_key(a: str, b: str) -> Tuple[str, str]:
    return (a, b) if a <= b else (b, a)


def _ordered(a: Event, b: Event) -> Tuple[Event, Event]:
    return (a, b) if (a.timestamp, a.id) <= (b.timestamp, b.id) else (b, a)


def score_pair(
    graph: GraphSnapshot,
    first: Event,
    second: Event,
    window_seconds: float,
    max_hops: int,
    weights: CorrelationWeights,
) -> Optional[CorrelationResult]:
    first, second = _ordered(first, second)
    hops = weights.fixed_hops if weights.fixed_hops is not None else max_hops
    path = find_path(graph, first.ci_id, second.ci_id, hops, shortest=True)
    if path is None:
        return None

    t = scoring.time_score(second.epoch - first.epoch, window_seconds)
    d = scoring.distance_score(path.hops)
    s = scoring.severity_score(first.severity, second.severity)
    k = scoring.type_score(first.event_type, second.event_type)

    return CorrelationResult(
        event1_id=first.id,
        event2_id=second.id,
        score=round(scoring.blend(weights, t, d, s, k), 4),
        hop_distance=path.hops,
        path=path.nodes,
        relationship_chain=path.relationships,
        event1_timestamp=first.timestamp,
        event2_timestamp=second.timestamp,
        time_score=round(t, 4),
        distance_score=round(d, 4),
        severity_score=round(s, 4),
        type_score=round(k, 4),
    )


def _rank_key(result: CorrelationResult) -> Tuple[float, int, float, Tuple[str, str]]:
    combined = result.event1_timestamp.timestamp() + result.event2_timestamp.timestamp()
    return (-result.score, result.hop_distance, combined, result.pair_key)


def correlate(
    graph: GraphSnapshot,
    events: Iterable[Event],
    window_seconds: float | None = None,
    max_hops: int | None = None,
    min_confidence: float | None = None,
    weights: CorrelationWeights | None = None,
) -> List[CorrelationResult]:
    if window_seconds is None:
        window_seconds = settings.correlation_default_window_seconds
    if max_hops is None:
        max_hops = settings.correlation_default_max_hops
    if min_confidence is None:
        min_confidence = settings.correlation_default_min_confidence
    if weights is None:
        weights = CorrelationWeights.advanced()

    linked = [e for e in events if e.ci_id in graph]
    seen: Set[Tuple[str, str]] = set()
    results: List[CorrelationResult] = []

    for i, a in enumerate(linked):
        for b in linked[i + 1:]:
            if a.id == b.id:
                continue
            key = pair_key(a.id, b.id)
            if key in seen:
                continue
            seen.add(key)
            result = score_pair(graph, a, b, window_seconds, max_hops, weights)
            if result is None or result.score < min_confidence:
                continue
            results.append(result)

    log.debug("Scored %d pair(s) from %d linked event(s), kept %d", len(seen), len(linked), len(results))
    return sorted(results, key=_rank_key)


def summarize(results: Iterable[CorrelationResult]) -> Dict[str, int]:
    summary = {"total": 0, "high_confidence": 0, "medium_confidence": 0, "low_confidence": 0}
    for r in results:
        summary["total"] += 1
        if r.score >= settings.correlation_band_high:
            summary["high_confidence"] += 1
        elif r.score >= settings.correlation_band_medium:
            summary["medium_confidence"] += 1
        else:
            summary["low_confidence"] += 1
    return summary
