"""
Component scores for event-pair correlation: linear temporal decay inside the analysis window, per-hop topological distance decay, severity proximity and event-type agreement, blended by a configurable weight profile.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from config import settings
from engine.enums import Severity


def _clamp(value: float) -> float:
    return max(0.0, min(1.0, value))


@dataclass(frozen=True)
class CorrelationWeights:
    time: float
    distance: float
    severity: float
    type: float
    # when set, overrides the caller's max hops
    fixed_hops: Optional[int] = None

    @classmethod
    def advanced(cls) -> CorrelationWeights:
        return cls(
            time=settings.correlation_weight_time,
            distance=settings.correlation_weight_distance,
            severity=settings.correlation_weight_severity,
            type=settings.correlation_weight_type,
        )

    @classmethod
    def simplified(cls) -> CorrelationWeights:
        # direct neighbours only, severity and type ignored
        return cls(
            time=settings.correlation_weight_time,
            distance=settings.correlation_weight_distance,
            severity=0.0,
            type=0.0,
            fixed_hops=1,
        )


def time_score(delta_seconds: float, window_seconds: float) -> float:
    if window_seconds <= 0:
        return 0.0
    return _clamp((window_seconds - abs(delta_seconds)) / window_seconds)


def distance_score(hops: int) -> float:
    return _clamp(1.0 - (hops - 1) * settings.correlation_hop_decay)


def severity_weight(severity: Optional[Severity]) -> float:
    if severity is None:
        return settings.correlation_unknown_severity_weight
    return severity.weight()


def severity_score(a: Optional[Severity], b: Optional[Severity]) -> float:
    return _clamp(1.0 - abs(severity_weight(a) - severity_weight(b)))


def type_score(a: str, b: str) -> float:
    if (a or "").upper() == (b or "").upper():
        return settings.correlation_type_match_score
    return settings.correlation_type_mismatch_score


def blend(weights: CorrelationWeights, time: float, distance: float, severity: float, kind: float) -> float:
    return _clamp(
        weights.time * time
        + weights.distance * distance
        + weights.severity * severity
        + weights.type * kind
    )
