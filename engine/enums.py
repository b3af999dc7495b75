"""
Enumerations for Severity, Event Status, Criticality, Risk Levels, Traversal Direction and Recommendations

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from config import SEVERITY_WEIGHTS, settings


class Severity(str, Enum):
    critical = "CRITICAL"
    high = "HIGH"
    medium = "MEDIUM"
    low = "LOW"
    info = "INFO"

    @classmethod
    def parse(cls, value: object) -> Optional[Severity]:
        if isinstance(value, cls):
            return value
        text = str(value or "").strip().upper()
        if text in cls._value2member_map_:
            return cls(text)
        return None

    def weight(self) -> float:
        return SEVERITY_WEIGHTS[self.value]

    def rank(self) -> int:
        # CRITICAL sorts first
        return list(Severity).index(self)


class EventStatus(str, Enum):
    open = "OPEN"
    acknowledged = "ACKNOWLEDGED"
    resolved = "RESOLVED"


class Criticality(str, Enum):
    critical = "CRITICAL"
    high = "HIGH"
    medium = "MEDIUM"
    low = "LOW"

    @classmethod
    def parse(cls, value: object) -> Optional[Criticality]:
        if isinstance(value, cls):
            return value
        text = str(value or "").strip().upper()
        return cls(text) if text in cls._value2member_map_ else None


class RiskLevel(str, Enum):
    critical = "CRITICAL"
    high = "HIGH"
    medium = "MEDIUM"
    low = "LOW"

    @classmethod
    def from_score(cls, score: float) -> RiskLevel:
        if score >= settings.risk_threshold_critical:
            return cls.critical
        if score >= settings.risk_threshold_high:
            return cls.high
        if score >= settings.risk_threshold_medium:
            return cls.medium
        return cls.low


class Direction(str, Enum):
    downstream = "downstream"
    upstream = "upstream"
    both = "both"


class PatternRecommendation(str, Enum):
    investigate = "INVESTIGATE_SYSTEMATIC_ISSUE"
    monitor = "MONITOR_CLOSELY"


class ImpactAction(str, Enum):
    escalate = "ESCALATE_IMMEDIATELY"
    prioritize = "PRIORITIZE_REMEDIATION"
    investigate = "SCHEDULE_INVESTIGATION"
    monitor = "MONITOR"


class CorrelationMode(str, Enum):
    advanced = "advanced"
    simplified = "simplified"
