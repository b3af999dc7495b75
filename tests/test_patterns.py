"""
Tests for recurring incident pattern detection.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from datetime import datetime, timedelta, timezone

import pytest

from engine.enums import PatternRecommendation, Severity
from engine.events.registry import Event
from engine.patterns import detect_patterns

T0 = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


def _event(event_id, ci_id, severity="HIGH", offset=0, event_type="ALERT"):
    return Event(
        id=event_id,
        message=event_id,
        severity=Severity.parse(severity),
        timestamp=T0 + timedelta(minutes=offset),
        event_type=event_type,
        ci_id=ci_id,
    )


def test_single_repeating_component():
    patterns = detect_patterns([_event("e1", "ci-A"), _event("e2", "ci-A", offset=5), _event("e3", "ci-B")])
    assert len(patterns) == 1
    p = patterns[0]
    assert p.component_id == "ci-A"
    assert p.event_count == 2
    assert p.recommendation == PatternRecommendation.monitor
    assert p.frequency == pytest.approx(2 / 7, abs=1e-4)
    assert p.first_seen == T0
    assert p.last_seen == T0 + timedelta(minutes=5)


def test_systematic_threshold_and_ordering(sample_graph):
    events = [
        _event("a1", "app-pay", "LOW"),
        _event("a2", "app-pay", "CRITICAL", 1, "METRIC"),
        _event("a3", "app-pay", "LOW", 2),
        _event("g1", "ghost", "MEDIUM"),
        _event("g2", "ghost", None, 3),
        _event("n1", None),
        _event("n2", None),
    ]
    patterns = detect_patterns(events, sample_graph)
    assert [p.component_id for p in patterns] == ["app-pay", "ghost"]

    pay, ghost = patterns
    assert pay.recommendation == PatternRecommendation.investigate
    assert pay.distinct_severities == (Severity.critical, Severity.low)
    assert pay.event_types == ("ALERT", "METRIC")
    assert pay.component_name == "payment-service"
    assert pay.component_type == "Application"

    assert ghost.component_name is None
    assert ghost.distinct_severities == (Severity.medium,)
    assert ghost.recommendation == PatternRecommendation.monitor


def test_no_patterns_for_unique_components():
    assert detect_patterns([_event("e1", "x"), _event("e2", "y")]) == []
    assert detect_patterns([]) == []


def test_pattern_to_dict():
    [p] = detect_patterns([_event("e1", "ci-A"), _event("e2", "ci-A")])
    doc = p.to_dict()
    assert doc["recommendation"] == "MONITOR_CLOSELY"
    assert doc["distinct_severities"] == ["HIGH"]
    assert doc["first_seen"].startswith("2026-03-01T12:00:00")
