"""
Test cases for engine enums: severity parsing and weights, criticality parsing and risk levels derived from impact scores.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from engine.enums import Criticality, Direction, RiskLevel, Severity


def test_severity_parse_and_weight():
    assert Severity.parse("critical") == Severity.critical
    assert Severity.parse(" HIGH ") == Severity.high
    assert Severity.parse("bogus") is None
    assert Severity.parse(None) is None
    assert Severity.info.weight() < Severity.low.weight() < Severity.medium.weight() < Severity.high.weight() < Severity.critical.weight()
    assert Severity.critical.rank() == 0
    assert Severity.info.rank() == 4


def test_criticality_parse():
    assert Criticality.parse("medium") == Criticality.medium
    assert Criticality.parse("") is None
    assert Criticality.parse(Criticality.low) == Criticality.low


def test_risk_level_thresholds():
    assert RiskLevel.from_score(1.0) == RiskLevel.critical
    assert RiskLevel.from_score(0.8) == RiskLevel.critical
    assert RiskLevel.from_score(0.6) == RiskLevel.high
    assert RiskLevel.from_score(0.4) == RiskLevel.medium
    assert RiskLevel.from_score(0.39) == RiskLevel.low


def test_direction_values():
    assert {d.value for d in Direction} == {"downstream", "upstream", "both"}
