"""
Tests for multi-hop impact analysis of a single component.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

import pytest

from engine.enums import Direction, RiskLevel
from engine.exceptions import ComponentNotFound
from engine.impact import analyze_blast_radius, summarize_blast_radius


def test_downstream_blast_radius(sample_graph):
    impacted = analyze_blast_radius(sample_graph, "bs-checkout")
    assert [c.component_id for c in impacted] == ["app-web", "app-pay", "db-orders", "srv-01"]
    web, pay, db, srv = impacted
    assert web.impact_score == pytest.approx(0.8)
    assert web.risk_level == RiskLevel.critical
    assert pay.impact_score == pytest.approx(0.4)
    assert pay.risk_level == RiskLevel.medium
    assert db.impact_score == pytest.approx(0.3333)
    assert srv.hops == 4
    assert srv.path == ("bs-checkout", "app-web", "app-pay", "db-orders", "srv-01")
    assert srv.relationship_chain == ("DEPENDS_ON", "DEPENDS_ON", "DEPENDS_ON", "RUNS_ON")

    summary = summarize_blast_radius("bs-checkout", impacted)
    assert summary == {
        "component_id": "bs-checkout",
        "total_impacted": 4,
        "critical_impacts": 1,
        "high_impacts": 0,
        "max_hops": 4,
    }


def test_upstream_and_depth_bound(sample_graph):
    impacted = analyze_blast_radius(sample_graph, "srv-01", max_depth=2, direction=Direction.upstream)
    assert [c.component_id for c in impacted] == ["db-orders", "app-pay"]
    assert impacted[0].impact_score == 1.0


def test_isolated_and_unknown_components(sample_graph):
    assert analyze_blast_radius(sample_graph, "srv-lonely") == []
    with pytest.raises(ComponentNotFound):
        analyze_blast_radius(sample_graph, "missing")
