"""
Tests for the graph snapshot and bounded path discovery.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

import pytest

from engine.enums import Criticality, Direction
from engine.exceptions import ComponentNotFound
from engine.topology import GraphSnapshot, find_path, path_to, reachable
from engine.topology.graph import ConfigurationItem, Relationship


def _ring(n):
    components = [{"id": f"n{i}", "type": "Server"} for i in range(n)]
    relationships = [{"from": f"n{i}", "to": f"n{(i + 1) % n}", "type": "CONNECTS_TO"} for i in range(n)]
    return GraphSnapshot.from_payload(components, relationships)


def test_snapshot_drops_dangling_and_self_edges():
    g = GraphSnapshot.from_payload(
        [{"id": "a", "type": "Server"}, {"id": "b", "type": "Database", "criticality": "high"}],
        [
            {"from": "a", "to": "b", "type": "depends_on"},
            {"from": "a", "to": "a", "type": "DEPENDS_ON"},
            {"from": "a", "to": "ghost", "type": "DEPENDS_ON"},
        ],
    )
    assert len(g) == 2
    assert g.relationships == (Relationship("a", "b", "DEPENDS_ON"),)
    assert g.component("b").criticality == Criticality.high
    assert g.component("a").name == "a"
    assert "ghost" not in g


def test_require_unknown_component():
    g = GraphSnapshot()
    with pytest.raises(ComponentNotFound):
        g.require("nope")


def test_neighbors_directions(sample_graph):
    assert sample_graph.neighbors("app-pay", Direction.downstream) == [("db-orders", "DEPENDS_ON")]
    assert sample_graph.neighbors("app-pay", Direction.upstream) == [("app-web", "DEPENDS_ON")]
    assert [n for n, _ in sample_graph.neighbors("app-pay")] == ["db-orders", "app-web"]


def test_snapshot_round_trips_to_dict(sample_graph):
    doc = sample_graph.to_dict()
    rebuilt = GraphSnapshot.from_payload(doc["nodes"], doc["relationships"])
    assert rebuilt.relationships == sample_graph.relationships
    assert {ci.id for ci in rebuilt.components} == {ci.id for ci in sample_graph.components}


def test_find_path_is_undirected(sample_graph):
    path = find_path(sample_graph, "srv-01", "bs-checkout", 6)
    assert path.nodes == ("srv-01", "db-orders", "app-pay", "app-web", "bs-checkout")
    assert path.relationships == ("RUNS_ON", "DEPENDS_ON", "DEPENDS_ON", "DEPENDS_ON")
    assert path.hops == 4


def test_find_path_respects_hop_bound(sample_graph):
    assert find_path(sample_graph, "srv-01", "bs-checkout", 3) is None
    assert find_path(sample_graph, "srv-01", "srv-lonely", 6) is None


def test_find_path_same_and_missing_ids(sample_graph):
    assert find_path(sample_graph, "app-web", "app-web", 3).nodes == ("app-web",)
    assert find_path(sample_graph, "app-web", "missing", 3) is None
    assert find_path(sample_graph, None, "app-web", 3) is None


def test_shortest_path_in_cycle():
    g = _ring(6)
    path = find_path(g, "n0", "n5", 5, shortest=True)
    assert path.nodes == ("n0", "n5")
    deep = find_path(g, "n0", "n3", 5, shortest=True)
    assert deep.hops == 3
    assert len(set(deep.nodes)) == len(deep.nodes)


def test_paths_have_no_repeats_and_bounded_length():
    g = _ring(8)
    for target in ("n2", "n4", "n6"):
        path = find_path(g, "n0", target, 4)
        assert path is not None
        assert len(path.nodes) <= 5
        assert len(set(path.nodes)) == len(path.nodes)


def test_reachable_downstream_and_upstream(sample_graph):
    down = reachable(sample_graph, "app-web", 6, Direction.downstream)
    assert [(r.component_id, r.hops) for r in down] == [("app-pay", 1), ("db-orders", 2), ("srv-01", 3)]
    up = reachable(sample_graph, "db-orders", 1, Direction.upstream)
    assert [(r.component_id, r.relationship_kind) for r in up] == [("app-pay", "DEPENDS_ON")]


def test_reachable_kind_filter_and_cycles(sample_graph):
    only_runs = reachable(sample_graph, "db-orders", 5, Direction.both, kinds={"RUNS_ON"})
    assert [r.component_id for r in only_runs] == ["srv-01"]
    ring = reachable(_ring(4), "n0", 10, Direction.downstream)
    assert [r.component_id for r in ring] == ["n1", "n2", "n3"]
    assert reachable(sample_graph, "missing", 3) == []


def test_reachable_reports_each_component_once_at_min_hops():
    diamond = GraphSnapshot.from_payload(
        [{"id": c, "type": "Server"} for c in ("r", "a", "b", "t")],
        [
            {"from": "r", "to": "a", "type": "CONNECTS_TO"},
            {"from": "a", "to": "b", "type": "CONNECTS_TO"},
            {"from": "b", "to": "t", "type": "CONNECTS_TO"},
            {"from": "r", "to": "t", "type": "DEPENDS_ON"},
        ],
    )
    reaches = reachable(diamond, "r", 5, Direction.downstream)
    assert [r.component_id for r in reaches].count("t") == 1
    hops = {r.component_id: (r.hops, r.relationship_kind) for r in reaches}
    assert hops == {"a": (1, "CONNECTS_TO"), "t": (1, "DEPENDS_ON"), "b": (2, "CONNECTS_TO")}
    assert path_to("r", reaches, "t").nodes == ("r", "t")


def test_path_to_rebuilds_chain(sample_graph):
    reaches = reachable(sample_graph, "bs-checkout", 6)
    path = path_to("bs-checkout", reaches, "db-orders")
    assert path.nodes == ("bs-checkout", "app-web", "app-pay", "db-orders")
    assert path_to("bs-checkout", reaches, "srv-lonely") is None


def test_configuration_item_from_dict():
    ci = ConfigurationItem.from_dict({"id": " x ", "type": "BusinessService", "criticality": "bad"})
    assert ci.id == "x"
    assert ci.is_business_service
    assert ci.criticality is None
