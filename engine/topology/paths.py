"""
Bounded-depth path discovery over the dependency graph: undirected depth-first search for a connecting path between two components, and breadth-first reachability from a root in a chosen direction. Both traversals are iterative and keep an explicit visited set so cyclic graphs always terminate.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""


from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Callable, Collection, Dict, Iterable, List, Optional, Tuple

from engine.enums import Direction
from engine.topology.graph import GraphSnapshot

Expander = Callable[[str], Iterable[Tuple[str, str]]]


@dataclass(frozen=True)
class Path:
    nodes: Tuple[str, ...]
    relationships: Tuple[str, ...] = ()

    @property
    def hops(self) -> int:
        return len(self.nodes) - 1


@dataclass(frozen=True)
class Reach:
    component_id: str
    hops: int
    relationship_kind: str
    parent: str


def _depth_first(graph: GraphSnapshot, from_id: str, to_id: str, limit: int) -> Optional[Path]:
    stack: List[Tuple[str, Tuple[str, ...], Tuple[str, ...]]] = [(from_id, (from_id,), ())]
    while stack:
        node, nodes, kinds = stack.pop()
        if node == to_id:
            return Path(nodes=nodes, relationships=kinds)
        if len(nodes) - 1 >= limit:
            continue
        on_path = set(nodes)
        children = [(n, k) for n, k in graph.neighbors(node, Direction.both) if n not in on_path]
        # reversed so the first listed neighbor is explored first
        for neighbor, kind in reversed(children):
            stack.append((neighbor, nodes + (neighbor,), kinds + (kind,)))
    return None


def find_path(
    graph: GraphSnapshot,
    from_id: Optional[str],
    to_id: Optional[str],
    max_hops: int,
    shortest: bool = False,
) -> Optional[Path]:
    """Connect two components, ignoring edge direction.

    Returns the first path found by depth-first exploration within
    ``max_hops`` edges. With ``shortest=True`` the search is repeated with an
    increasing depth limit so the returned path has the minimum hop count.
    Unknown ids yield ``None`` rather than an error.
    """
    if from_id not in graph or to_id not in graph:
        return None
    if from_id == to_id:
        return Path(nodes=(from_id,))
    max_hops = max(0, int(max_hops))
    if not shortest:
        return _depth_first(graph, from_id, to_id, max_hops)
    for limit in range(1, max_hops + 1):
        found = _depth_first(graph, from_id, to_id, limit)
        if found is not None:
            return found
    return None


def walk(graph: GraphSnapshot, root_id: Optional[str], max_hops: int, expand: Expander) -> List[Reach]:
    if root_id not in graph or max_hops < 1:
        return []

    found: List[Reach] = []
    seen = {root_id}
    queue: deque[Tuple[str, int]] = deque([(root_id, 0)])

    while queue:
        node, depth = queue.popleft()
        if depth >= max_hops:
            continue
        for neighbor, kind in expand(node):
            if neighbor in seen or neighbor not in graph:
                continue
            seen.add(neighbor)
            found.append(Reach(component_id=neighbor, hops=depth + 1, relationship_kind=kind, parent=node))
            queue.append((neighbor, depth + 1))

    return found


def adjacent(
    graph: GraphSnapshot,
    component_id: str,
    direction: Direction,
    kinds: Optional[Collection[str]] = None,
) -> List[Tuple[str, str]]:
    pairs: List[Tuple[str, str]] = []
    if direction in (Direction.downstream, Direction.both):
        pairs.extend((r.target, r.kind) for r in graph.outgoing(component_id) if kinds is None or r.kind in kinds)
    if direction in (Direction.upstream, Direction.both):
        pairs.extend((r.source, r.kind) for r in graph.incoming(component_id) if kinds is None or r.kind in kinds)
    return pairs


def reachable(
    graph: GraphSnapshot,
    root_id: Optional[str],
    max_hops: int,
    direction: Direction = Direction.downstream,
    kinds: Optional[Collection[str]] = None,
) -> List[Reach]:
    return walk(graph, root_id, max_hops, lambda node: adjacent(graph, node, direction, kinds))


def path_to(root_id: str, reaches: List[Reach], component_id: str) -> Optional[Path]:
    index: Dict[str, Reach] = {r.component_id: r for r in reaches}
    if component_id not in index:
        return None
    nodes: List[str] = [component_id]
    kinds: List[str] = []
    current = index[component_id]
    while True:
        kinds.append(current.relationship_kind)
        nodes.append(current.parent)
        if current.parent == root_id:
            break
        current = index[current.parent]
    return Path(nodes=tuple(reversed(nodes)), relationships=tuple(reversed(kinds)))
