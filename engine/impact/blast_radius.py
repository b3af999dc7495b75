"""
Multi-hop impact analysis (blast radius) of a single component: every component reachable within a bounded number of hops is scored by its criticality divided by its distance, with the path and relationship chain that reached it.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from config import CRITICALITY_SCORES, settings
from engine.enums import Criticality, Direction, RiskLevel
from engine.topology.graph import GraphSnapshot
from engine.topology.paths import path_to, reachable


@dataclass(frozen=True)
class ImpactedComponent:
    component_id: str
    name: str
    type: str
    hops: int
    impact_score: float
    risk_level: RiskLevel
    path: Tuple[str, ...]
    relationship_chain: Tuple[str, ...]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "component_id": self.component_id,
            "name": self.name,
            "type": self.type,
            "hops": self.hops,
            "impact_score": self.impact_score,
            "risk_level": self.risk_level.value,
            "path": list(self.path),
            "relationship_chain": list(self.relationship_chain),
        }


def criticality_score(criticality: Optional[Criticality]) -> float:
    if criticality is None:
        return settings.blast_radius_default_criticality
    return CRITICALITY_SCORES.get(criticality.value, settings.blast_radius_default_criticality)


def analyze_blast_radius(
    graph: GraphSnapshot,
    component_id: str,
    max_depth: int | None = None,
    direction: Direction = Direction.downstream,
) -> List[ImpactedComponent]:
    """Score every component reachable from ``component_id``.

    Raises ``ComponentNotFound`` for an unknown root. Results are ordered by
    impact score descending, then hop count, then component id.
    """
    root = graph.require(component_id)
    if max_depth is None:
        max_depth = settings.blast_radius_default_depth

    reaches = reachable(graph, root.id, max_depth, direction)
    impacted: List[ImpactedComponent] = []
    for reach in reaches:
        ci = graph.component(reach.component_id)
        if ci is None:
            continue
        score = round(min(1.0, criticality_score(ci.criticality) / reach.hops), 4)
        path = path_to(root.id, reaches, ci.id)
        impacted.append(
            ImpactedComponent(
                component_id=ci.id,
                name=ci.name,
                type=ci.type,
                hops=reach.hops,
                impact_score=score,
                risk_level=RiskLevel.from_score(score),
                path=path.nodes if path else (root.id, ci.id),
                relationship_chain=path.relationships if path else (reach.relationship_kind,),
            )
        )

    return sorted(impacted, key=lambda c: (-c.impact_score, c.hops, c.component_id))


def summarize_blast_radius(component_id: str, impacted: List[ImpactedComponent]) -> Dict[str, Any]:
    return {
        "component_id": component_id,
        "total_impacted": len(impacted),
        "critical_impacts": sum(1 for c in impacted if c.risk_level == RiskLevel.critical),
        "high_impacts": sum(1 for c in impacted if c.risk_level == RiskLevel.high),
        "max_hops": max((c.hops for c in impacted), default=0),
    }
