"""
Business impact assessment: maps each linked event through the dependency graph to the nearest business service, derives an impact score from event severity and component type, and estimates hourly revenue and customers at risk from a per-service revenue table.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from config import (
    COMPONENT_TYPE_MULTIPLIERS,
    SERVICE_CRITICALITY_MULTIPLIERS,
    SEVERITY_IMPACT,
    settings,
)
from engine.enums import Criticality, Direction, ImpactAction, RiskLevel, Severity
from engine.events.registry import Event
from engine.topology.graph import ConfigurationItem, GraphSnapshot
from engine.topology.paths import adjacent, walk

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class ServiceRevenue:
    name: str
    hourly_revenue: float
    customers: int = 0
    criticality: Optional[Criticality] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "hourly_revenue": self.hourly_revenue,
            "customers": self.customers,
            "criticality": self.criticality.value if self.criticality else None,
        }


RevenueTable = Mapping[str, ServiceRevenue]


def revenue_table_from(raw: Any) -> Dict[str, ServiceRevenue]:
    """Build a revenue table from ``{name: amount}`` or ``{name: {...}}`` maps."""
    table: Dict[str, ServiceRevenue] = {}
    if not isinstance(raw, Mapping):
        return table
    for name, entry in raw.items():
        try:
            if isinstance(entry, Mapping):
                table[str(name)] = ServiceRevenue(
                    name=str(name),
                    hourly_revenue=max(0.0, float(entry.get("hourly_revenue", 0.0) or 0.0)),
                    customers=max(0, int(entry.get("customers", 0) or 0)),
                    criticality=Criticality.parse(entry.get("criticality")),
                )
            else:
                table[str(name)] = ServiceRevenue(name=str(name), hourly_revenue=max(0.0, float(entry)))
        except (TypeError, ValueError):
            log.debug("Ignoring malformed revenue entry for %s", name)
    return table


@dataclass(frozen=True)
class BusinessImpactResult:
    event_id: str
    affected_component: str
    primary_business_service: Optional[str]
    impact_score: float
    hourly_revenue_at_risk: float
    risk_level: RiskLevel
    recommendation: ImpactAction
    severity: Optional[Severity] = None
    customers_at_risk: int = 0
    service_hops: Optional[int] = None

    @property
    def rank_value(self) -> float:
        return self.impact_score + self.hourly_revenue_at_risk / settings.impact_revenue_divisor

    def to_dict(self) -> Dict[str, Any]:
        return {
            "event_id": self.event_id,
            "affected_component": self.affected_component,
            "primary_business_service": self.primary_business_service,
            "impact_score": self.impact_score,
            "hourly_revenue_at_risk": self.hourly_revenue_at_risk,
            "risk_level": self.risk_level.value,
            "recommendation": self.recommendation.value,
            "severity": self.severity.value if self.severity else None,
            "customers_at_risk": self.customers_at_risk,
            "service_hops": self.service_hops,
        }


def base_impact(severity: Optional[Severity]) -> float:
    if severity is None:
        return settings.impact_default_severity_score
    return SEVERITY_IMPACT.get(severity.value, settings.impact_default_severity_score)


def type_multiplier(component_type: str) -> float:
    return COMPONENT_TYPE_MULTIPLIERS.get(component_type, 1.0)


def recommend(risk: RiskLevel, revenue: float) -> ImpactAction:
    if risk == RiskLevel.critical or revenue >= settings.recommendation_escalate_revenue:
        return ImpactAction.escalate
    if risk == RiskLevel.high or revenue >= settings.recommendation_prioritize_revenue:
        return ImpactAction.prioritize
    if risk == RiskLevel.medium:
        return ImpactAction.investigate
    return ImpactAction.monitor


def find_business_service(
    graph: GraphSnapshot,
    ci: ConfigurationItem,
    max_depth: int | None = None,
) -> Optional[Tuple[ConfigurationItem, int]]:
    if ci.is_business_service:
        return ci, 0
    if max_depth is None:
        max_depth = settings.impact_service_search_depth

    reverse_kinds = set(settings.impact_reverse_kinds)
    forward_kinds = set(settings.impact_forward_kinds)

    def _expand(node: str) -> List[Tuple[str, str]]:
        # dependents of the node, then whatever the node supports or enables
        return (
            adjacent(graph, node, Direction.upstream, reverse_kinds)
            + adjacent(graph, node, Direction.downstream, forward_kinds)
        )

    for reach in walk(graph, ci.id, max_depth, _expand):
        candidate = graph.component(reach.component_id)
        if candidate is not None and candidate.is_business_service:
            return candidate, reach.hops
    return None


def _criticality_multiplier(service: ConfigurationItem, entry: Optional[ServiceRevenue]) -> float:
    criticality = service.criticality or (entry.criticality if entry else None)
    if criticality is None:
        return settings.impact_default_service_multiplier
    return SERVICE_CRITICALITY_MULTIPLIERS.get(criticality.value, settings.impact_default_service_multiplier)


def assess_event(
    graph: GraphSnapshot,
    event: Event,
    revenue_table: RevenueTable,
) -> Optional[BusinessImpactResult]:
    ci = graph.component(event.ci_id)
    if ci is None:
        return None

    base = base_impact(event.severity)
    impact = round(min(1.0, base * type_multiplier(ci.type)), 4)
    risk = RiskLevel.from_score(impact)

    revenue = 0.0
    customers = 0
    service_name: Optional[str] = None
    hops: Optional[int] = None

    found = find_business_service(graph, ci)
    if found is not None:
        service, hops = found
        service_name = service.name
        entry = revenue_table.get(service.name) or revenue_table.get(service.id)
        if entry is not None:
            revenue = round(entry.hourly_revenue * _criticality_multiplier(service, entry) * base, 2)
            customers = int(round(entry.customers * base))

    return BusinessImpactResult(
        event_id=event.id,
        affected_component=ci.id,
        primary_business_service=service_name,
        impact_score=impact,
        hourly_revenue_at_risk=revenue,
        risk_level=risk,
        recommendation=recommend(risk, revenue),
        severity=event.severity,
        customers_at_risk=customers,
        service_hops=hops,
    )


def assess_impact(
    graph: GraphSnapshot,
    events: Iterable[Event],
    revenue_table: RevenueTable | None = None,
) -> List[BusinessImpactResult]:
    table = revenue_table or {}
    results = []
    for event in events:
        result = assess_event(graph, event, table)
        if result is not None:
            results.append(result)
    return sorted(results, key=lambda r: (-r.rank_value, r.event_id))


def summarize_impact(
    results: List[BusinessImpactResult],
    events: Iterable[Event],
) -> Dict[str, Any]:
    all_events = list(events)
    revenue_by_service: Dict[str, float] = defaultdict(float)
    hits_by_service: Dict[str, int] = defaultdict(int)
    for r in results:
        if r.primary_business_service:
            revenue_by_service[r.primary_business_service] += r.hourly_revenue_at_risk
            hits_by_service[r.primary_business_service] += 1

    top_services = sorted(
        hits_by_service,
        key=lambda name: (-revenue_by_service[name], -hits_by_service[name], name),
    )[: settings.impact_top_services]

    return {
        "total_events": len(all_events),
        "assessed_events": len(results),
        "unlinked_events": len(all_events) - len(results),
        "critical_events": sum(1 for e in all_events if e.severity == Severity.critical),
        "high_events": sum(1 for e in all_events if e.severity == Severity.high),
        "critical_impacts": sum(1 for r in results if r.risk_level == RiskLevel.critical),
        "high_impacts": sum(1 for r in results if r.risk_level == RiskLevel.high),
        "total_revenue_at_risk": round(sum(r.hourly_revenue_at_risk for r in results), 2),
        "top_affected_services": top_services,
    }
