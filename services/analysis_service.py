"""
Analysis service that loads a tenant's topology snapshot, revenue table and events from the registry and runs the engine operations over them.

Copyright (c) 2026 Stefan Kumarasinghe
Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from api.requests import BusinessImpactRequest, CascadeRequest, CorrelationRequest
from engine import analyzer
from engine.cascade.simulator import RandomSource
from engine.enums import Direction
from engine.registry import get_registry

log = logging.getLogger(__name__)


async def analyze_correlations(req: CorrelationRequest) -> Dict[str, Any]:
    registry = get_registry()
    graph = await registry.snapshot(req.tenant_id)
    events = await registry.events(req.tenant_id)
    return analyzer.analyze_correlations(
        graph,
        events,
        time_window=req.time_window,
        max_hops=req.max_hops,
        min_confidence=req.min_confidence,
        mode=req.mode,
        as_of=req.as_of,
        limit=req.limit,
    )


async def assess_business_impact(req: BusinessImpactRequest) -> Dict[str, Any]:
    registry = get_registry()
    graph = await registry.snapshot(req.tenant_id)
    events = await registry.events(req.tenant_id)
    table = await registry.revenue_table(req.tenant_id)
    return analyzer.assess_business_impact(graph, events, table, req.time_window, req.as_of)


async def detect_patterns(tenant_id: str) -> Dict[str, Any]:
    registry = get_registry()
    graph = await registry.snapshot(tenant_id)
    return analyzer.find_patterns(graph, await registry.events(tenant_id))


async def root_cause(tenant_id: str, event_id: str, depth: Optional[int] = None) -> Dict[str, Any]:
    registry = get_registry()
    graph = await registry.snapshot(tenant_id)
    return analyzer.root_cause(graph, await registry.events(tenant_id), event_id, depth)


async def impact_analysis(
    tenant_id: str,
    component_id: str,
    max_depth: Optional[int] = None,
    direction: Direction = Direction.downstream,
) -> Dict[str, Any]:
    graph = await get_registry().snapshot(tenant_id)
    return analyzer.impact_analysis(graph, component_id, max_depth, direction)


async def simulate_cascade(req: CascadeRequest, rng: Optional[RandomSource] = None) -> Dict[str, Any]:
    registry = get_registry()
    graph = await registry.snapshot(req.tenant_id)
    simulation = analyzer.run_cascade(
        graph,
        root_component_id=req.root_component_id,
        cascade_depth=req.cascade_depth,
        time_delay_minutes=req.time_delay_minutes,
        rng=rng,
    )
    await registry.add_events(req.tenant_id, simulation.events)
    log.info("Cascade %s stored %d event(s) for %s",
             simulation.cascade_id, len(simulation.events), req.tenant_id)
    return simulation.to_dict()


async def event_statistics(tenant_id: str) -> Dict[str, int]:
    return analyzer.statistics(await get_registry().events(tenant_id))
