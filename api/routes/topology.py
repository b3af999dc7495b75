"""
Topology routes for storing, reading and clearing a tenant's configuration items, relationships and business-service revenue table.

Copyright (c) 2026 Stefan Kumarasinghe
Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from typing import Any, Dict

from fastapi import APIRouter

from api.requests import RevenueRequest, TopologyRequest
from api.routes.exception import handle_exceptions
from config import settings
from engine.registry import get_registry
from engine.topology.graph import ConfigurationItem, Relationship

router = APIRouter(tags=["Topology"])


@router.put("/topology", summary="Replace or merge a tenant's dependency graph")
@handle_exceptions
async def put_topology(req: TopologyRequest) -> Dict[str, Any]:
    components = [ConfigurationItem.from_dict(c.model_dump()) for c in req.components]
    relationships = [Relationship.from_dict(r.model_dump(by_alias=True)) for r in req.relationships]
    graph = await get_registry().put_topology(req.tenant_id, components, relationships, merge=req.merge)
    return {
        "status": "stored",
        "tenant_id": req.tenant_id,
        "components": len(graph),
        "relationships": len(graph.relationships),
    }


@router.get("/topology", summary="Read a tenant's dependency graph")
@handle_exceptions
async def get_topology(tenant_id: str | None = None) -> Dict[str, Any]:
    graph = await get_registry().snapshot(tenant_id or settings.default_tenant_id)
    return graph.to_dict()


@router.delete("/topology", summary="Clear a tenant's dependency graph and revenue table")
@handle_exceptions
async def clear_topology(tenant_id: str | None = None) -> Dict[str, str]:
    resolved = tenant_id or settings.default_tenant_id
    await get_registry().clear_topology(resolved)
    return {"status": "cleared", "tenant_id": resolved}


@router.put("/topology/revenue", summary="Replace the business-service revenue table")
@handle_exceptions
async def put_revenue(req: RevenueRequest) -> Dict[str, Any]:
    table = await get_registry().put_revenue(
        req.tenant_id, {name: entry.model_dump() for name, entry in req.services.items()}
    )
    return {
        "status": "stored",
        "tenant_id": req.tenant_id,
        "services": {name: entry.to_dict() for name, entry in table.items()},
    }


@router.delete("/tenants/{tenant_id}", summary="Remove every stored document for a tenant")
@handle_exceptions
async def purge_tenant(tenant_id: str) -> Dict[str, Any]:
    removed = await get_registry().purge_tenant(tenant_id)
    return {"status": "purged", "tenant_id": tenant_id, "removed": removed}
