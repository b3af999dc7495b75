"""
Event routes for recording incident events against configuration items, listing and clearing them, updating their status and reporting severity and status statistics.

Copyright (c) 2026 Stefan Kumarasinghe
Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from typing import Any, Dict, List

from fastapi import APIRouter

from api.requests import EventsRequest, EventStatusRequest
from api.routes.exception import handle_exceptions
from config import settings
from engine.events.registry import Event
from engine.registry import get_registry
from services import analysis_service

router = APIRouter(tags=["Events"])


@router.post("/events", summary="Record incident events")
@handle_exceptions
async def register_events(req: EventsRequest) -> Dict[str, Any]:
    events = [Event.from_dict(e.model_dump(exclude_none=True)) for e in req.events]
    added = await get_registry().add_events(req.tenant_id, events)
    return {"status": "registered", "tenant_id": req.tenant_id, "event_ids": [e.id for e in added]}


@router.get("/events", summary="List incident events for a tenant")
@handle_exceptions
async def list_events(tenant_id: str | None = None) -> List[Dict[str, Any]]:
    events = await get_registry().events(tenant_id or settings.default_tenant_id)
    return [e.to_dict() for e in sorted(events, key=lambda e: (e.timestamp, e.id), reverse=True)]


@router.delete("/events", summary="Clear all incident events for a tenant")
@handle_exceptions
async def clear_events(tenant_id: str | None = None) -> Dict[str, str]:
    resolved = tenant_id or settings.default_tenant_id
    await get_registry().clear_events(resolved)
    return {"status": "cleared", "tenant_id": resolved}


@router.get("/events/stats", summary="Event counts by severity and status")
@handle_exceptions
async def event_stats(tenant_id: str | None = None) -> Dict[str, int]:
    return await analysis_service.event_statistics(tenant_id or settings.default_tenant_id)


@router.patch("/events/{event_id}/status", summary="Acknowledge or resolve an event")
@handle_exceptions
async def update_status(event_id: str, req: EventStatusRequest, tenant_id: str | None = None) -> Dict[str, Any]:
    event = await get_registry().update_event_status(tenant_id or settings.default_tenant_id, event_id, req.status)
    return event.to_dict()
