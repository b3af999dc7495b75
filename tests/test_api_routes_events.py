"""
API event route tests calling the handlers directly with a stub registry.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

import pytest
from fastapi import HTTPException

from api.requests import EventPayload, EventsRequest, EventStatusRequest
from api.routes import events as events_route
from engine.enums import EventStatus
from engine.exceptions import EventNotFound


class DummyRegistry:
    def __init__(self):
        self.added = []

    async def add_events(self, tenant_id, events):
        self.added.append((tenant_id, list(events)))
        return list(events)

    async def update_event_status(self, tenant_id, event_id, status):
        raise EventNotFound(event_id)


@pytest.mark.asyncio
async def test_register_events_parses_payload(monkeypatch):
    dummy = DummyRegistry()
    monkeypatch.setattr(events_route, "get_registry", lambda: dummy)
    req = EventsRequest(tenant_id="t1", events=[EventPayload(id="e1", severity="high", ci_id="srv-01")])
    res = await events_route.register_events(req)
    assert res == {"status": "registered", "tenant_id": "t1", "event_ids": ["e1"]}
    tenant, events = dummy.added[0]
    assert tenant == "t1"
    assert events[0].severity.value == "HIGH"
    assert events[0].timestamp.tzinfo is not None


@pytest.mark.asyncio
async def test_default_tenant_applied(monkeypatch):
    dummy = DummyRegistry()
    monkeypatch.setattr(events_route, "get_registry", lambda: dummy)
    await events_route.register_events(EventsRequest(events=[]))
    assert dummy.added[0][0] == "default"


@pytest.mark.asyncio
async def test_missing_event_maps_to_404(monkeypatch):
    monkeypatch.setattr(events_route, "get_registry", lambda: DummyRegistry())
    with pytest.raises(HTTPException) as exc:
        await events_route.update_status("e9", EventStatusRequest(status=EventStatus.resolved), tenant_id="t1")
    assert exc.value.status_code == 404


@pytest.mark.asyncio
async def test_unexpected_error_maps_to_500(monkeypatch):
    class Exploding:
        async def add_events(self, tenant_id, events):
            raise RuntimeError("boom")

    monkeypatch.setattr(events_route, "get_registry", lambda: Exploding())
    with pytest.raises(HTTPException) as exc:
        await events_route.register_events(EventsRequest(tenant_id="t1", events=[]))
    assert exc.value.status_code == 500
    assert exc.value.detail == "boom"
