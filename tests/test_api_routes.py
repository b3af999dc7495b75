"""
End-to-end API route tests driving the FastAPI app in-process.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from datetime import datetime, timedelta, timezone

import httpx
import pytest
import pytest_asyncio

from config import settings
from main import app

TENANT = "api-tenant"


def _iso(minutes_ago):
    return (datetime.now(timezone.utc) - timedelta(minutes=minutes_ago)).isoformat()


@pytest_asyncio.fixture
async def client():
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test/api/v1") as c:
        yield c


async def _seed(client, sample_topology):
    components, relationships = sample_topology
    r = await client.put("/topology", json={"tenant_id": TENANT, "components": components, "relationships": relationships})
    assert r.status_code == 200
    r = await client.put("/topology/revenue", json={
        "tenant_id": TENANT,
        "services": {"Checkout": {"hourly_revenue": 100000, "customers": 1000, "criticality": "CRITICAL"}},
    })
    assert r.status_code == 200
    r = await client.post("/events", json={"tenant_id": TENANT, "events": [
        {"id": "e-db", "message": "slow queries", "severity": "CRITICAL", "ci_id": "db-orders", "timestamp": _iso(10)},
        {"id": "e-pay", "message": "timeouts", "severity": "HIGH", "ci_id": "app-pay", "timestamp": _iso(9)},
        {"id": "e-pay2", "message": "timeouts", "severity": "HIGH", "ci_id": "app-pay", "timestamp": _iso(8)},
        {"id": "e-orphan", "message": "stray", "severity": "LOW", "timestamp": _iso(5)},
    ]})
    assert r.status_code == 200
    assert r.json()["event_ids"] == ["e-db", "e-pay", "e-pay2", "e-orphan"]


@pytest.mark.asyncio
async def test_health(client):
    r = await client.get("/health")
    assert r.status_code == 200
    assert r.json() == {
        "status": "ok",
        "service": "graphsight",
        "topology_store": "memory",
        "default_tenant": settings.default_tenant_id,
    }


@pytest.mark.asyncio
async def test_topology_round_trip(client, sample_topology):
    await _seed(client, sample_topology)
    r = await client.get("/topology", params={"tenant_id": TENANT})
    body = r.json()
    assert len(body["nodes"]) == 6
    assert {"from": "db-orders", "to": "srv-01", "type": "RUNS_ON"} in body["relationships"]

    r = await client.delete("/topology", params={"tenant_id": TENANT})
    assert r.json()["status"] == "cleared"
    assert (await client.get("/topology", params={"tenant_id": TENANT})).json()["nodes"] == []


@pytest.mark.asyncio
async def test_purge_tenant_route(client, sample_topology):
    await _seed(client, sample_topology)
    r = await client.delete(f"/tenants/{TENANT}")
    assert r.status_code == 200
    body = r.json()
    assert body["status"] == "purged"
    assert body["removed"] == [f"gs:{TENANT}:events", f"gs:{TENANT}:revenue", f"gs:{TENANT}:topology"]
    assert (await client.get("/events", params={"tenant_id": TENANT})).json() == []
    assert (await client.get("/topology", params={"tenant_id": TENANT})).json()["nodes"] == []


@pytest.mark.asyncio
async def test_events_listing_stats_and_status(client, sample_topology):
    await _seed(client, sample_topology)
    listed = (await client.get("/events", params={"tenant_id": TENANT})).json()
    assert [e["id"] for e in listed] == ["e-orphan", "e-pay2", "e-pay", "e-db"]

    stats = (await client.get("/events/stats", params={"tenant_id": TENANT})).json()
    assert stats["total_events"] == 4
    assert stats["high"] == 2

    r = await client.patch("/events/e-db/status", params={"tenant_id": TENANT}, json={"status": "ACKNOWLEDGED"})
    assert r.status_code == 200
    assert r.json()["status"] == "ACKNOWLEDGED"

    r = await client.patch("/events/missing/status", params={"tenant_id": TENANT}, json={"status": "RESOLVED"})
    assert r.status_code == 404

    r = await client.patch("/events/e-db/status", params={"tenant_id": TENANT}, json={"status": "NOPE"})
    assert r.status_code == 422

    await client.delete("/events", params={"tenant_id": TENANT})
    assert (await client.get("/events", params={"tenant_id": TENANT})).json() == []


@pytest.mark.asyncio
async def test_correlation_and_impact_routes(client, sample_topology):
    await _seed(client, sample_topology)
    r = await client.post("/correlation/analyze", json={"tenant_id": TENANT, "max_hops": 99, "min_confidence": 0.5})
    assert r.status_code == 200
    body = r.json()
    assert body["parameters"]["max_hops"] == 6
    assert body["summary"]["total"] == 3
    assert body["correlations"][0]["score"] <= 1.0

    r = await client.post("/correlation/business-impact", json={"tenant_id": TENANT})
    body = r.json()
    assert body["impacts"][0]["event_id"] == "e-db"
    assert body["impacts"][0]["primary_business_service"] == "Checkout"
    assert body["summary"]["unlinked_events"] == 1

    r = await client.get("/correlation/patterns", params={"tenant_id": TENANT})
    assert [p["component_id"] for p in r.json()["patterns"]] == ["app-pay"]

    r = await client.get("/correlation/root-cause/e-pay2", params={"tenant_id": TENANT})
    assert [c["event_id"] for c in r.json()["candidates"]] == ["e-db"]
    assert (await client.get("/correlation/root-cause/nope", params={"tenant_id": TENANT})).status_code == 404

    r = await client.get("/impact/bs-checkout", params={"tenant_id": TENANT, "max_depth": 2})
    assert [c["component_id"] for c in r.json()["impacted"]] == ["app-web", "app-pay"]
    assert (await client.get("/impact/nope", params={"tenant_id": TENANT})).status_code == 404


@pytest.mark.asyncio
async def test_cascade_route_stores_events(client, sample_topology):
    await _seed(client, sample_topology)
    r = await client.post("/cascade/simulate", json={"tenant_id": TENANT, "time_delay_minutes": 2})
    assert r.status_code == 200
    body = r.json()
    assert body["root_component"] == "db-orders"
    assert body["events_created"] == 3
    assert body["events"][0]["severity"] == "CRITICAL"

    listed = (await client.get("/events", params={"tenant_id": TENANT})).json()
    assert len(listed) == 7

    r = await client.post("/cascade/simulate", json={"tenant_id": TENANT, "root_component_id": "missing"})
    assert r.status_code == 404


@pytest.mark.asyncio
async def test_cascade_without_candidates_is_404(client):
    r = await client.post("/cascade/simulate", json={"tenant_id": "empty"})
    assert r.status_code == 404
