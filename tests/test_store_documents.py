"""
Tests for the topology, revenue and event document stores.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

import pytest

from store import events as event_store, keys, topology as topology_store
from store.client import _fallback


@pytest.mark.asyncio
async def test_topology_save_load_clear():
    assert await topology_store.load("t1") == {"nodes": [], "relationships": []}
    doc = {"nodes": [{"id": "a"}], "relationships": [{"from": "a", "to": "b", "type": "X"}]}
    await topology_store.save("t1", doc)
    assert await topology_store.load("t1") == doc
    await topology_store.save_revenue("t1", {"Checkout": {"hourly_revenue": 10}})
    assert await topology_store.load_revenue("t1") == {"Checkout": {"hourly_revenue": 10}}
    await topology_store.clear("t1")
    assert await topology_store.load("t1") == {"nodes": [], "relationships": []}
    assert await topology_store.load_revenue("t1") == {}


@pytest.mark.asyncio
async def test_corrupt_documents_load_empty():
    _fallback[keys.topology("t1")] = "{not json"
    _fallback[keys.events("t1")] = '{"not": "a list"}'
    _fallback[keys.revenue("t1")] = "[1, 2]"
    assert await topology_store.load("t1") == {"nodes": [], "relationships": []}
    assert await event_store.load("t1") == []
    assert await topology_store.load_revenue("t1") == {}


@pytest.mark.asyncio
async def test_events_save_load_clear():
    await event_store.save("t1", [{"id": "e1"}, "junk", {"id": "e2"}])
    assert await event_store.load("t1") == [{"id": "e1"}, {"id": "e2"}]
    assert await event_store.load("t2") == []
    await event_store.clear("t1")
    assert await event_store.load("t1") == []
