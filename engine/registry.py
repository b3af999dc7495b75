"""
Registry for tenant topology, revenue tables and incident events. Writes for a tenant are serialised behind a per-tenant lock; reads hand out freshly built frozen snapshots so analysis never observes a half-applied update.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import asyncio
import dataclasses
import logging
from typing import Any, Dict, Iterable, List, Mapping, Tuple

from engine.enums import EventStatus
from engine.events.registry import Event
from engine.exceptions import EventNotFound
from engine.impact.business import ServiceRevenue, revenue_table_from
from engine.topology.graph import ConfigurationItem, GraphSnapshot, Relationship
from store import events as event_store, tenant as tenant_store, topology as topology_store

log = logging.getLogger(__name__)


def _merge(existing: List[Dict[str, Any]], incoming: Iterable[Dict[str, Any]], key) -> List[Dict[str, Any]]:
    merged: Dict[Any, Dict[str, Any]] = {key(item): item for item in existing}
    for item in incoming:
        merged[key(item)] = item
    return list(merged.values())


def _edge_key(item: Mapping[str, Any]) -> Tuple[str, str, str]:
    return (str(item.get("from")), str(item.get("to")), str(item.get("type")))


class TopologyRegistry:
    def __init__(self) -> None:
        self._locks: Dict[str, asyncio.Lock] = {}

    def _lock(self, tenant_id: str) -> asyncio.Lock:
        lock = self._locks.get(tenant_id)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[tenant_id] = lock
        return lock

    async def snapshot(self, tenant_id: str) -> GraphSnapshot:
        doc = await topology_store.load(tenant_id)
        return GraphSnapshot.from_payload(doc["nodes"], doc["relationships"])

    async def put_topology(
        self,
        tenant_id: str,
        components: Iterable[ConfigurationItem],
        relationships: Iterable[Relationship],
        merge: bool = False,
    ) -> GraphSnapshot:
        nodes = [ci.to_dict() for ci in components if ci.id]
        edges = [rel.to_dict() for rel in relationships]
        async with self._lock(tenant_id):
            if merge:
                current = await topology_store.load(tenant_id)
                nodes = _merge(current["nodes"], nodes, lambda n: n.get("id"))
                edges = _merge(current["relationships"], edges, _edge_key)
            graph = GraphSnapshot.from_payload(nodes, edges)
            await topology_store.save(tenant_id, graph.to_dict())
        log.info("Stored topology for %s: %d component(s), %d relationship(s)",
                 tenant_id, len(graph), len(graph.relationships))
        return graph

    async def clear_topology(self, tenant_id: str) -> None:
        async with self._lock(tenant_id):
            await topology_store.clear(tenant_id)

    async def revenue_table(self, tenant_id: str) -> Dict[str, ServiceRevenue]:
        return revenue_table_from(await topology_store.load_revenue(tenant_id))

    async def put_revenue(self, tenant_id: str, raw: Mapping[str, Any]) -> Dict[str, ServiceRevenue]:
        table = revenue_table_from(raw)
        async with self._lock(tenant_id):
            await topology_store.save_revenue(
                tenant_id,
                {name: {k: v for k, v in entry.to_dict().items() if k != "name"} for name, entry in table.items()},
            )
        return table

    async def events(self, tenant_id: str) -> Tuple[Event, ...]:
        raw = await event_store.load(tenant_id)
        parsed: List[Event] = []
        for item in raw:
            try:
                parsed.append(Event.from_dict(item))
            except (TypeError, ValueError) as exc:
                log.debug("Skipping unreadable event for %s: %s", tenant_id, exc)
        return tuple(parsed)

    async def add_events(self, tenant_id: str, new_events: Iterable[Event]) -> List[Event]:
        added = list(new_events)
        async with self._lock(tenant_id):
            existing = await event_store.load(tenant_id)
            known = {str(e.get("id")) for e in existing}
            for event in added:
                if event.id in known:
                    existing = [e for e in existing if str(e.get("id")) != event.id]
                existing.append(event.to_dict())
                known.add(event.id)
            await event_store.save(tenant_id, existing)
        return added

    async def get_event(self, tenant_id: str, event_id: str) -> Event:
        for event in await self.events(tenant_id):
            if event.id == event_id:
                return event
        raise EventNotFound(event_id)

    async def update_event_status(self, tenant_id: str, event_id: str, status: EventStatus) -> Event:
        async with self._lock(tenant_id):
            existing = await event_store.load(tenant_id)
            for index, item in enumerate(existing):
                if str(item.get("id")) == event_id:
                    updated = dataclasses.replace(Event.from_dict(item), status=status)
                    existing[index] = updated.to_dict()
                    await event_store.save(tenant_id, existing)
                    return updated
        raise EventNotFound(event_id)

    async def clear_events(self, tenant_id: str) -> None:
        async with self._lock(tenant_id):
            await event_store.clear(tenant_id)

    async def purge_tenant(self, tenant_id: str) -> List[str]:
        """Drop every stored document for ``tenant_id`` and forget its lock."""
        async with self._lock(tenant_id):
            removed = await tenant_store.purge(tenant_id)
        self.evict(tenant_id)
        log.info("Purged tenant %s: %d document(s)", tenant_id, len(removed))
        return removed

    def evict(self, tenant_id: str) -> None:
        self._locks.pop(tenant_id, None)


_registry = TopologyRegistry()


def get_registry() -> TopologyRegistry:
    return _registry
