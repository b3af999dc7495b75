"""
Persistence of a tenant's dependency graph and business-service revenue table as JSON documents.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict

from config import TOPOLOGY_TTL
from store import keys
from store.client import redis_delete, redis_get, redis_set

log = logging.getLogger(__name__)


def _empty() -> Dict[str, Any]:
    return {"nodes": [], "relationships": []}


async def load(tenant_id: str) -> Dict[str, Any]:
    try:
        raw = await redis_get(keys.topology(tenant_id))
        if raw:
            doc = json.loads(raw)
            if isinstance(doc, dict):
                return {
                    "nodes": list(doc.get("nodes") or []),
                    "relationships": list(doc.get("relationships") or []),
                }
    except Exception as exc:
        log.debug("Topology load failed %s: %s", tenant_id, exc)
    return _empty()


async def save(tenant_id: str, document: Dict[str, Any]) -> None:
    try:
        await redis_set(keys.topology(tenant_id), json.dumps(document), ttl=TOPOLOGY_TTL or None)
    except Exception as exc:
        log.debug("Topology save failed %s: %s", tenant_id, exc)


async def clear(tenant_id: str) -> None:
    try:
        await redis_delete(keys.topology(tenant_id))
        await redis_delete(keys.revenue(tenant_id))
    except Exception as exc:
        log.debug("Topology clear failed %s: %s", tenant_id, exc)


async def load_revenue(tenant_id: str) -> Dict[str, Any]:
    try:
        raw = await redis_get(keys.revenue(tenant_id))
        if raw:
            doc = json.loads(raw)
            if isinstance(doc, dict):
                return doc
    except Exception as exc:
        log.debug("Revenue load failed %s: %s", tenant_id, exc)
    return {}


async def save_revenue(tenant_id: str, table: Dict[str, Any]) -> None:
    try:
        await redis_set(keys.revenue(tenant_id), json.dumps(table), ttl=TOPOLOGY_TTL or None)
    except Exception as exc:
        log.debug("Revenue save failed %s: %s", tenant_id, exc)
