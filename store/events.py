"""
Persistence of a tenant's incident events as a single JSON list.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, List

from config import EVENTS_TTL
from store import keys
from store.client import redis_delete, redis_get, redis_set

log = logging.getLogger(__name__)


async def load(tenant_id: str) -> List[Dict[str, Any]]:
    try:
        raw = await redis_get(keys.events(tenant_id))
        if raw:
            doc = json.loads(raw)
            if isinstance(doc, list):
                return [e for e in doc if isinstance(e, dict)]
    except Exception as exc:
        log.debug("Events load failed %s: %s", tenant_id, exc)
    return []


async def save(tenant_id: str, events: List[Dict[str, Any]]) -> None:
    try:
        await redis_set(keys.events(tenant_id), json.dumps(events), ttl=EVENTS_TTL)
    except Exception as exc:
        log.debug("Events save failed %s: %s", tenant_id, exc)


async def clear(tenant_id: str) -> None:
    try:
        await redis_delete(keys.events(tenant_id))
    except Exception as exc:
        log.debug("Events clear failed %s: %s", tenant_id, exc)
