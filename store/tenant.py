"""
Removal of every document stored under a tenant's key namespace.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import logging
from typing import List

from store import keys
from store.client import redis_delete, redis_scan

log = logging.getLogger(__name__)


async def purge(tenant_id: str) -> List[str]:
    removed = await redis_scan(keys.tenant_pattern(tenant_id))
    for key in removed:
        await redis_delete(key)
    log.debug("Purged %d key(s) for %s", len(removed), tenant_id)
    return removed
