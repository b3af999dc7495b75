"""
Liveness route reporting which backend currently holds tenant topology and events.

Copyright (c) 2026 Stefan Kumarasinghe
Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from typing import Any, Dict

from fastapi import APIRouter

from api.routes.exception import handle_exceptions
from config import settings
from store.client import get_redis, is_using_fallback

router = APIRouter(tags=["Health"])


@router.get("/health", summary="Service liveness and topology store backend")
@handle_exceptions
async def health() -> Dict[str, Any]:
    client = await get_redis()
    backend = "redis" if client is not None and not is_using_fallback() else "memory"
    return {
        "status": "ok",
        "service": "graphsight",
        "topology_store": backend,
        "default_tenant": settings.default_tenant_id,
    }
