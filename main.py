"""
Entry point for the GraphSight correlation and impact API server.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncIterator

import uvicorn
from fastapi import FastAPI

from api.routes import router
from config import settings
from store.client import get_redis, is_using_fallback

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    stream=sys.stdout,
)
log = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    await get_redis()
    log.info(
        "GraphSight started (default tenant %s, store %s)",
        settings.default_tenant_id,
        "fallback" if is_using_fallback() else "redis",
    )
    yield
    log.info("GraphSight stopped")


app = FastAPI(
    title="GraphSight Correlation Engine",
    description="Topology-aware incident correlation, business impact and cascade simulation over a CMDB dependency graph.",
    version="1.0.0",
    lifespan=lifespan,
)

app.include_router(router, prefix="/api/v1")


if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=4330,
        log_level="info",
        access_log=True,
    )
