"""
Routes initialization for API endpoints.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from fastapi import APIRouter

from api.routes.health import router as health_router
from api.routes.topology import router as topology_router
from api.routes.events import router as events_router
from api.routes.correlation import router as correlation_router
from api.routes.cascade import router as cascade_router
from api.routes.impact import router as impact_router

router = APIRouter()

router.include_router(health_router)
router.include_router(topology_router)
router.include_router(events_router)
router.include_router(correlation_router)
router.include_router(cascade_router)
router.include_router(impact_router)

__all__ = ["router"]
