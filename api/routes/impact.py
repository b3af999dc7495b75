"""
Multi-hop impact analysis route reporting every component within reach of a failing component.

Copyright (c) 2026 Stefan Kumarasinghe
Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from typing import Any, Dict

from fastapi import APIRouter

from api.routes.exception import handle_exceptions
from config import settings
from engine.enums import Direction
from services import analysis_service

router = APIRouter(tags=["Impact"])


@router.get("/impact/{component_id}", summary="Blast radius of a component")
@handle_exceptions
async def impact(
    component_id: str,
    tenant_id: str | None = None,
    max_depth: int | None = None,
    direction: Direction = Direction.downstream,
) -> Dict[str, Any]:
    return await analysis_service.impact_analysis(
        tenant_id or settings.default_tenant_id, component_id, max_depth, direction
    )
