"""
Correlation routes: topology-aware event correlation, business impact assessment, recurring pattern detection and root-cause ranking.

Copyright (c) 2026 Stefan Kumarasinghe
Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from typing import Any, Dict

from fastapi import APIRouter

from api.requests import BusinessImpactRequest, CorrelationRequest
from api.routes.exception import handle_exceptions
from config import settings
from services import analysis_service

router = APIRouter(tags=["Correlation"])


@router.post("/correlation/analyze", summary="Correlate events across related components")
@handle_exceptions
async def analyze(req: CorrelationRequest) -> Dict[str, Any]:
    return await analysis_service.analyze_correlations(req)


@router.post("/correlation/business-impact", summary="Revenue and customer impact of recent events")
@handle_exceptions
async def business_impact(req: BusinessImpactRequest) -> Dict[str, Any]:
    return await analysis_service.assess_business_impact(req)


@router.get("/correlation/patterns", summary="Components with recurring incidents")
@handle_exceptions
async def patterns(tenant_id: str | None = None) -> Dict[str, Any]:
    return await analysis_service.detect_patterns(tenant_id or settings.default_tenant_id)


@router.get("/correlation/root-cause/{event_id}", summary="Rank likely root causes of an event")
@handle_exceptions
async def root_cause(event_id: str, tenant_id: str | None = None, depth: int | None = None) -> Dict[str, Any]:
    return await analysis_service.root_cause(tenant_id or settings.default_tenant_id, event_id, depth)
