"""
Cascade simulation route that generates and stores a staggered set of failure events spreading from a root component.

Copyright (c) 2026 Stefan Kumarasinghe
Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from typing import Any, Dict

from fastapi import APIRouter

from api.requests import CascadeRequest
from api.routes.exception import handle_exceptions
from services import analysis_service

router = APIRouter(tags=["Cascade"])


@router.post("/cascade/simulate", summary="Simulate a cascading failure from a root component")
@handle_exceptions
async def simulate(req: CascadeRequest) -> Dict[str, Any]:
    return await analysis_service.simulate_cascade(req)
