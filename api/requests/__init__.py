from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from config import settings
from engine.enums import CorrelationMode, EventStatus


def _default_tenant() -> str:
    return settings.default_tenant_id


class ComponentPayload(BaseModel):
    id: str
    name: Optional[str] = None
    type: str = "Unknown"
    status: str = "OPERATIONAL"
    criticality: Optional[str] = None
    properties: Dict[str, Any] = Field(default_factory=dict)


class RelationshipPayload(BaseModel):
    model_config = {"populate_by_name": True}

    source: str = Field(alias="from")
    target: str = Field(alias="to")
    type: str = "DEPENDS_ON"


class TopologyRequest(BaseModel):
    tenant_id: str = Field(default_factory=_default_tenant)
    components: List[ComponentPayload] = Field(default_factory=list)
    relationships: List[RelationshipPayload] = Field(default_factory=list)
    merge: bool = False


class ServiceRevenuePayload(BaseModel):
    hourly_revenue: float = 0.0
    customers: int = 0
    criticality: Optional[str] = None


class RevenueRequest(BaseModel):
    tenant_id: str = Field(default_factory=_default_tenant)
    services: Dict[str, ServiceRevenuePayload] = Field(default_factory=dict)


class EventPayload(BaseModel):
    id: Optional[str] = None
    message: str = ""
    severity: Optional[str] = None
    event_type: str = "ALERT"
    timestamp: Optional[datetime] = None
    status: str = "OPEN"
    ci_id: Optional[str] = None
    source: str = "api"
    metadata: Dict[str, Any] = Field(default_factory=dict)


class EventsRequest(BaseModel):
    tenant_id: str = Field(default_factory=_default_tenant)
    events: List[EventPayload] = Field(default_factory=list)


class EventStatusRequest(BaseModel):
    status: EventStatus


class CorrelationRequest(BaseModel):
    tenant_id: str = Field(default_factory=_default_tenant)
    time_window: Optional[float] = None
    max_hops: Optional[int] = None
    min_confidence: Optional[float] = None
    mode: CorrelationMode = CorrelationMode.advanced
    as_of: Optional[datetime] = None
    limit: Optional[int] = None


class BusinessImpactRequest(BaseModel):
    tenant_id: str = Field(default_factory=_default_tenant)
    time_window: Optional[float] = None
    as_of: Optional[datetime] = None


class CascadeRequest(BaseModel):
    tenant_id: str = Field(default_factory=_default_tenant)
    root_component_id: Optional[str] = None
    cascade_depth: Optional[int] = None
    time_delay_minutes: Optional[float] = None
