"""
Constants and configuration for GraphSight.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

import os
from typing import Dict, List, Tuple

from pydantic_settings import BaseSettings


REDIS_URL: str = os.getenv("REDIS_URL", "redis://localhost:6379/0")
TOPOLOGY_TTL: int = int(os.getenv("TOPOLOGY_TTL", "0"))
EVENTS_TTL: int = int(os.getenv("EVENTS_TTL", "2592000"))

GRAPHSIGHT_DEFAULT_TENANT_ID = os.getenv("GRAPHSIGHT_DEFAULT_TENANT_ID", "default")

# component type names the engine treats specially
BUSINESS_SERVICE_TYPE = "BusinessService"
DATABASE_TYPES: Tuple[str, ...] = ("Database", "DatabaseServer")
SERVER_TYPES: Tuple[str, ...] = ("Server",)

DEFAULT_EVENT_TYPE = "ALERT"

# weight values assigned to event severities for correlation proximity
SEVERITY_WEIGHTS: Dict[str, float] = {
    "CRITICAL": 1.0,
    "HIGH": 0.8,
    "MEDIUM": 0.6,
    "LOW": 0.4,
    "INFO": 0.2,
}

# base business impact per event severity
SEVERITY_IMPACT: Dict[str, float] = {
    "CRITICAL": 1.0,
    "HIGH": 0.8,
    "MEDIUM": 0.5,
    "LOW": 0.3,
}

# multiplier applied to revenue by the criticality of the business service
SERVICE_CRITICALITY_MULTIPLIERS: Dict[str, float] = {
    "CRITICAL": 1.0,
    "HIGH": 0.8,
    "MEDIUM": 0.5,
    "LOW": 0.2,
}

# score of a reachable component in the blast-radius analysis
CRITICALITY_SCORES: Dict[str, float] = {
    "CRITICAL": 1.0,
    "HIGH": 0.8,
    "MEDIUM": 0.6,
    "LOW": 0.4,
}

COMPONENT_TYPE_MULTIPLIERS: Dict[str, float] = {
    "BusinessService": 1.3,
    "Database": 1.2,
    "DatabaseServer": 1.2,
    "APIService": 1.2,
    "Application": 1.1,
    "WebApplication": 1.1,
    "Microservice": 1.1,
    "LoadBalancer": 1.1,
    "NetworkSwitch": 1.1,
    "Server": 1.0,
}


class Settings(BaseSettings):
    default_tenant_id: str = GRAPHSIGHT_DEFAULT_TENANT_ID

    # correlation scoring
    correlation_weight_time: float = 0.4
    correlation_weight_distance: float = 0.3
    correlation_weight_severity: float = 0.2
    correlation_weight_type: float = 0.1
    correlation_hop_decay: float = 0.2
    correlation_type_match_score: float = 0.8
    correlation_type_mismatch_score: float = 0.6
    correlation_unknown_severity_weight: float = 0.5
    correlation_default_window_seconds: float = 3600.0
    correlation_default_max_hops: int = 3
    correlation_default_min_confidence: float = 0.5
    correlation_band_high: float = 0.8
    correlation_band_medium: float = 0.6
    correlation_result_limit: int = 50

    # clamp ranges for caller supplied parameters
    max_hops_floor: int = 1
    max_hops_ceiling: int = 6
    blast_radius_default_depth: int = 6
    blast_radius_max_depth: int = 10

    # business impact
    impact_default_severity_score: float = 0.3
    impact_default_service_multiplier: float = 0.5
    impact_service_search_depth: int = 3
    impact_reverse_kinds: List[str] = ["DEPENDS_ON"]
    impact_forward_kinds: List[str] = ["SUPPORTS", "ENABLES"]
    impact_revenue_divisor: float = 100000.0
    impact_top_services: int = 5
    risk_threshold_critical: float = 0.8
    risk_threshold_high: float = 0.6
    risk_threshold_medium: float = 0.4
    # hourly revenue at risk that escalates the recommendation regardless of risk
    recommendation_escalate_revenue: float = 50000.0
    recommendation_prioritize_revenue: float = 10000.0
    blast_radius_default_criticality: float = 0.2

    # recurring patterns
    pattern_min_events: int = 2
    pattern_systematic_events: int = 3
    pattern_observation_window_days: float = 7.0

    # cascade simulation
    cascade_max_affected: int = 15
    cascade_max_levels: int = 2
    cascade_default_depth: int = 3
    cascade_default_delay_minutes: float = 5.0
    cascade_min_delay_minutes: float = 1.0
    cascade_stagger_divisor: float = 3.0
    cascade_jitter_divisor: float = 8.0

    # root cause ranking: (distance, max delay seconds, probability)
    rca_default_depth: int = 3
    rca_lookback_seconds: float = 3600.0
    rca_min_probability: float = 0.3
    rca_fallback_probability: float = 0.1
    rca_result_limit: int = 10
    rca_probability_table: List[Tuple[int, float, float]] = [
        (1, 300.0, 0.9),
        (1, 600.0, 0.7),
        (2, 300.0, 0.6),
        (2, 600.0, 0.4),
        (3, 300.0, 0.3),
    ]

    store_redis_retry_cooldown_seconds: float = 10.0
    store_fallback_max_items: int = 10_000

    model_config = {
        "env_prefix": "GRAPHSIGHT_",
        "extra": "ignore",
    }


settings = Settings()
