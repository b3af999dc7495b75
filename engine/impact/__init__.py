"""
Business and topological impact analysis of incident events.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from engine.impact.blast_radius import ImpactedComponent, analyze_blast_radius, summarize_blast_radius
from engine.impact.business import (
    BusinessImpactResult,
    ServiceRevenue,
    assess_impact,
    revenue_table_from,
    summarize_impact,
)

__all__ = [
    "BusinessImpactResult",
    "ImpactedComponent",
    "ServiceRevenue",
    "analyze_blast_radius",
    "assess_impact",
    "revenue_table_from",
    "summarize_blast_radius",
    "summarize_impact",
]
