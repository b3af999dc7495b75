"""
Tenant-namespaced keys for topology, revenue and event documents.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

PREFIX = "gs"


def topology(tenant_id: str) -> str:
    return f"{PREFIX}:{tenant_id}:topology"


def revenue(tenant_id: str) -> str:
    return f"{PREFIX}:{tenant_id}:revenue"


def events(tenant_id: str) -> str:
    return f"{PREFIX}:{tenant_id}:events"


def tenant_pattern(tenant_id: str) -> str:
    return f"{PREFIX}:{tenant_id}:*"
