#!/usr/bin/env python3

"""
Smoke test runner for a running GraphSight API: loads a small topology and event set, then exercises every route.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

import asyncio
import os
import sys
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any, Dict

import httpx

BASE_URL = os.getenv("GRAPHSIGHT_BASE_URL", "http://localhost:4330/api/v1")
TENANT = "smoke-tenant"
NOW = datetime.now(timezone.utc)
HEADERS = {"Content-Type": "application/json"}


def ago(seconds: int) -> str:
    return (NOW - timedelta(seconds=seconds)).isoformat()


TOPOLOGY = {
    "tenant_id": TENANT,
    "components": [
        {"id": "bs-checkout", "name": "Checkout", "type": "BusinessService", "criticality": "CRITICAL"},
        {"id": "app-web", "name": "web-frontend", "type": "WebApplication", "criticality": "HIGH"},
        {"id": "app-pay", "name": "payment-service", "type": "Application", "criticality": "HIGH"},
        {"id": "db-orders", "name": "orders-db", "type": "Database", "criticality": "CRITICAL"},
        {"id": "srv-01", "name": "srv-01", "type": "Server", "criticality": "MEDIUM"},
    ],
    "relationships": [
        {"from": "bs-checkout", "to": "app-web", "type": "DEPENDS_ON"},
        {"from": "app-web", "to": "app-pay", "type": "DEPENDS_ON"},
        {"from": "app-pay", "to": "db-orders", "type": "DEPENDS_ON"},
        {"from": "db-orders", "to": "srv-01", "type": "RUNS_ON"},
    ],
}

EVENTS = {
    "tenant_id": TENANT,
    "events": [
        {"id": "smoke-e1", "message": "disk latency", "severity": "HIGH", "ci_id": "srv-01", "timestamp": ago(900)},
        {"id": "smoke-e2", "message": "slow queries", "severity": "CRITICAL", "ci_id": "db-orders", "timestamp": ago(840)},
        {"id": "smoke-e3", "message": "payment timeouts", "severity": "HIGH", "ci_id": "app-pay", "timestamp": ago(780)},
        {"id": "smoke-e4", "message": "checkout errors", "severity": "CRITICAL", "ci_id": "bs-checkout", "timestamp": ago(700)},
        {"id": "smoke-e5", "message": "slow queries", "severity": "MEDIUM", "ci_id": "db-orders", "timestamp": ago(600)},
        {"id": "smoke-e6", "message": "orphan alert", "severity": "LOW", "ci_id": "unknown-ci", "timestamp": ago(500)},
    ],
}


@dataclass(frozen=True)
class Case:
    label: str
    method: str
    path: str
    body: Dict[str, Any] = field(default_factory=dict)
    params: Dict[str, Any] = field(default_factory=dict)
    expect: int = 200
    section: str = ""


CASES: list[Case] = [
    Case("health", "GET", "/health", section="Health"),

    Case("store topology", "PUT", "/topology", section="Topology", body=TOPOLOGY),
    Case("store revenue", "PUT", "/topology/revenue", section="Topology", body={
        "tenant_id": TENANT,
        "services": {"Checkout": {"hourly_revenue": 120000, "customers": 4000, "criticality": "CRITICAL"}},
    }),
    Case("read topology", "GET", "/topology", section="Topology", params={"tenant_id": TENANT}),

    Case("record events", "POST", "/events", section="Events", body=EVENTS),
    Case("list events", "GET", "/events", section="Events", params={"tenant_id": TENANT}),
    Case("event stats", "GET", "/events/stats", section="Events", params={"tenant_id": TENANT}),
    Case("acknowledge event", "PATCH", "/events/smoke-e1/status", section="Events",
         body={"status": "ACKNOWLEDGED"}, params={"tenant_id": TENANT}),
    Case("unknown event status", "PATCH", "/events/missing/status", section="Events",
         body={"status": "RESOLVED"}, params={"tenant_id": TENANT}, expect=404),

    Case("correlate advanced", "POST", "/correlation/analyze", section="Correlation",
         body={"tenant_id": TENANT, "time_window": 3600, "max_hops": 3, "min_confidence": 0.5}),
    Case("correlate simplified", "POST", "/correlation/analyze", section="Correlation",
         body={"tenant_id": TENANT, "mode": "simplified"}),
    Case("correlate clamped", "POST", "/correlation/analyze", section="Correlation",
         body={"tenant_id": TENANT, "max_hops": 99, "min_confidence": -1, "time_window": -5}),
    Case("business impact", "POST", "/correlation/business-impact", section="Correlation",
         body={"tenant_id": TENANT, "time_window": 3600}),
    Case("patterns", "GET", "/correlation/patterns", section="Correlation", params={"tenant_id": TENANT}),
    Case("root cause", "GET", "/correlation/root-cause/smoke-e4", section="Correlation",
         params={"tenant_id": TENANT}),
    Case("root cause unknown", "GET", "/correlation/root-cause/missing", section="Correlation",
         params={"tenant_id": TENANT}, expect=404),

    Case("blast radius", "GET", "/impact/srv-01", section="Impact",
         params={"tenant_id": TENANT, "direction": "upstream"}),
    Case("blast radius unknown", "GET", "/impact/missing", section="Impact",
         params={"tenant_id": TENANT}, expect=404),

    Case("cascade from db", "POST", "/cascade/simulate", section="Cascade",
         body={"tenant_id": TENANT, "root_component_id": "db-orders", "time_delay_minutes": 5}),
    Case("cascade auto root", "POST", "/cascade/simulate", section="Cascade", body={"tenant_id": TENANT}),
    Case("cascade unknown root", "POST", "/cascade/simulate", section="Cascade",
         body={"tenant_id": TENANT, "root_component_id": "missing"}, expect=404),

    Case("clear events", "DELETE", "/events", section="Cleanup", params={"tenant_id": TENANT}),
    Case("clear topology", "DELETE", "/topology", section="Cleanup", params={"tenant_id": TENANT}),
    Case("purge tenant", "DELETE", f"/tenants/{TENANT}", section="Cleanup"),
]


async def run_case(client: httpx.AsyncClient, case: Case) -> tuple[bool, str, Any]:
    try:
        r = await client.request(case.method, case.path, json=case.body or None, params=case.params)
    except httpx.TransportError as exc:
        return False, f"transport error: {exc}", None
    try:
        body: Any = r.json()
    except ValueError:
        body = r.text
    if r.status_code == case.expect:
        return True, "", body
    return False, f"{r.status_code} {r.reason_phrase}: {body}", body


async def main():
    import json
    import argparse

    parser = argparse.ArgumentParser(description="Run API smoke cases")
    parser.add_argument("--section", help="only run cases from this section name")
    parser.add_argument("--quiet", action="store_true", help="do not print response bodies")
    args = parser.parse_args()
    selected = [c for c in CASES if not args.section or c.section == args.section]
    if not selected:
        print("no matching cases (check --section)")
        sys.exit(1)

    passed = failed = 0
    current_section = ""

    async with httpx.AsyncClient(base_url=BASE_URL, headers=HEADERS, timeout=30) as client:
        for case in selected:
            if case.section != current_section:
                current_section = case.section
                print(f"\n-- {current_section} {'-' * max(0, 44 - len(current_section))}")

            ok, detail, body = await run_case(client, case)
            if ok:
                passed += 1
                print(f"  PASS  {case.method} {case.path} ({case.label})")
            else:
                failed += 1
                print(f"  FAIL  {case.method} {case.path} ({case.label}, expected {case.expect})")
                if detail:
                    print(f"        {detail}")
            if not args.quiet and body is not None:
                print(json.dumps(body, indent=2, default=str))

    total = passed + failed
    print(f"\n  Results: {passed} passed / {failed} failed / {total} total\n")
    sys.exit(0 if failed == 0 else 1)


if __name__ == "__main__":
    asyncio.run(main())
