import os
import sys
import pytest

# ensure workspace root is on sys.path so our application packages can be imported
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from store.client import _fallback


@pytest.fixture(autouse=True)
def clear_fallback(monkeypatch):
    """Wipe the in-memory store before and after each test and override the
    redis helpers so they always operate on the in-memory store.
    """
    _fallback.clear()

    import store.client as client

    async def fake_get(key: str):
        return _fallback.get(key)

    async def fake_set(key: str, value: str, ttl=None):
        _fallback[key] = value

    async def fake_delete(key: str):
        _fallback.pop(key, None)

    async def fake_get_redis():
        return None

    monkeypatch.setattr(client, "redis_get", fake_get)
    monkeypatch.setattr(client, "redis_set", fake_set)
    monkeypatch.setattr(client, "redis_delete", fake_delete)
    monkeypatch.setattr(client, "get_redis", fake_get_redis)
    monkeypatch.setattr(client, "_using_fallback", True)

    # also update any modules that imported the helpers at import-time
    import store.events as estore
    import store.tenant as tenant_store
    import store.topology as tstore
    import api.routes.health as health_route
    fakes = {"redis_get": fake_get, "redis_set": fake_set, "redis_delete": fake_delete, "get_redis": fake_get_redis}
    for mod in (estore, tenant_store, tstore, health_route):
        for name, fake in fakes.items():
            if hasattr(mod, name):
                monkeypatch.setattr(mod, name, fake)

    from engine.registry import get_registry
    get_registry()._locks.clear()

    yield

    _fallback.clear()


@pytest.fixture
def sample_topology():
    """Checkout -> web -> payments -> orders-db -> srv-01, plus an isolated host."""
    components = [
        {"id": "bs-checkout", "name": "Checkout", "type": "BusinessService", "criticality": "CRITICAL"},
        {"id": "app-web", "name": "web-frontend", "type": "WebApplication", "criticality": "HIGH"},
        {"id": "app-pay", "name": "payment-service", "type": "Application", "criticality": "HIGH"},
        {"id": "db-orders", "name": "orders-db", "type": "Database", "criticality": "CRITICAL"},
        {"id": "srv-01", "name": "srv-01", "type": "Server", "criticality": "MEDIUM"},
        {"id": "srv-lonely", "name": "srv-lonely", "type": "Server"},
    ]
    relationships = [
        {"from": "bs-checkout", "to": "app-web", "type": "DEPENDS_ON"},
        {"from": "app-web", "to": "app-pay", "type": "DEPENDS_ON"},
        {"from": "app-pay", "to": "db-orders", "type": "DEPENDS_ON"},
        {"from": "db-orders", "to": "srv-01", "type": "RUNS_ON"},
    ]
    return components, relationships


@pytest.fixture
def sample_graph(sample_topology):
    from engine.topology.graph import GraphSnapshot

    components, relationships = sample_topology
    return GraphSnapshot.from_payload(components, relationships)


def pytest_ignore_collect(collection_path, config):
    if os.path.sep + "engine" + os.path.sep in str(collection_path):
        return True
