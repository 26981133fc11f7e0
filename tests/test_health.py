"""Health endpoint tests."""

from contextlib import asynccontextmanager

import pytest
from falcon.asgi import App
from falcon.testing import TestClient

from permatrix.domain.exceptions import PersistenceFailure
from permatrix.interfaces.api.resources.health import HealthResource


def _client(health: HealthResource) -> TestClient:
    app = App()
    app.add_route("/v1/health", health)
    app.add_route("/v1/health/ready", health, suffix="ready")
    return TestClient(app)


@pytest.fixture
def client() -> TestClient:
    """Create test client with health endpoints."""
    return _client(HealthResource())


def test_health_liveness(client: TestClient) -> None:
    """GET /v1/health returns 200."""
    result = client.simulate_get("/v1/health")
    assert result.status_code == 200
    assert result.json["status"] == "ok"


def test_health_ready(client: TestClient) -> None:
    """GET /v1/health/ready returns 200."""
    result = client.simulate_get("/v1/health/ready")
    assert result.status_code == 200
    assert result.json["status"] == "ready"


def test_health_ready_checks_store(uow_factory) -> None:
    result = _client(HealthResource(uow_factory)).simulate_get("/v1/health/ready")
    assert result.status_code == 200


def test_health_not_ready_when_store_down() -> None:
    @asynccontextmanager
    async def _down():
        raise OSError("connection refused")
        yield

    result = _client(HealthResource(_down)).simulate_get("/v1/health/ready")
    assert result.status_code == 503
    assert result.json["status"] == "unavailable"


def test_health_not_ready_when_uow_reports_persistence_failure() -> None:
    @asynccontextmanager
    async def _down():
        raise PersistenceFailure("Permission store unavailable")
        yield

    result = _client(HealthResource(_down)).simulate_get("/v1/health/ready")
    assert result.status_code == 503
    assert result.json["status"] == "unavailable"
