"""
Test suite for health endpoints.

System role: Verification of liveness and index readiness checks
"""

from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from umkm_rag.api.deps import get_rag_service
from umkm_rag.main import create_app


@pytest.fixture
def client() -> TestClient:
    app = create_app()
    return TestClient(app)


def test_health_check(client: TestClient) -> None:
    response = client.get("/api/v1/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "message": "Server Healthy"}


def test_health_check_is_not_rate_limited(client: TestClient) -> None:
    for _ in range(12):
        response = client.get("/api/v1/health")
    assert response.status_code == 200
    assert "X-RateLimit-Limit" not in response.headers


def test_health_check_index_ready(client: TestClient) -> None:
    service = MagicMock(is_ready=True, index_size=42)
    client.app.dependency_overrides[get_rag_service] = lambda: service

    response = client.get("/api/v1/health/index")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "message": "Vector index ready (42 chunks)"}


def test_health_check_index_not_built(client: TestClient) -> None:
    service = MagicMock(is_ready=False, index_size=0)
    client.app.dependency_overrides[get_rag_service] = lambda: service

    response = client.get("/api/v1/health/index")

    assert response.status_code == 503
    assert response.json() == {"status": "unavailable", "message": "Vector index not built"}


def test_correlation_id_is_echoed(client: TestClient) -> None:
    response = client.get("/api/v1/health", headers={"X-Correlation-ID": "req-123"})
    assert response.headers["X-Correlation-ID"] == "req-123"


def test_correlation_id_is_generated(client: TestClient) -> None:
    response = client.get("/api/v1/health")
    assert response.headers["X-Correlation-ID"]


def test_health_check_index_is_not_rate_limited(client: TestClient) -> None:
    service = MagicMock(is_ready=True, index_size=3)
    client.app.dependency_overrides[get_rag_service] = lambda: service

    for _ in range(12):
        response = client.get("/api/v1/health/index")

    assert response.status_code == 200
    assert "X-RateLimit-Limit" not in response.headers
