"""
Test suite for RAG API endpoints.

Tests POST /rag/query and GET /rag/insights with FastAPI TestClient.
Covers successful answers, error mapping, validation, and rate limiting.

System role: Verification of RAG HTTP API
"""

from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from umkm_rag.api.deps import get_rag_service, get_throttler_guard
from umkm_rag.api.guards.throttler_guard import ThrottlerGuard
from umkm_rag.core.exceptions import (
    ChainNotInitialized,
    EmbeddingUnavailable,
    GenerationUnavailable,
)
from umkm_rag.core.rate_limit import FixedWindowRateLimiter
from umkm_rag.main import create_app


@pytest.fixture
def mock_rag_service() -> AsyncMock:
    """Provide RAGService mock with canned answers."""
    service = AsyncMock()
    service.answer.return_value = "Kopi Senja is in Bandung."
    service.insights.return_value = "Headline Insight: positive posts drive engagement."
    return service


@pytest.fixture
def client(mock_rag_service: AsyncMock) -> TestClient:
    """Provide TestClient with service and guard overridden."""
    app = create_app()
    guard = ThrottlerGuard(FixedWindowRateLimiter(max_requests=5, window_seconds=60))
    app.dependency_overrides[get_rag_service] = lambda: mock_rag_service
    app.dependency_overrides[get_throttler_guard] = lambda: guard
    return TestClient(app)


class TestQueryEndpointSuccessful:
    """Test suite for successful query requests."""

    def test_query_should_return_answer(self, client: TestClient, mock_rag_service: AsyncMock) -> None:
        """Test query endpoint wraps the answer."""
        # Act
        response = client.post("/api/v1/rag/query", json={"question": "Where is Kopi Senja?"})

        # Assert
        assert response.status_code == 200
        assert response.json() == {
            "message": "Successfully answered the question",
            "data": "Kopi Senja is in Bandung.",
        }
        mock_rag_service.answer.assert_awaited_once_with("Where is Kopi Senja?")

    def test_query_should_set_rate_limit_headers(self, client: TestClient) -> None:
        """Test admitted requests carry quota headers."""
        response = client.post("/api/v1/rag/query", json={"question": "Hi"})

        assert response.headers["X-RateLimit-Limit"] == "5"
        assert response.headers["X-RateLimit-Remaining"] == "4"
        assert int(response.headers["X-RateLimit-Reset"]) > 0


class TestQueryEndpointValidation:
    """Test suite for request validation."""

    @pytest.mark.parametrize("body", [{}, {"question": ""}, {"question": 12}])
    def test_invalid_body_should_return_422(self, client: TestClient, body: dict) -> None:
        """Test missing, empty or non-string questions are rejected."""
        response = client.post("/api/v1/rag/query", json=body)

        assert response.status_code == 422


class TestQueryEndpointErrors:
    """Test suite for query failure mapping."""

    @pytest.mark.parametrize(
        ("error", "expected"),
        [
            (GenerationUnavailable(), "Language model is unavailable"),
            (EmbeddingUnavailable(), "Embedding provider is unavailable"),
            (ChainNotInitialized(), "RAG chain not initialized"),
            (RuntimeError("stack details"), "Internal server error"),
        ],
    )
    def test_failures_should_return_500_error_object(
        self,
        client: TestClient,
        mock_rag_service: AsyncMock,
        error: Exception,
        expected: str,
    ) -> None:
        """Test failures map to the error object with a short cause."""
        mock_rag_service.answer.side_effect = error

        response = client.post("/api/v1/rag/query", json={"question": "Anything?"})

        assert response.status_code == 500
        assert response.json() == {"message": "Failed to process your question", "error": expected}
        assert response.headers["X-RateLimit-Remaining"] == "4"


class TestInsightsEndpoint:
    """Test suite for GET /rag/insights."""

    def test_insights_should_return_report(self, client: TestClient) -> None:
        response = client.get("/api/v1/rag/insights")

        assert response.status_code == 200
        assert response.json() == {
            "message": "Successfully generated insights",
            "data": "Headline Insight: positive posts drive engagement.",
        }

    def test_insights_failure_should_return_500(
        self, client: TestClient, mock_rag_service: AsyncMock
    ) -> None:
        mock_rag_service.insights.side_effect = GenerationUnavailable()

        response = client.get("/api/v1/rag/insights")

        assert response.status_code == 500
        assert response.json()["message"] == "Failed to process your question"


class TestRateLimiting:
    """Test suite for rate limiting across RAG routes."""

    def test_sixth_request_should_be_rejected(self, client: TestClient, mock_rag_service: AsyncMock) -> None:
        """Test requests 1-5 succeed and request 6 gets 429 with a cooldown."""
        statuses = [
            client.post("/api/v1/rag/query", json={"question": f"q{i}"}).status_code
            for i in range(5)
        ]
        rejected = client.post("/api/v1/rag/query", json={"question": "q6"})

        assert statuses == [200] * 5
        assert rejected.status_code == 429
        body = rejected.json()
        assert body["error"] == "Too Many Requests"
        retry_after = int(rejected.headers["Retry-After"])
        assert 0 < retry_after <= 60
        assert body["message"] == f"Too many requests. Try again in {retry_after} seconds."
        assert rejected.headers["X-RateLimit-Remaining"] == "0"
        assert mock_rag_service.answer.await_count == 5

    def test_quota_is_shared_between_routes(self, client: TestClient) -> None:
        """Test query and insights draw from the same per-client quota."""
        for _ in range(3):
            client.post("/api/v1/rag/query", json={"question": "q"})
        for _ in range(2):
            client.get("/api/v1/rag/insights")

        response = client.get("/api/v1/rag/insights")

        assert response.status_code == 429
