"""
Dependency injection container.

Factory functions for FastAPI dependencies.

Dependencies: umkm_rag.configs, umkm_rag.application, umkm_rag.boundary
System role: DI container for service injection
"""

from functools import lru_cache

from fastapi import Depends, Request, Response

from umkm_rag.api.guards.throttler_guard import ThrottlerGuard, client_key
from umkm_rag.application.services.rag_service import RAGService
from umkm_rag.configs import Settings, get_settings


class ServiceCache:
    """Container for cached service instances."""

    def __init__(self, settings: Settings | None = None):
        self._settings = settings
        self._embeddings = None
        self._chat_model = None
        self._rag_service = None
        self._throttler_guard = None

    @property
    def settings(self) -> Settings:
        if self._settings is None:
            self._settings = get_settings()
        return self._settings

    @property
    def embeddings(self):
        """Get cached embeddings client."""
        if self._embeddings is None:
            from umkm_rag.boundary.genai import create_embeddings
            self._embeddings = create_embeddings(self.settings.embedding)
        return self._embeddings

    @property
    def chat_model(self):
        """Get cached chat model."""
        if self._chat_model is None:
            from umkm_rag.boundary.genai import create_chat_model
            self._chat_model = create_chat_model(self.settings.llm)
        return self._chat_model

    @property
    def rag_service(self) -> RAGService:
        """Get cached RAG service (not yet initialized)."""
        if self._rag_service is None:
            from umkm_rag.core.document_processing import DocumentPipeline

            pipeline = DocumentPipeline.from_settings(self.settings, self.embeddings)
            self._rag_service = RAGService(
                pipeline=pipeline,
                embeddings=self.embeddings,
                llm=self.chat_model,
                top_k=self.settings.rag.top_k,
                score_threshold=self.settings.rag.score_threshold,
            )
        return self._rag_service

    @property
    def throttler_guard(self) -> ThrottlerGuard:
        """Get cached throttler guard."""
        if self._throttler_guard is None:
            from umkm_rag.core.rate_limit import FixedWindowRateLimiter

            limits = self.settings.rate_limit
            self._throttler_guard = ThrottlerGuard(
                FixedWindowRateLimiter(
                    max_requests=limits.max_requests,
                    window_seconds=limits.window_seconds,
                ),
                enabled=limits.enabled,
            )
        return self._throttler_guard

    def clear(self) -> None:
        """Clear all cached instances."""
        self._embeddings = None
        self._chat_model = None
        self._rag_service = None
        self._throttler_guard = None


# Global service cache
_service_cache = ServiceCache()


def get_service_cache() -> ServiceCache:
    """Get service cache singleton."""
    return _service_cache


@lru_cache
def get_settings_dependency() -> Settings:
    """Get settings singleton."""
    return get_settings()


def get_rag_service() -> RAGService:
    """
    Get RAG service instance.

    Returns:
        RAGService: Service built during application startup
    """
    return get_service_cache().rag_service


def get_throttler_guard() -> ThrottlerGuard:
    """
    Get throttler guard instance.

    Returns:
        ThrottlerGuard: Guard shared by all rate-limited routes
    """
    return get_service_cache().throttler_guard


def enforce_rate_limit(
    request: Request,
    response: Response,
    guard: ThrottlerGuard = Depends(get_throttler_guard),
) -> None:
    """
    Count the request against the caller's quota.

    Args:
        request: Incoming request (client host is the quota key)
        response: Sub-response receiving the X-RateLimit-* headers
        guard: Injected ThrottlerGuard

    Raises:
        RateLimitExceeded: Quota exhausted for the current window
    """
    guard.check(client_key(request), response.headers)
