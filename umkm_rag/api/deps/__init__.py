"""API-specific dependencies."""

# Re-export common dependencies
from .dependencies import (
    ServiceCache,
    enforce_rate_limit,
    get_rag_service,
    get_service_cache,
    get_settings_dependency,
    get_throttler_guard,
)

__all__ = [
    "ServiceCache",
    "enforce_rate_limit",
    "get_rag_service",
    "get_service_cache",
    "get_settings_dependency",
    "get_throttler_guard",
]
