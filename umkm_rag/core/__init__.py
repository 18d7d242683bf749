"""
Core business logic module.

Contains domain business logic, exception hierarchy, and core components.
All business rules and domain-specific logic reside here.
"""

from umkm_rag.core.exceptions import (
    UMKMRagException,
    DatasetError,
    DatasetReadError,
    DatasetParseError,
    EmbeddingUnavailable,
    ChainNotInitialized,
    GenerationUnavailable,
    RateLimitExceeded,
)

__all__ = [
    "UMKMRagException",
    "DatasetError",
    "DatasetReadError",
    "DatasetParseError",
    "EmbeddingUnavailable",
    "ChainNotInitialized",
    "GenerationUnavailable",
    "RateLimitExceeded",
]
