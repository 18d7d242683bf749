"""
Exception hierarchy for the UMKM RAG service.

Provides layered exception structure for domain-specific errors.
All exceptions include context for observability and debugging.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class UMKMRagException(Exception):
    """Base exception for all UMKM RAG service errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class DatasetError(UMKMRagException):
    """Base exception for dataset loading errors."""

    def __init__(
        self,
        message: str,
        dataset_path: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize dataset error.

        Args:
            message: Error message
            dataset_path: Path of the dataset that failed to load
            details: Additional context
        """
        details = details or {}
        if dataset_path:
            details["dataset_path"] = dataset_path
        super().__init__(message, details)


class DatasetReadError(DatasetError):
    """Raised when the dataset file is missing or unreadable."""

    pass


class DatasetParseError(DatasetError):
    """Raised when the dataset content is not valid structured data."""

    pass


class EmbeddingUnavailable(UMKMRagException):
    """Raised when the embedding provider fails (timeout, quota, transport)."""

    def __init__(
        self,
        message: str = "Embedding provider is unavailable",
        operation: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize embedding error.

        Args:
            message: Error message
            operation: Operation that failed (embed_documents, embed_query)
            details: Additional context
        """
        details = details or {}
        if operation:
            details["operation"] = operation
        super().__init__(message, details)


class ChainNotInitialized(UMKMRagException):
    """Raised when a query arrives before the index and chain are built."""

    def __init__(self, details: dict[str, Any] | None = None) -> None:
        super().__init__("RAG chain not initialized", details)


class GenerationUnavailable(UMKMRagException):
    """Raised when the language model call fails."""

    def __init__(
        self,
        message: str = "Language model is unavailable",
        model: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize generation error.

        Args:
            message: Error message
            model: Model identifier that failed
            details: Additional context
        """
        details = details or {}
        if model:
            details["model"] = model
        super().__init__(message, details)


class RateLimitExceeded(UMKMRagException):
    """
    Raised when a client exceeds its request quota.

    Expected and user-facing: rendered as a 429 response, never logged as an error.
    """

    def __init__(
        self,
        message: str,
        retry_after: int | None = None,
        headers: dict[str, str] | None = None,
    ) -> None:
        """
        Initialize rate limit error.

        Args:
            message: Client-facing rejection message
            retry_after: Cooldown in seconds, when it could be derived
            headers: Response headers to attach to the rejection
        """
        self.retry_after = retry_after
        self.headers = dict(headers or {})
        details = {"retry_after": retry_after} if retry_after is not None else None
        super().__init__(message, details)
