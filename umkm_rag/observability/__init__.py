"""
Observability module.

Provides structured logging and correlation ID tracking.
"""

from umkm_rag.observability.correlation import (
    clear_correlation_id,
    get_correlation_id,
    set_correlation_id,
)
from umkm_rag.observability.logger import configure_logging

__all__ = [
    "configure_logging",
    "set_correlation_id",
    "get_correlation_id",
    "clear_correlation_id",
]
