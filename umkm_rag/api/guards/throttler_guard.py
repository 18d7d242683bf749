"""
Throttler guard for the RAG endpoints.

Admits or rejects requests through the fixed-window limiter, publishes the
quota headers and turns a rejection into a RateLimitExceeded carrying an
accurate cooldown.

Dependencies: fastapi, umkm_rag.core.rate_limit
System role: FastAPI integration of the rate limiter
"""

import logging
import math
from collections.abc import Mapping, MutableMapping
from typing import NoReturn

from fastapi import Request

from umkm_rag.core.exceptions import RateLimitExceeded
from umkm_rag.core.rate_limit import (
    FixedWindowRateLimiter,
    QuotaSignal,
    QuotaSnapshot,
    rejection_message,
    resolve_cooldown,
)

logger = logging.getLogger(__name__)

LIMIT_HEADER = "X-RateLimit-Limit"
REMAINING_HEADER = "X-RateLimit-Remaining"
RESET_HEADER = "X-RateLimit-Reset"
RETRY_AFTER_HEADER = "Retry-After"


def client_key(request: Request) -> str:
    """Identify the caller by client host."""
    if request.client and request.client.host:
        return request.client.host
    return "anonymous"


class ThrottlerGuard:
    """Rate limit guard keyed by client host."""

    def __init__(self, limiter: FixedWindowRateLimiter, enabled: bool = True) -> None:
        """
        Initialize guard.

        Args:
            limiter: Shared limiter holding per-client windows
            enabled: When False every request is admitted untouched
        """
        self.limiter = limiter
        self.enabled = enabled

    def check(self, key: str, response_headers: MutableMapping[str, str]) -> QuotaSnapshot | None:
        """
        Count one request for key and reject it when the quota is exhausted.

        Args:
            key: Client identifier
            response_headers: Outgoing headers, updated with the quota headers

        Returns:
            QuotaSnapshot | None: Snapshot for admitted requests (None when disabled)

        Raises:
            RateLimitExceeded: Quota exhausted for the current window
        """
        if not self.enabled:
            return None

        snapshot = self.limiter.hit(key)
        headers = self.quota_headers(snapshot)
        response_headers.update(headers)

        if snapshot.is_blocked:
            self.reject(headers, signal=snapshot.to_signal())
        return snapshot

    @staticmethod
    def quota_headers(snapshot: QuotaSnapshot) -> dict[str, str]:
        """Headers describing the quota after a hit (reset as epoch seconds)."""
        return {
            LIMIT_HEADER: str(snapshot.limit),
            REMAINING_HEADER: str(snapshot.remaining),
            RESET_HEADER: str(math.ceil(snapshot.reset_at)),
        }

    def reject(
        self,
        headers: Mapping[str, str],
        signal: QuotaSignal | None = None,
    ) -> NoReturn:
        """
        Raise the client-facing rejection.

        The cooldown comes from the quota signal when one is given, otherwise
        from the X-RateLimit-Reset value among headers.

        Args:
            headers: Outgoing response headers
            signal: Quota signal of the rejected hit, when available

        Raises:
            RateLimitExceeded: Always
        """
        try:
            cooldown = resolve_cooldown(signal, _header_value(headers, RESET_HEADER))
        except Exception as e:
            logger.debug(f"Cooldown computation failed: {type(e).__name__}: {e}")
            cooldown = None

        outgoing = dict(headers)
        if cooldown is not None:
            outgoing[RETRY_AFTER_HEADER] = str(cooldown)

        logger.info(
            "Request throttled",
            extra={"retry_after": cooldown},
        )
        raise RateLimitExceeded(
            rejection_message(cooldown),
            retry_after=cooldown,
            headers=outgoing,
        )


def _header_value(headers: Mapping[str, str], name: str) -> str | None:
    value = headers.get(name)
    if value is None:
        value = headers.get(name.lower())
    return value
