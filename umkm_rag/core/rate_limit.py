"""
Fixed-window rate limiting and cooldown computation.

Tracks per-client request counts in fixed windows and derives the cooldown
reported to throttled clients, either from the limiter's own quota signal or
from an X-RateLimit-Reset header value.

Dependencies: threading, datetime, email.utils (stdlib)
System role: Request admission state machine for the API guard
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
import logging
import math
import threading
import time
from typing import Callable

logger = logging.getLogger(__name__)

EPOCH_MS_THRESHOLD = 1e12
GENERIC_REJECTION_MESSAGE = "Too many requests. Try again shortly."


@dataclass(frozen=True)
class QuotaSignal:
    """Remaining quota and time to reset, as reported by a limiter."""

    remaining_quota: int
    milliseconds_until_reset: int


@dataclass(frozen=True)
class QuotaSnapshot:
    """Outcome of a single limiter hit."""

    key: str
    limit: int
    count: int
    reset_at: float
    now: float

    @property
    def is_blocked(self) -> bool:
        return self.count > self.limit

    @property
    def remaining(self) -> int:
        return max(0, self.limit - self.count)

    def to_signal(self) -> QuotaSignal:
        """Normalise into the signal consumed by cooldown computation."""
        ms_until_reset = max(0, math.ceil((self.reset_at - self.now) * 1000))
        return QuotaSignal(
            remaining_quota=self.limit - self.count,
            milliseconds_until_reset=ms_until_reset,
        )


@dataclass
class _WindowState:
    count: int
    reset_at: float


class FixedWindowRateLimiter:
    """
    Per-key fixed-window counter.

    A key is admitted while its count within the current window is at most
    max_requests. The window starts on the first hit and the counter resets
    to zero once the clock reaches reset_at. Rejected hits still count.
    """

    def __init__(
        self,
        max_requests: int = 5,
        window_seconds: float = 60.0,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """
        Initialize limiter.

        Args:
            max_requests: Requests admitted per key per window
            window_seconds: Window length in seconds
            clock: Returns the current epoch time in seconds
        """
        if max_requests < 1:
            raise ValueError("max_requests must be at least 1")
        if window_seconds <= 0:
            raise ValueError("window_seconds must be positive")

        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._clock = clock
        self._states: dict[str, _WindowState] = {}
        self._lock = threading.Lock()
        self._next_sweep_at = clock() + window_seconds

    def hit(self, key: str) -> QuotaSnapshot:
        """
        Register one request for key and report the resulting quota.

        Args:
            key: Client identifier

        Returns:
            QuotaSnapshot: Count and window reset time after this hit
        """
        with self._lock:
            now = self._clock()
            if now >= self._next_sweep_at:
                self._sweep(now)

            state = self._states.get(key)
            if state is None or now >= state.reset_at:
                state = _WindowState(count=0, reset_at=now + self.window_seconds)
                self._states[key] = state

            state.count += 1
            return QuotaSnapshot(
                key=key,
                limit=self.max_requests,
                count=state.count,
                reset_at=state.reset_at,
                now=now,
            )

    def reset(self, key: str | None = None) -> None:
        """Forget one key, or every key when key is None."""
        with self._lock:
            if key is None:
                self._states.clear()
            else:
                self._states.pop(key, None)

    @property
    def tracked_keys(self) -> int:
        return len(self._states)

    def _sweep(self, now: float) -> None:
        expired = [key for key, state in self._states.items() if now >= state.reset_at]
        for key in expired:
            del self._states[key]
        self._next_sweep_at = now + self.window_seconds
        if expired:
            logger.debug(f"Swept {len(expired)} expired rate limit windows")


def cooldown_from_signal(signal: QuotaSignal | None) -> int | None:
    """
    Cooldown in whole seconds from a quota signal.

    Only an exhausted quota (remaining_quota < 0) yields a cooldown.
    """
    if signal is None or signal.remaining_quota >= 0:
        return None
    return math.ceil(signal.milliseconds_until_reset / 1000)


def parse_reset_header(value: str | int | float | None) -> int | None:
    """
    Parse an X-RateLimit-Reset value into epoch milliseconds.

    Accepts epoch seconds, epoch milliseconds (values above 1e12) and date
    strings in ISO 8601 or RFC 1123 form. Naive timestamps are read as UTC.

    Args:
        value: Raw header value

    Returns:
        int | None: Epoch milliseconds, or None when the value is unusable
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, (int, float)):
        number = float(value)
    else:
        text = value.strip()
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            return _parse_date_ms(text)

    if not math.isfinite(number):
        return None
    if number > EPOCH_MS_THRESHOLD:
        return int(number)
    return int(number * 1000)


def _parse_date_ms(text: str) -> int | None:
    try:
        parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        try:
            parsed = parsedate_to_datetime(text)
        except (TypeError, ValueError, IndexError):
            return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return int(parsed.timestamp() * 1000)


def cooldown_from_reset_header(
    value: str | int | float | None,
    now_ms: int | None = None,
) -> int | None:
    """
    Cooldown in whole seconds until the reset time carried by a header.

    Args:
        value: Raw X-RateLimit-Reset value
        now_ms: Current epoch milliseconds (defaults to the system clock)

    Returns:
        int | None: Seconds to wait, or None when the reset is unknown or past
    """
    reset_ms = parse_reset_header(value)
    if reset_ms is None:
        return None
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    if reset_ms <= now_ms:
        return None
    return math.ceil((reset_ms - now_ms) / 1000)


def resolve_cooldown(
    signal: QuotaSignal | None,
    reset_header: str | int | float | None = None,
    now_ms: int | None = None,
) -> int | None:
    """Cooldown from the quota signal, falling back to the reset header."""
    cooldown = cooldown_from_signal(signal)
    if cooldown is not None:
        return cooldown
    return cooldown_from_reset_header(reset_header, now_ms=now_ms)


def rejection_message(cooldown: int | None) -> str:
    """Client-facing message for a throttled request."""
    if cooldown is None:
        return GENERIC_REJECTION_MESSAGE
    return f"Too many requests. Try again in {cooldown} seconds."
