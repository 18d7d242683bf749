"""Request guards applied as FastAPI dependencies."""

from .throttler_guard import ThrottlerGuard

__all__ = ["ThrottlerGuard"]
