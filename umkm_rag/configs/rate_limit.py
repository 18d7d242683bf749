"""
Rate limiting configuration settings.

Dependencies: pydantic, pydantic_settings
System role: Request admission limits for the RAG endpoints
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class RateLimitSettings(BaseSettings):
    """Fixed-window request limits applied per client."""

    model_config = SettingsConfigDict(
        env_prefix="RATE_LIMIT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    enabled: bool = Field(default=True, description="Enforce request limits")
    window_seconds: float = Field(default=60.0, gt=0, description="Length of the rate limit window")
    max_requests: int = Field(default=5, ge=1, description="Requests admitted per client per window")
