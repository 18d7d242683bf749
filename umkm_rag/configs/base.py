"""
Shared settings base for the UMKM RAG service.

Every config section reads the process environment and an optional .env
file. Fields defined here are read without a prefix (DEBUG, LOG_LEVEL).

Dependencies: pydantic_settings
System role: Foundation for all configuration classes
"""

from pydantic import Field
from pydantic_settings import BaseSettings as PydanticBaseSettings, SettingsConfigDict


class BaseSettings(PydanticBaseSettings):
    """Common .env handling plus the app-wide debug and log level switches."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    debug: bool = Field(
        default=False,
        description="Run FastAPI in debug mode (tracebacks in error responses)",
    )
    log_level: str = Field(
        default="INFO",
        description="Root logging level applied at startup",
    )
