"""
Embedding provider configuration settings.

Dependencies: pydantic, pydantic_settings
System role: Embedding configuration for index build and query retrieval
"""

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class EmbeddingSettings(BaseSettings):
    """Embedding provider configuration (Google Generative AI embeddings)."""

    model_config = SettingsConfigDict(
        env_prefix="EMBEDDING_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    api_key: SecretStr | None = Field(
        default=None,
        description="API key for the embedding provider (falls back to GOOGLE_API_KEY when unset)",
    )
    model: str = Field(
        default="models/text-embedding-004",
        description="Embedding model identifier",
    )
    batch_size: int = Field(
        default=100,
        gt=0,
        description="Number of texts sent per embedding request during index build",
    )
