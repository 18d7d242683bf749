"""
Language model configuration settings.

Manages the chat model used by the generation chain.

Dependencies: pydantic, pydantic_settings
System role: LLM configuration for answer generation
"""

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class LLMSettings(BaseSettings):
    """Chat model configuration (Google Gemini via langchain-google-genai)."""

    model_config = SettingsConfigDict(
        env_prefix="LLM_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    api_key: SecretStr | None = Field(
        default=None,
        description="API key for the language model (falls back to GOOGLE_API_KEY when unset)",
    )
    model: str = Field(
        default="gemini-2.0-flash",
        description="Language model identifier",
    )
    temperature: float = Field(
        default=0.7,
        ge=0.0,
        le=2.0,
        description="Sampling temperature",
    )
    max_output_tokens: int = Field(
        default=1000,
        gt=0,
        description="Maximum number of tokens generated per answer",
    )
