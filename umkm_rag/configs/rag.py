"""
RAG pipeline configuration settings.

Dataset location, chunking parameters and retrieval parameters.

Dependencies: pydantic, pydantic_settings
System role: Configuration for index build and retrieval
"""

from pathlib import Path

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_DATASET_PATH = Path(__file__).resolve().parent.parent / "data" / "dataset_umkm.json"


class RAGSettings(BaseSettings):
    """Dataset, chunking and retrieval configuration."""

    model_config = SettingsConfigDict(
        env_prefix="RAG_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    dataset_path: Path = Field(
        default=DEFAULT_DATASET_PATH,
        description="JSON dataset file (single object or array of objects)",
    )

    chunk_size: int = Field(default=1000, gt=0, description="Maximum chunk size in characters")
    chunk_overlap: int = Field(default=200, ge=0, description="Overlap between consecutive chunks")

    top_k: int = Field(default=5, ge=1, description="Number of chunks retrieved per question")
    score_threshold: float | None = Field(
        default=None,
        ge=-1.0,
        le=1.0,
        description="Drop retrieved chunks with cosine similarity below this value (disabled when unset)",
    )

    @model_validator(mode="after")
    def _overlap_smaller_than_chunk(self) -> "RAGSettings":
        if self.chunk_overlap >= self.chunk_size:
            raise ValueError(
                f"RAG_CHUNK_OVERLAP ({self.chunk_overlap}) must be smaller than "
                f"RAG_CHUNK_SIZE ({self.chunk_size})"
            )
        return self
