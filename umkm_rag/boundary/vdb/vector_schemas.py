"""
Vector database schemas.

Pydantic models for vector search results.

Dependencies: pydantic
System role: Type definitions for vector operations
"""

from typing import Any

from pydantic import BaseModel, Field


class VectorSearchResult(BaseModel):
    """Single result from vector search."""

    content: str = Field(description="Chunk text content")
    metadata: dict[str, Any] = Field(default_factory=dict, description="Chunk metadata (record fields, source, index, start_index)")
    similarity_score: float = Field(description="Cosine similarity to the query (-1.0 to 1.0)")
    position: int = Field(ge=0, description="Insertion order of the chunk in the index")
