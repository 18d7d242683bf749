"""
Pipeline result model for the index build.

Dependencies: pydantic
System role: Return type for DocumentPipeline.build()
"""

from pydantic import BaseModel, Field


class PipelineResult(BaseModel):
    """Result of index build pipeline execution."""

    document_count: int = Field(description="Number of dataset records loaded")
    chunk_count: int = Field(description="Number of chunks indexed")
    embedding_dimension: int | None = Field(description="Dimension of the indexed vectors")
    processing_time_ms: float = Field(description="Total processing time in milliseconds")
