"""
RAG domain models and schemas.

Request/response schemas for RAG operations.

Dependencies: pydantic
System role: RAG API contracts
"""

from pydantic import BaseModel, Field


class QueryRequest(BaseModel):
    """Request schema for dataset questions."""

    question: str = Field(min_length=1, description="Natural-language question about the dataset")


class RAGResultResponse(BaseModel):
    """Successful RAG response."""

    message: str
    data: str


class ErrorResponse(BaseModel):
    """Error response schema."""

    message: str = Field(description="Summary of what failed")
    error: str = Field(description="Short cause")
