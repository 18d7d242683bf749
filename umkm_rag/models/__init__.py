"""API request and response models."""

from .rag import ErrorResponse, QueryRequest, RAGResultResponse

__all__ = ["QueryRequest", "RAGResultResponse", "ErrorResponse"]
