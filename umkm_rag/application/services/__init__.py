"""Service orchestrators."""

from .rag_service import RAGService

__all__ = ["RAGService"]
