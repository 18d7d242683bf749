"""
Vector database boundary layer.

- MemoryVectorIndex: in-memory cosine-similarity index (LangChain VectorStore)

Dependencies: numpy, langchain_core
System role: Vector store adapter for RAG retrieval
"""

from umkm_rag.boundary.vdb.memory_store import MemoryVectorIndex
from umkm_rag.boundary.vdb.vector_schemas import VectorSearchResult

__all__ = ["MemoryVectorIndex", "VectorSearchResult"]
