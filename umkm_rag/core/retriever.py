"""
Retrieval logic over the in-memory vector index.

Embeds the question and returns the top-k most similar chunks.

Dependencies: langchain_core, umkm_rag.boundary.vdb, umkm_rag.core.exceptions
System role: RAG retrieval business logic
"""

import logging

from langchain_core.embeddings import Embeddings

from umkm_rag.boundary.vdb import MemoryVectorIndex, VectorSearchResult
from umkm_rag.core.exceptions import EmbeddingUnavailable

logger = logging.getLogger(__name__)


class Retriever:
    """Top-k cosine retrieval with optional score threshold."""

    def __init__(
        self,
        index: MemoryVectorIndex,
        embeddings: Embeddings,
        k: int = 5,
        score_threshold: float | None = None,
    ) -> None:
        """
        Initialize retriever.

        Args:
            index: Built vector index
            embeddings: Provider used to embed questions
            k: Number of chunks to retrieve
            score_threshold: Minimum similarity kept (None keeps every top-k hit)
        """
        if k < 1:
            raise ValueError(f"k must be at least 1, got {k}")

        self._index = index
        self._embeddings = embeddings
        self.k = k
        self.score_threshold = score_threshold

    async def aretrieve(self, question: str) -> list[VectorSearchResult]:
        """
        Retrieve chunks relevant to question.

        Args:
            question: User question

        Returns:
            list[VectorSearchResult]: Best matches first

        Raises:
            EmbeddingUnavailable: When the question cannot be embedded
        """
        try:
            query_vector = await self._embeddings.aembed_query(question)
        except Exception as e:
            logger.exception("Failed to embed question")
            raise EmbeddingUnavailable(
                f"Failed to embed question: {type(e).__name__}",
                operation="embed_query",
            ) from e

        results = self._index.search_by_vector(query_vector, k=self.k)
        return self.apply_threshold(results)

    def apply_threshold(self, results: list[VectorSearchResult]) -> list[VectorSearchResult]:
        """Drop results scoring below the configured threshold."""
        if self.score_threshold is None:
            return results
        return [r for r in results if r.similarity_score >= self.score_threshold]
