"""
Vector index build task.

Embeds chunks in batches and builds the in-memory index once every batch
has succeeded.

Dependencies: langchain_core, umkm_rag.boundary.vdb
System role: Final stage of index build pipeline
"""

import logging

from langchain_core.documents import Document
from langchain_core.embeddings import Embeddings

from umkm_rag.boundary.vdb.memory_store import MemoryVectorIndex
from umkm_rag.core.exceptions import EmbeddingUnavailable

logger = logging.getLogger(__name__)


class VectorStoreTask:
    """Embed chunks and build the in-memory vector index."""

    def __init__(self, embeddings: Embeddings, batch_size: int = 100) -> None:
        """
        Initialize vector store task.

        Args:
            embeddings: Embedding provider
            batch_size: Texts per embedding request

        Raises:
            ValueError: When batch_size is not positive
        """
        if batch_size <= 0:
            raise ValueError(f"batch_size must be positive, got {batch_size}")

        self._embeddings = embeddings
        self.batch_size = batch_size

    async def build(self, documents: list[Document]) -> MemoryVectorIndex:
        """
        Embed documents and build the index.

        Args:
            documents: Chunked documents

        Returns:
            MemoryVectorIndex: Index over all chunks, in input order

        Raises:
            ValueError: When documents list is empty
            EmbeddingUnavailable: When any embedding request fails
        """
        if not documents:
            raise ValueError("No documents to index")

        texts = [doc.page_content for doc in documents]
        vectors: list[list[float]] = []

        for start in range(0, len(texts), self.batch_size):
            batch = texts[start : start + self.batch_size]
            try:
                vectors.extend(await self._embeddings.aembed_documents(batch))
            except Exception as e:
                logger.exception(
                    "Failed to embed chunks",
                    extra={"batch_start": start, "batch_size": len(batch)},
                )
                raise EmbeddingUnavailable(
                    f"Failed to embed chunks: {type(e).__name__}",
                    operation="embed_documents",
                    details={"batch_start": start},
                ) from e

        index = MemoryVectorIndex.from_embeddings(vectors, documents, self._embeddings)
        logger.info(
            "Built vector index",
            extra={"chunk_count": len(index), "dimension": index.dimension},
        )
        return index
