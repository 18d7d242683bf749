"""
In-memory vector index.

Holds every chunk embedding of the dataset in a single normalised numpy
matrix and answers cosine-similarity top-k queries. Built once at startup,
read-only afterwards.

Dependencies: numpy, langchain_core
System role: Vector store for RAG retrieval
"""

from collections.abc import Iterable, Sequence
from typing import Any

import numpy as np
from langchain_core.documents import Document
from langchain_core.embeddings import Embeddings
from langchain_core.vectorstores import VectorStore

from umkm_rag.boundary.vdb.vector_schemas import VectorSearchResult


class MemoryVectorIndex(VectorStore):
    """
    Immutable cosine-similarity index over (vector, Document) entries.

    Vectors are L2-normalised once at construction. Searches never mutate
    state, so concurrent readers need no locking.
    """

    def __init__(
        self,
        vectors: Sequence[Sequence[float]],
        documents: Sequence[Document],
        embedding: Embeddings | None = None,
    ) -> None:
        """
        Initialize index from precomputed vectors.

        Args:
            vectors: One embedding per document, all of equal dimension
            documents: Documents in insertion order
            embedding: Embeddings used to vectorise text queries

        Raises:
            ValueError: Mismatched lengths or inconsistent dimensions
        """
        if len(vectors) != len(documents):
            raise ValueError(
                f"Got {len(vectors)} vectors for {len(documents)} documents"
            )

        dimensions = {len(vector) for vector in vectors}
        if len(dimensions) > 1:
            raise ValueError(f"Inconsistent embedding dimensions: {sorted(dimensions)}")
        if 0 in dimensions:
            raise ValueError("Embedding vectors must not be empty")

        self._embedding = embedding
        self._documents = [
            Document(page_content=doc.page_content, metadata=dict(doc.metadata))
            for doc in documents
        ]
        self._dimension = dimensions.pop() if dimensions else None

        if self._dimension is None:
            matrix = np.zeros((0, 0), dtype=np.float64)
        else:
            matrix = np.asarray(vectors, dtype=np.float64)

        norms = np.linalg.norm(matrix, axis=1, keepdims=True)
        self._matrix = np.divide(
            matrix, norms, out=np.zeros_like(matrix), where=norms > 0
        )
        self._matrix.setflags(write=False)

    @classmethod
    def from_embeddings(
        cls,
        vectors: Sequence[Sequence[float]],
        documents: Sequence[Document],
        embedding: Embeddings | None = None,
    ) -> "MemoryVectorIndex":
        """Build an index from vectors computed ahead of time."""
        return cls(vectors, documents, embedding)

    @classmethod
    def from_texts(
        cls,
        texts: list[str],
        embedding: Embeddings,
        metadatas: list[dict] | None = None,
        **kwargs: Any,
    ) -> "MemoryVectorIndex":
        """Embed texts and build an index from them."""
        metadatas = metadatas or [{} for _ in texts]
        documents = [
            Document(page_content=text, metadata=metadata)
            for text, metadata in zip(texts, metadatas, strict=True)
        ]
        return cls(embedding.embed_documents(list(texts)), documents, embedding)

    @property
    def embeddings(self) -> Embeddings | None:
        return self._embedding

    @property
    def dimension(self) -> int | None:
        """Embedding dimension, None for an empty index."""
        return self._dimension

    def __len__(self) -> int:
        return len(self._documents)

    def add_texts(
        self,
        texts: Iterable[str],
        metadatas: list[dict] | None = None,
        **kwargs: Any,
    ) -> list[str]:
        raise NotImplementedError("MemoryVectorIndex is read-only after construction")

    def add_documents(self, documents: list[Document], **kwargs: Any) -> list[str]:
        raise NotImplementedError("MemoryVectorIndex is read-only after construction")

    def rank_by_vector(self, vector: Sequence[float], k: int) -> list[tuple[int, float]]:
        """
        Rank entries by cosine similarity to vector.

        Args:
            vector: Query embedding
            k: Number of entries to return (clamped to the index size)

        Returns:
            list[tuple[int, float]]: (position, score) pairs, best first,
                ties kept in insertion order

        Raises:
            ValueError: k < 1 or query dimension differs from the index
        """
        if k < 1:
            raise ValueError(f"k must be at least 1, got {k}")
        if not self._documents:
            return []

        query = np.asarray(vector, dtype=np.float64)
        if query.ndim != 1 or query.shape[0] != self._dimension:
            raise ValueError(
                f"Query dimension {query.shape[-1] if query.ndim else 0} "
                f"does not match index dimension {self._dimension}"
            )

        norm = np.linalg.norm(query)
        if norm == 0:
            scores = np.zeros(len(self._documents), dtype=np.float64)
        else:
            scores = self._matrix @ (query / norm)

        order = np.argsort(-scores, kind="stable")[:k]
        return [(int(position), float(scores[position])) for position in order]

    def search_by_vector(self, vector: Sequence[float], k: int = 4) -> list[VectorSearchResult]:
        """Top-k search returning typed results with index positions."""
        return [
            VectorSearchResult(
                content=self._documents[position].page_content,
                metadata=dict(self._documents[position].metadata),
                similarity_score=score,
                position=position,
            )
            for position, score in self.rank_by_vector(vector, k)
        ]

    def similarity_search_with_score_by_vector(
        self,
        embedding: list[float],
        k: int = 4,
        **kwargs: Any,
    ) -> list[tuple[Document, float]]:
        return [
            (self._copy_document(position), score)
            for position, score in self.rank_by_vector(embedding, k)
        ]

    def similarity_search_by_vector(
        self,
        embedding: list[float],
        k: int = 4,
        **kwargs: Any,
    ) -> list[Document]:
        return [doc for doc, _ in self.similarity_search_with_score_by_vector(embedding, k)]

    def similarity_search_with_score(
        self,
        query: str,
        k: int = 4,
        **kwargs: Any,
    ) -> list[tuple[Document, float]]:
        return self.similarity_search_with_score_by_vector(
            self._require_embedding().embed_query(query), k
        )

    def similarity_search(self, query: str, k: int = 4, **kwargs: Any) -> list[Document]:
        return [doc for doc, _ in self.similarity_search_with_score(query, k)]

    async def asimilarity_search_with_score(
        self,
        query: str,
        k: int = 4,
        **kwargs: Any,
    ) -> list[tuple[Document, float]]:
        vector = await self._require_embedding().aembed_query(query)
        return self.similarity_search_with_score_by_vector(vector, k)

    async def asimilarity_search(self, query: str, k: int = 4, **kwargs: Any) -> list[Document]:
        return [doc for doc, _ in await self.asimilarity_search_with_score(query, k)]

    def _select_relevance_score_fn(self):
        # Map cosine similarity [-1, 1] onto [0, 1]
        return lambda score: (score + 1.0) / 2.0

    def _copy_document(self, position: int) -> Document:
        document = self._documents[position]
        return Document(page_content=document.page_content, metadata=dict(document.metadata))

    def _require_embedding(self) -> Embeddings:
        if self._embedding is None:
            raise ValueError("Text search requires an embedding model")
        return self._embedding
