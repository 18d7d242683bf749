"""
Index build pipeline orchestrator.

Coordinates parsing, chunking, embedding and indexing tasks.

Dependencies: All task modules
System role: Pipeline orchestration (coordinates only)
"""

import logging
from pathlib import Path
import time

from langchain_core.embeddings import Embeddings

from umkm_rag.boundary.vdb.memory_store import MemoryVectorIndex
from umkm_rag.configs.settings import Settings

from .models import PipelineResult
from .tasks import ChunkingTask, ParsingTask, VectorStoreTask

logger = logging.getLogger(__name__)


class DocumentPipeline:
    """Orchestrate index build: parse -> chunk -> embed -> index."""

    def __init__(
        self,
        dataset_path: str | Path,
        embeddings: Embeddings,
        chunk_size: int = 1000,
        chunk_overlap: int = 200,
        batch_size: int = 100,
    ) -> None:
        """
        Initialize pipeline with configuration.

        Args:
            dataset_path: JSON dataset file
            embeddings: Embedding provider
            chunk_size: Maximum chunk size in characters
            chunk_overlap: Overlap between consecutive chunks
            batch_size: Texts per embedding request
        """
        self.dataset_path = Path(dataset_path)
        self._parsing_task = ParsingTask()
        self._chunking_task = ChunkingTask(chunk_size=chunk_size, chunk_overlap=chunk_overlap)
        self._vector_store_task = VectorStoreTask(embeddings, batch_size=batch_size)

    @classmethod
    def from_settings(cls, settings: Settings, embeddings: Embeddings) -> "DocumentPipeline":
        """Create pipeline from application settings."""
        return cls(
            dataset_path=settings.rag.dataset_path,
            embeddings=embeddings,
            chunk_size=settings.rag.chunk_size,
            chunk_overlap=settings.rag.chunk_overlap,
            batch_size=settings.embedding.batch_size,
        )

    async def build(self) -> tuple[MemoryVectorIndex, PipelineResult]:
        """
        Run the full pipeline.

        Returns:
            tuple[MemoryVectorIndex, PipelineResult]: Built index and build statistics

        Raises:
            DatasetReadError: Dataset missing or unreadable
            DatasetParseError: Dataset content invalid
            EmbeddingUnavailable: Embedding provider failed
        """
        start_time = time.perf_counter()

        documents = self._parsing_task.parse(self.dataset_path)
        chunks = self._chunking_task.chunk(documents)
        logger.info(f"Created {len(chunks)} document chunks")

        index = await self._vector_store_task.build(chunks)

        elapsed_ms = (time.perf_counter() - start_time) * 1000
        result = PipelineResult(
            document_count=len(documents),
            chunk_count=len(index),
            embedding_dimension=index.dimension,
            processing_time_ms=elapsed_ms,
        )
        return index, result
