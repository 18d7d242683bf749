"""
RAG service for dataset question answering.

Owns the vector index and generation chain. Builds them once at startup and
publishes the chain only after the whole build succeeded.

Dependencies: umkm_rag.core.document_processing, umkm_rag.core.rag_chain
System role: RAG service orchestration layer
"""

import asyncio
import logging

from langchain_core.embeddings import Embeddings
from langchain_core.language_models import BaseChatModel
from langchain_core.runnables import Runnable

from umkm_rag.boundary.vdb import MemoryVectorIndex
from umkm_rag.core.document_processing import DocumentPipeline, PipelineResult
from umkm_rag.core.exceptions import ChainNotInitialized
from umkm_rag.core.rag_chain import INSIGHTS_PROMPT, RAGChain
from umkm_rag.core.retriever import Retriever
from umkm_rag.observability.log_utils import log_with_context, safe_log_value

logger = logging.getLogger(__name__)


class RAGService:
    """
    RAG orchestrator.

    Lifecycle: construct, await initialize() once, then answer queries.
    Queries before a successful initialize() raise ChainNotInitialized.
    """

    def __init__(
        self,
        pipeline: DocumentPipeline,
        embeddings: Embeddings,
        llm: BaseChatModel | Runnable,
        top_k: int = 5,
        score_threshold: float | None = None,
    ) -> None:
        """
        Initialize RAG service.

        Args:
            pipeline: Index build pipeline
            embeddings: Provider used to embed questions
            llm: Chat model for answer generation
            top_k: Chunks retrieved per question
            score_threshold: Optional minimum similarity for retrieved chunks
        """
        self._pipeline = pipeline
        self._embeddings = embeddings
        self._llm = llm
        self._top_k = top_k
        self._score_threshold = score_threshold

        self._index: MemoryVectorIndex | None = None
        self._chain: RAGChain | None = None
        self._build_result: PipelineResult | None = None
        self._build_lock = asyncio.Lock()

    @property
    def is_ready(self) -> bool:
        return self._chain is not None

    @property
    def index_size(self) -> int:
        return len(self._index) if self._index is not None else 0

    @property
    def build_result(self) -> PipelineResult | None:
        return self._build_result

    async def initialize(self) -> PipelineResult:
        """
        Build the index and publish the chain.

        Returns:
            PipelineResult: Build statistics (cached after the first success)

        Raises:
            DatasetReadError: Dataset missing or unreadable
            DatasetParseError: Dataset content invalid
            EmbeddingUnavailable: Embedding provider failed during build
        """
        async with self._build_lock:
            if self._build_result is not None:
                return self._build_result

            index, result = await self._pipeline.build()
            retriever = Retriever(
                index,
                self._embeddings,
                k=self._top_k,
                score_threshold=self._score_threshold,
            )

            self._index = index
            self._build_result = result
            self._chain = RAGChain(retriever, self._llm)

        log_with_context(
            logger,
            logging.INFO,
            "RAG system initialized successfully",
            document_count=result.document_count,
            chunk_count=result.chunk_count,
            processing_time_ms=round(result.processing_time_ms, 2),
        )
        return result

    async def answer(self, question: str) -> str:
        """
        Answer a question from the dataset.

        Args:
            question: User question

        Returns:
            str: Generated answer or the fallback answer

        Raises:
            ChainNotInitialized: initialize() has not completed
            EmbeddingUnavailable: Question could not be embedded
            GenerationUnavailable: Chat model call failed
        """
        if self._chain is None:
            raise ChainNotInitialized()

        logger.info(f"Processing question: {safe_log_value(question, max_length=80)}")
        answer = await self._chain.ainvoke(question)
        logger.info(f"Generated answer ({len(answer)} chars)")
        return answer

    async def insights(self) -> str:
        """Generate key insights and strategies over the dataset."""
        return await self.answer(INSIGHTS_PROMPT)
