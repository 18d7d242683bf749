"""
Test suite for RAGService.

Covers the startup build, readiness, query gating, end-to-end answering
over a small dataset, and build failures.

System role: Verification of RAG orchestration
"""

from pathlib import Path
from unittest.mock import AsyncMock

import pytest
from langchain_core.language_models import FakeListChatModel

from umkm_rag.application.services.rag_service import RAGService
from umkm_rag.core.document_processing import DocumentPipeline, PipelineResult
from umkm_rag.core.exceptions import (
    ChainNotInitialized,
    DatasetReadError,
    EmbeddingUnavailable,
)
from umkm_rag.core.rag_chain import FALLBACK_ANSWER, INSIGHTS_PROMPT


def _service(dataset_path: Path, embeddings, llm, **kwargs) -> RAGService:
    pipeline = DocumentPipeline(dataset_path=dataset_path, embeddings=embeddings)
    return RAGService(pipeline=pipeline, embeddings=embeddings, llm=llm, **kwargs)


class TestInitialize:
    """Test suite for RAGService.initialize."""

    @pytest.mark.asyncio
    async def test_builds_index_from_dataset(
        self, dataset_file: Path, keyword_embeddings, recording_llm
    ) -> None:
        """Test three records load into three documents and at least three chunks."""
        service = _service(dataset_file, keyword_embeddings, recording_llm.runnable)

        result = await service.initialize()

        assert isinstance(result, PipelineResult)
        assert result.document_count == 3
        assert result.chunk_count >= 3
        assert result.embedding_dimension == len(keyword_embeddings.vocabulary)
        assert result.processing_time_ms >= 0
        assert service.is_ready
        assert service.index_size == result.chunk_count

    @pytest.mark.asyncio
    async def test_second_initialize_reuses_first_build(
        self, dataset_file: Path, keyword_embeddings, recording_llm
    ) -> None:
        """Test the build runs once."""
        service = _service(dataset_file, keyword_embeddings, recording_llm.runnable)

        first = await service.initialize()
        second = await service.initialize()

        assert first is second
        assert len(keyword_embeddings.document_batches) == 1

    @pytest.mark.asyncio
    async def test_embeds_in_batches(
        self, dataset_file: Path, keyword_embeddings, recording_llm
    ) -> None:
        """Test chunks are sent to the provider in batch_size groups."""
        pipeline = DocumentPipeline(dataset_path=dataset_file, embeddings=keyword_embeddings, batch_size=2)
        service = RAGService(pipeline=pipeline, embeddings=keyword_embeddings, llm=recording_llm.runnable)

        result = await service.initialize()

        assert [len(batch) for batch in keyword_embeddings.document_batches] == [2, result.chunk_count - 2]

    @pytest.mark.asyncio
    async def test_missing_dataset_leaves_service_unready(
        self, tmp_path: Path, keyword_embeddings, recording_llm
    ) -> None:
        """Test a failed load propagates and never publishes the chain."""
        service = _service(tmp_path / "missing.json", keyword_embeddings, recording_llm.runnable)

        with pytest.raises(DatasetReadError):
            await service.initialize()

        assert not service.is_ready
        assert service.index_size == 0

    @pytest.mark.asyncio
    async def test_embedding_failure_leaves_service_unready(
        self, dataset_file: Path, failing_embeddings, recording_llm
    ) -> None:
        """Test a failed embedding build yields no usable index."""
        service = _service(dataset_file, failing_embeddings, recording_llm.runnable)

        with pytest.raises(EmbeddingUnavailable):
            await service.initialize()

        assert not service.is_ready
        with pytest.raises(ChainNotInitialized):
            await service.answer("coffee")


class TestAnswer:
    """Test suite for RAGService.answer and insights."""

    @pytest.mark.asyncio
    async def test_answer_before_initialize_raises(
        self, dataset_file: Path, keyword_embeddings, recording_llm
    ) -> None:
        """Test queries are refused until the build completes."""
        service = _service(dataset_file, keyword_embeddings, recording_llm.runnable)

        with pytest.raises(ChainNotInitialized, match="RAG chain not initialized"):
            await service.answer("Where is Kopi Senja?")

    @pytest.mark.asyncio
    async def test_unrelated_question_returns_fallback(
        self, dataset_file: Path, keyword_embeddings, recording_llm
    ) -> None:
        """Test a question unrelated to every record gets the fallback answer."""
        service = _service(
            dataset_file, keyword_embeddings, recording_llm.runnable, score_threshold=0.1
        )
        await service.initialize()

        answer = await service.answer("What is the weather on Mars?")

        assert answer == FALLBACK_ANSWER
        assert recording_llm.calls == 0

    @pytest.mark.asyncio
    async def test_unrelated_question_with_default_settings_defers_to_model(
        self, dataset_file: Path, keyword_embeddings, recording_llm
    ) -> None:
        """Test without a threshold the model sees the context and the fallback rule."""
        recording_llm.answer = FALLBACK_ANSWER
        service = _service(dataset_file, keyword_embeddings, recording_llm.runnable)
        await service.initialize()

        answer = await service.answer("What is the weather on Mars?")

        assert answer == FALLBACK_ANSWER
        assert recording_llm.calls == 1
        system_message, human_message = recording_llm.prompts[-1].to_messages()
        assert FALLBACK_ANSWER in system_message.content
        assert "business_name: Kopi Senja" in human_message.content
        assert "Question: What is the weather on Mars?" in human_message.content

    @pytest.mark.asyncio
    async def test_related_question_is_answered_from_context(
        self, dataset_file: Path, keyword_embeddings, recording_llm
    ) -> None:
        """Test a related question reaches the model with the matching record."""
        service = _service(dataset_file, keyword_embeddings, recording_llm.runnable, top_k=1)
        await service.initialize()

        answer = await service.answer("Which batik business posted from Pekalongan?")

        assert answer == recording_llm.answer
        assert "business_name: Batik Lestari" in recording_llm.last_human_message()
        assert "Kopi Senja" not in recording_llm.last_human_message()

    @pytest.mark.asyncio
    async def test_answer_with_chat_model(self, dataset_file: Path, keyword_embeddings) -> None:
        """Test the service returns the chat model text unchanged."""
        llm = FakeListChatModel(responses=["Keripik Mak Ijah raised its chili chips price."])
        service = _service(dataset_file, keyword_embeddings, llm)
        await service.initialize()

        answer = await service.answer("What happened to the chili chips price?")

        assert answer == "Keripik Mak Ijah raised its chili chips price."

    @pytest.mark.asyncio
    async def test_insights_asks_canned_question(
        self, dataset_file: Path, keyword_embeddings, recording_llm
    ) -> None:
        """Test insights runs the insights prompt through answer."""
        service = _service(dataset_file, keyword_embeddings, recording_llm.runnable)
        service.answer = AsyncMock(return_value="report")

        report = await service.insights()

        assert report == "report"
        service.answer.assert_awaited_once_with(INSIGHTS_PROMPT)
