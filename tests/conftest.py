"""
Shared test fixtures and configuration for entire test suite.

Provides: deterministic embeddings, sample dataset files, chat model stand-ins
Dependencies: pytest, langchain_core
System role: Test infrastructure and fixture management
"""

import json
import re
from collections import Counter
from pathlib import Path

import pytest
from langchain_core.embeddings import Embeddings
from langchain_core.runnables import RunnableLambda

VOCABULARY = [
    "coffee",
    "latte",
    "batik",
    "chili",
    "chips",
    "price",
    "quality",
    "service",
    "engagement",
    "sentiment",
    "positive",
    "negative",
    "neutral",
    "instagram",
    "tiktok",
    "bandung",
    "pekalongan",
    "padang",
]


class KeywordEmbeddings(Embeddings):
    """Bag-of-words embeddings over a fixed vocabulary."""

    def __init__(self, vocabulary: list[str] | None = None) -> None:
        self.vocabulary = vocabulary or VOCABULARY
        self.document_batches: list[list[str]] = []
        self.queries: list[str] = []

    def _vector(self, text: str) -> list[float]:
        counts = Counter(re.findall(r"[a-z]+", text.lower()))
        return [float(counts[word]) for word in self.vocabulary]

    def embed_documents(self, texts: list[str]) -> list[list[float]]:
        self.document_batches.append(list(texts))
        return [self._vector(text) for text in texts]

    def embed_query(self, text: str) -> list[float]:
        self.queries.append(text)
        return self._vector(text)

    async def aembed_documents(self, texts: list[str]) -> list[list[float]]:
        return self.embed_documents(texts)

    async def aembed_query(self, text: str) -> list[float]:
        return self.embed_query(text)


class FailingEmbeddings(Embeddings):
    """Embeddings whose provider is always down."""

    def embed_documents(self, texts: list[str]) -> list[list[float]]:
        raise ConnectionError("embedding quota exhausted")

    def embed_query(self, text: str) -> list[float]:
        raise ConnectionError("embedding quota exhausted")

    async def aembed_documents(self, texts: list[str]) -> list[list[float]]:
        return self.embed_documents(texts)

    async def aembed_query(self, text: str) -> list[float]:
        return self.embed_query(text)


class RecordingLLM:
    """Chat model stand-in that records rendered prompts."""

    def __init__(self, answer: str = "Stub answer from context") -> None:
        self.answer = answer
        self.prompts: list = []
        self.runnable = RunnableLambda(self._respond)

    def _respond(self, prompt_value) -> str:
        self.prompts.append(prompt_value)
        return self.answer

    @property
    def calls(self) -> int:
        return len(self.prompts)

    def last_human_message(self) -> str:
        return self.prompts[-1].to_messages()[-1].content


@pytest.fixture
def keyword_embeddings() -> KeywordEmbeddings:
    """Provide deterministic keyword embeddings."""
    return KeywordEmbeddings()


@pytest.fixture
def failing_embeddings() -> FailingEmbeddings:
    """Provide embeddings that always fail."""
    return FailingEmbeddings()


@pytest.fixture
def recording_llm() -> RecordingLLM:
    """Provide a chat model stand-in that records prompts."""
    return RecordingLLM()


@pytest.fixture
def sample_records() -> list[dict]:
    """Provide three UMKM social media records."""
    return [
        {
            "business_name": "Kopi Senja",
            "city": "Bandung",
            "post_text": "New palm sugar latte with local coffee beans",
            "sentiment": "positive",
            "praised_aspects": ["quality", "innovation"],
            "engagement": {"likes": 1240, "comments": 86},
        },
        {
            "business_name": "Batik Lestari",
            "city": "Pekalongan",
            "post_text": "How one hand-drawn batik sheet is made",
            "sentiment": "neutral",
            "praised_aspects": [],
            "engagement": {"likes": 5320, "comments": 212},
        },
        {
            "business_name": "Keripik Mak Ijah",
            "city": "Padang",
            "post_text": "Chili chips price goes up next week",
            "sentiment": "negative",
            "praised_aspects": ["price"],
            "engagement": {"likes": 310, "comments": 97},
        },
    ]


@pytest.fixture
def dataset_file(tmp_path: Path, sample_records: list[dict]) -> Path:
    """
    Write the sample records to a JSON dataset file.

    Returns:
        Path: Path to dataset file
    """
    path = tmp_path / "dataset_umkm.json"
    path.write_text(json.dumps(sample_records), encoding="utf-8")
    return path
