"""
Grounded answer generation chain.

Retrieves context for a question, renders RAG_PROMPT and asks the chat model
for an answer. Short-circuits to FALLBACK_ANSWER when nothing is retrieved.

Dependencies: langchain_core, umkm_rag.core.retriever
System role: RAG answer generation
"""

import logging

from langchain_core.language_models import BaseChatModel
from langchain_core.output_parsers import StrOutputParser
from langchain_core.runnables import Runnable

from umkm_rag.boundary.vdb import VectorSearchResult
from umkm_rag.core.exceptions import GenerationUnavailable
from umkm_rag.core.retriever import Retriever
from umkm_rag.observability.log_utils import safe_log_value

from .rag_prompt import FALLBACK_ANSWER, RAG_PROMPT

logger = logging.getLogger(__name__)

CONTEXT_SEPARATOR = "\n\n"


def format_context(results: list[VectorSearchResult]) -> str:
    """Join chunk texts in retrieval order, separated by a blank line."""
    return CONTEXT_SEPARATOR.join(result.content for result in results)


class RAGChain:
    """Retrieve -> prompt -> chat model -> string answer."""

    def __init__(self, retriever: Retriever, llm: BaseChatModel | Runnable) -> None:
        """
        Initialize chain.

        Args:
            retriever: Retriever over the built index
            llm: Chat model (any Runnable accepting prompt values)
        """
        self._retriever = retriever
        self._llm = llm
        self._chain = RAG_PROMPT | llm | StrOutputParser()

    async def ainvoke(self, question: str) -> str:
        """
        Answer question from retrieved context.

        Args:
            question: User question

        Returns:
            str: Model answer, or FALLBACK_ANSWER when no context was retrieved

        Raises:
            EmbeddingUnavailable: Question could not be embedded
            GenerationUnavailable: Chat model call failed
        """
        results = await self._retriever.aretrieve(question)
        if not results:
            logger.info("No context retrieved, returning fallback answer")
            return FALLBACK_ANSWER

        logger.info(
            f"Retrieved {len(results)} chunks for question: {safe_log_value(question, max_length=80)}"
        )

        try:
            return await self._chain.ainvoke(
                {"context": format_context(results), "question": question}
            )
        except Exception as e:
            logger.exception("Chat model call failed")
            raise GenerationUnavailable(
                f"Language model call failed: {type(e).__name__}",
                model=getattr(self._llm, "model", None),
            ) from e
