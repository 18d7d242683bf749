"""
Answer generation chain.

Exports: RAGChain, RAG_PROMPT, INSIGHTS_PROMPT, FALLBACK_ANSWER
"""

from .rag_chain import RAGChain, format_context
from .rag_prompt import FALLBACK_ANSWER, INSIGHTS_PROMPT, RAG_PROMPT

__all__ = [
    "RAGChain",
    "format_context",
    "RAG_PROMPT",
    "INSIGHTS_PROMPT",
    "FALLBACK_ANSWER",
]
