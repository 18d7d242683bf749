"""
Google Generative AI clients.

Factories for the embedding model and chat model used by the RAG pipeline.
API keys come from settings, falling back to GOOGLE_API_KEY in the
environment (a .env file is loaded on import).

Dependencies: langchain_google_genai, python-dotenv
System role: Model provider boundary
"""

import logging

from dotenv import load_dotenv
from langchain_core.embeddings import Embeddings
from langchain_core.language_models import BaseChatModel
from langchain_google_genai import ChatGoogleGenerativeAI, GoogleGenerativeAIEmbeddings

from umkm_rag.configs.embedding import EmbeddingSettings
from umkm_rag.configs.llm import LLMSettings

logger = logging.getLogger(__name__)
load_dotenv()


def create_embeddings(settings: EmbeddingSettings) -> Embeddings:
    """
    Create the Google embedding client.

    Args:
        settings: Embedding configuration

    Returns:
        Embeddings: GoogleGenerativeAIEmbeddings instance
    """
    kwargs = {"model": settings.model}
    if settings.api_key is not None:
        kwargs["google_api_key"] = settings.api_key

    logger.info(f"Initializing embeddings: model={settings.model}")
    return GoogleGenerativeAIEmbeddings(**kwargs)


def create_chat_model(settings: LLMSettings) -> BaseChatModel:
    """
    Create the Gemini chat model.

    Args:
        settings: Language model configuration

    Returns:
        BaseChatModel: ChatGoogleGenerativeAI instance
    """
    kwargs = {
        "model": settings.model,
        "temperature": settings.temperature,
        "max_output_tokens": settings.max_output_tokens,
    }
    if settings.api_key is not None:
        kwargs["google_api_key"] = settings.api_key

    logger.info(
        f"Initializing chat model: model={settings.model}, "
        f"temperature={settings.temperature}"
    )
    return ChatGoogleGenerativeAI(**kwargs)
