"""
Index build pipeline.

Loads the dataset, chunks it, embeds the chunks and builds the in-memory
vector index.

Dependencies: langchain_core, langchain_text_splitters, numpy, pydantic
System role: Index build entrypoint
"""

from .entrypoint import DocumentPipeline
from .models import PipelineResult

__all__ = [
    "DocumentPipeline",
    "PipelineResult",
]
