"""
Task modules for the index build pipeline.

Exports: ParsingTask, ChunkingTask, VectorStoreTask
"""

from .chunking_task import ChunkingTask
from .parsing_task import ParsingTask, flatten_record
from .vector_store_task import VectorStoreTask

__all__ = [
    "ParsingTask",
    "flatten_record",
    "ChunkingTask",
    "VectorStoreTask",
]
