"""
Text chunking task using RecursiveCharacterTextSplitter.

Splits documents into retrievable chunks while preserving context.

Dependencies: langchain_text_splitters
System role: Second stage of index build pipeline
"""

from langchain_core.documents import Document
from langchain_text_splitters import RecursiveCharacterTextSplitter

# Paragraph, line, sentence punctuation, clause punctuation, word, character
SEPARATORS = ["\n\n", "\n", ".", "!", "?", ";", ",", " ", ""]


class ChunkingTask:
    """Split documents into chunks using RecursiveCharacterTextSplitter."""

    def __init__(
        self,
        chunk_size: int = 1000,
        chunk_overlap: int = 200,
    ) -> None:
        """
        Initialize chunking task with splitter configuration.

        Args:
            chunk_size: Maximum chunk size in characters
            chunk_overlap: Overlap between consecutive chunks

        Raises:
            ValueError: When sizes are invalid or overlap is not smaller than chunk size
        """
        if chunk_size <= 0:
            raise ValueError(f"chunk_size must be positive, got {chunk_size}")
        if chunk_overlap < 0:
            raise ValueError(f"chunk_overlap must not be negative, got {chunk_overlap}")
        if chunk_overlap >= chunk_size:
            raise ValueError(
                f"chunk_overlap ({chunk_overlap}) must be smaller than chunk_size ({chunk_size})"
            )

        self.chunk_size = chunk_size
        self.chunk_overlap = chunk_overlap
        self._splitter = RecursiveCharacterTextSplitter(
            chunk_size=chunk_size,
            chunk_overlap=chunk_overlap,
            separators=SEPARATORS,
            add_start_index=True,
            strip_whitespace=False,
            length_function=len,
        )

    def chunk(self, documents: list[Document]) -> list[Document]:
        """
        Split documents into chunks.

        Args:
            documents: LangChain Documents to split

        Returns:
            list[Document]: Chunks carrying parent metadata plus start_index

        Raises:
            ValueError: When documents list is empty
        """
        if not documents:
            raise ValueError("No documents to chunk")

        return self._splitter.split_documents(documents)
