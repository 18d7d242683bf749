"""
Dataset parsing task.

Converts the JSON dataset into LangChain Documents, one per record, with a
deterministic plain-text rendering of each record as page content.

Dependencies: langchain_core
System role: First stage of index build pipeline
"""

import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from langchain_core.documents import Document

from umkm_rag.core.exceptions import DatasetParseError, DatasetReadError

logger = logging.getLogger(__name__)

INDENT_STEP = "  "


def render_scalar(value: Any) -> str:
    """Render a value on a single line."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (Mapping, list)):
        return json.dumps(value, ensure_ascii=False, separators=(",", ":"))
    return str(value)


def _flatten_lines(record: Mapping[str, Any], indent: str, lines: list[str]) -> None:
    for key, value in record.items():
        if isinstance(value, Mapping):
            lines.append(f"{indent}{key}:")
            _flatten_lines(value, indent + INDENT_STEP, lines)
        elif isinstance(value, list):
            lines.append(f"{indent}{key}: {', '.join(render_scalar(item) for item in value)}")
        else:
            lines.append(f"{indent}{key}: {render_scalar(value)}")


def flatten_record(record: Any) -> str:
    """
    Render a record as indented "key: value" lines.

    Nested mappings open a "key:" line and indent their fields by two spaces.
    Arrays are joined with ", ". Non-mapping records render as one line.

    Args:
        record: Parsed JSON value

    Returns:
        str: Stripped text rendering
    """
    if not isinstance(record, Mapping):
        return render_scalar(record).strip()

    lines: list[str] = []
    _flatten_lines(record, "", lines)
    return "\n".join(lines).strip()


class ParsingTask:
    """Parse a JSON dataset file into LangChain Documents."""

    def parse(self, dataset_path: str | Path) -> list[Document]:
        """
        Parse dataset into Documents.

        A top-level object yields one Document (index 0); an array yields one
        Document per element in order.

        Args:
            dataset_path: Path to UTF-8 JSON dataset

        Returns:
            list[Document]: Documents with flattened content and record metadata

        Raises:
            DatasetReadError: File missing or unreadable
            DatasetParseError: Invalid JSON, non-UTF-8 content, scalar or empty dataset
        """
        path = Path(dataset_path)
        data = self._load(path)

        if isinstance(data, Mapping):
            records = [data]
        elif isinstance(data, list):
            if not data:
                raise DatasetParseError("Dataset contains no records", str(path))
            records = data
        else:
            raise DatasetParseError(
                f"Dataset must be a JSON object or array, got {type(data).__name__}",
                str(path),
            )

        documents = [
            Document(
                page_content=flatten_record(record),
                metadata=self._metadata(record, path.name, index),
            )
            for index, record in enumerate(records)
        ]

        logger.info(f"Loaded {len(documents)} documents from {path.name}")
        return documents

    @staticmethod
    def _load(path: Path) -> Any:
        try:
            raw = path.read_bytes()
        except OSError as e:
            raise DatasetReadError(
                f"Cannot read dataset: {e.strerror or e}", str(path)
            ) from e

        try:
            return json.loads(raw.decode("utf-8"))
        except UnicodeDecodeError as e:
            raise DatasetParseError("Dataset is not valid UTF-8", str(path)) from e
        except json.JSONDecodeError as e:
            raise DatasetParseError(
                f"Invalid JSON at line {e.lineno} column {e.colno}: {e.msg}",
                str(path),
            ) from e

    @staticmethod
    def _metadata(record: Any, source: str, index: int) -> dict[str, Any]:
        metadata = dict(record) if isinstance(record, Mapping) else {}
        metadata["source"] = source
        metadata["index"] = index
        return metadata
