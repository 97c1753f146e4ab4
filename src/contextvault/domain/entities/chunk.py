"""Chunk entity - text segment with embedding and source metadata."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any
from uuid import UUID

from contextvault.domain.value_objects import DEFAULT_CONTEXT_WEIGHT


def _as_int(value: Any, default: int) -> int:
    """Integer metadata value, or the default when missing or non-numeric."""
    if isinstance(value, bool):
        return default
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        return default


@dataclass
class Chunk:
    """Chunk - text segment of a source with its vector embedding."""

    id: UUID
    content: str
    embedding: list[float]
    metadata: dict[str, Any] = field(default_factory=dict)
    created_at: datetime | None = None

    @property
    def source_type(self) -> str:
        value = self.metadata.get("source_type")
        return str(value) if value else "unknown"

    @property
    def source_id(self) -> str | None:
        value = self.metadata.get("source_id")
        return str(value) if value is not None else None

    @property
    def title(self) -> str:
        value = self.metadata.get("title")
        return str(value) if value else "Unknown Source"

    @property
    def chunk_index(self) -> int:
        return _as_int(self.metadata.get("chunk_index"), 0)

    @property
    def folder_id(self) -> str | None:
        value = self.metadata.get("folder_id")
        return str(value) if value is not None else None

    @property
    def context_weight(self) -> int:
        return _as_int(self.metadata.get("context_weight"), DEFAULT_CONTEXT_WEIGHT)


@dataclass
class SearchResult:
    """Chunk returned by a similarity search, with its score."""

    chunk: Chunk
    similarity: float

    @property
    def metadata(self) -> dict[str, Any]:
        return self.chunk.metadata

    @property
    def content(self) -> str:
        return self.chunk.content
