"""Domain entities."""

from contextvault.domain.entities.chunk import Chunk, SearchResult
from contextvault.domain.entities.context_bundle import ContextBundle
from contextvault.domain.entities.source import SourceRecord

__all__ = [
    "Chunk",
    "ContextBundle",
    "SearchResult",
    "SourceRecord",
]
