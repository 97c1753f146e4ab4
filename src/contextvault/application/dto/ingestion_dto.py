"""Ingestion DTOs."""

from dataclasses import dataclass, field
from typing import Any


@dataclass
class IngestInput:
    """Input for ingesting one source into context memory."""

    source_type: str
    source_id: str
    title: str
    full_text: str
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass
class IngestResult:
    """Outcome of ingesting one source."""

    source_type: str
    source_id: str
    total_chunks: int
    saved: int
    skipped: int

    @property
    def failed_entirely(self) -> bool:
        return self.total_chunks > 0 and self.saved == 0


@dataclass
class PopulateResult:
    """Outcome of re-ingesting all existing sources."""

    processed: int = 0
    failed: int = 0
    chunks_saved: int = 0


@dataclass
class ContextStats:
    """Available sources per type and chunks already in the store."""

    available_sources: dict[str, int]
    existing_chunks: int

    @property
    def total_available(self) -> int:
        return sum(self.available_sources.values())
