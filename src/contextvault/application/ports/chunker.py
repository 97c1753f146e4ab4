"""Chunker port - split a source text into overlapping windows."""

from typing import Protocol

from contextvault.application.dto.chunking_config import ChunkingConfig


class Chunker(Protocol):
    """Splits text into ordered, stripped, non-empty chunks.

    Text no longer than ``config.chunk_size`` comes back as a single chunk.
    Raises ValidationError for an overlap not smaller than the chunk size.
    """

    def chunk(self, text: str, config: ChunkingConfig) -> list[str]: ...
