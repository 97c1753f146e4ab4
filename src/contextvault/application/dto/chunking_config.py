"""Chunking configuration DTO."""

from dataclasses import dataclass

from contextvault.domain.value_objects import SourceType


@dataclass
class ChunkingConfig:
    """Configuration for text chunking."""

    chunk_size: int = 1000
    chunk_overlap: int = 200


def chunking_config_for(
    source_type: str,
    *,
    document_chunk_size: int = 1000,
    default_chunk_size: int = 1200,
    chunk_overlap: int = 200,
) -> ChunkingConfig:
    """Pick the chunk size for a source: documents are cut finer than notes, URLs and transcripts."""
    size = document_chunk_size if source_type == SourceType.DOCUMENT else default_chunk_size
    return ChunkingConfig(chunk_size=size, chunk_overlap=chunk_overlap)
