"""Repository ports."""

from contextvault.application.ports.repositories.chunk_repository import ChunkRepository
from contextvault.application.ports.repositories.source_repository import (
    SourceRepository,
)

__all__ = [
    "ChunkRepository",
    "SourceRepository",
]
