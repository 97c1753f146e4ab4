"""Application ports - interfaces for external adapters."""

from contextvault.application.ports.chunker import Chunker
from contextvault.application.ports.embedding_provider import EmbeddingProvider
from contextvault.application.ports.unit_of_work import UnitOfWork, UnitOfWorkFactory

__all__ = [
    "Chunker",
    "EmbeddingProvider",
    "UnitOfWork",
    "UnitOfWorkFactory",
]
