"""Unit of Work port - transactional boundary."""

from collections.abc import AsyncIterator
from typing import Protocol

from contextvault.application.ports.repositories.chunk_repository import ChunkRepository
from contextvault.application.ports.repositories.source_repository import (
    SourceRepository,
)


class UnitOfWork(Protocol):
    """Unit of Work - manages transaction and repository access."""

    @property
    def chunks(self) -> ChunkRepository: ...

    @property
    def sources(self) -> SourceRepository: ...

    async def commit(self) -> None: ...

    async def rollback(self) -> None: ...


class UnitOfWorkFactory(Protocol):
    """Factory for creating UnitOfWork instances."""

    async def __call__(self) -> AsyncIterator[UnitOfWork]: ...
