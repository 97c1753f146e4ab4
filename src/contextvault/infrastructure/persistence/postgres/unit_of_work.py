"""PostgreSQL Unit of Work implementation."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from psycopg import Error as PsycopgError
from psycopg_pool import AsyncConnectionPool, PoolTimeout

from contextvault.domain.exceptions import StoreError
from contextvault.infrastructure.persistence.postgres.chunk_repository import (
    PostgresChunkRepository,
)
from contextvault.infrastructure.persistence.postgres.source_repository import (
    PostgresSourceRepository,
)

logger = logging.getLogger(__name__)


class PostgresUnitOfWork:
    """PostgreSQL Unit of Work - one connection, one transaction."""

    def __init__(self, pool: AsyncConnectionPool, dimensions: int | None = None) -> None:
        self._pool = pool
        self._dimensions = dimensions
        self._conn: object | None = None
        self._conn_cm: object | None = None

    async def __aenter__(self) -> "PostgresUnitOfWork":
        self._conn_cm = self._pool.connection()
        try:
            self._conn = await self._conn_cm.__aenter__()
        except (PoolTimeout, PsycopgError) as e:
            raise StoreError(f"Chunk store unreachable: {e}") from e
        self._chunks = PostgresChunkRepository(self._conn, dimensions=self._dimensions)
        self._sources = PostgresSourceRepository(self._conn)
        return self

    async def __aexit__(self, exc_type: object, exc_val: object, exc_tb: object) -> None:
        if exc_type and self._conn:
            await self.rollback()
        if self._conn_cm and self._conn:
            try:
                await self._conn_cm.__aexit__(exc_type, exc_val, exc_tb)
            except PsycopgError as e:
                # The pool discards broken connections; the original error still propagates.
                if exc_type is None:
                    raise StoreError(f"Failed to release connection: {e}") from e
                logger.warning("Failed to release connection: %s", e)

    @property
    def chunks(self) -> PostgresChunkRepository:
        return self._chunks

    @property
    def sources(self) -> PostgresSourceRepository:
        return self._sources

    async def commit(self) -> None:
        if self._conn:
            try:
                await self._conn.commit()
            except PsycopgError as e:
                raise StoreError(f"Commit failed: {e}") from e

    async def rollback(self) -> None:
        """Roll back; a connection that is already gone is logged, not raised."""
        if self._conn:
            try:
                await self._conn.rollback()
            except PsycopgError as e:
                logger.warning("Rollback failed: %s", e)


def create_uow_factory(pool: AsyncConnectionPool, dimensions: int | None = None) -> object:
    """Create UnitOfWork factory (async context manager).

    Commits when the block exits cleanly; on error the UnitOfWork rolls back.
    """

    @asynccontextmanager
    async def factory() -> AsyncIterator[PostgresUnitOfWork]:
        async with PostgresUnitOfWork(pool, dimensions=dimensions) as uow:
            yield uow
            await uow.commit()

    return factory
