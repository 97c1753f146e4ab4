"""PostgreSQL chunk repository implementation (pgvector)."""

from typing import Any

from psycopg import AsyncConnection, Error as PsycopgError
from psycopg.types.json import Jsonb

from contextvault.domain.entities import Chunk, SearchResult
from contextvault.domain.exceptions import StoreError
from contextvault.domain.value_objects import DEFAULT_CONTEXT_WEIGHT


def _build_search_query(
    limit: int, threshold: float, folder_ids: list[str] | None
) -> tuple[str, dict[str, object]]:
    """Build the similarity search SQL and its named params."""
    params: dict[str, object] = {"threshold": threshold, "limit": limit}
    where = ["1 - (embedding <=> %(embedding)s::vector) >= %(threshold)s"]
    if folder_ids:
        where.append("metadata->>'folder_id' = ANY(%(folder_ids)s)")
        params["folder_ids"] = [str(f) for f in folder_ids]
    sql = (
        "SELECT id, content, metadata, created_at, "
        "1 - (embedding <=> %(embedding)s::vector) AS similarity "
        "FROM context_chunk "
        f"WHERE {' AND '.join(where)} "
        "ORDER BY embedding <=> %(embedding)s::vector "
        "LIMIT %(limit)s"
    )
    return sql, params


class PostgresChunkRepository:
    """Chunk repository with cosine similarity search over context_chunk."""

    def __init__(self, conn: AsyncConnection, dimensions: int | None = None) -> None:
        self._conn = conn
        self._dimensions = dimensions

    async def save(
        self, content: str, metadata: dict[str, Any], embedding: list[float]
    ) -> Chunk:
        """Insert one chunk; the store assigns id and created_at."""
        if not embedding:
            raise StoreError("Refusing to save chunk without embedding")
        if self._dimensions and len(embedding) != self._dimensions:
            raise StoreError(
                f"Embedding has {len(embedding)} dimensions, expected {self._dimensions}"
            )
        try:
            cur = await self._conn.execute(
                "INSERT INTO context_chunk (content, metadata, embedding) "
                "VALUES (%s, %s, %s::vector) RETURNING id, created_at",
                (content, Jsonb(metadata), [float(v) for v in embedding]),
            )
            row = await cur.fetchone()
        except PsycopgError as e:
            raise StoreError(f"Failed to save chunk: {e}") from e
        return Chunk(
            id=row[0],
            content=content,
            embedding=list(embedding),
            metadata=dict(metadata),
            created_at=row[1],
        )

    async def search(
        self,
        query_embedding: list[float],
        limit: int = 5,
        threshold: float = 0.7,
        folder_ids: list[str] | None = None,
    ) -> list[SearchResult]:
        """Nearest neighbours by cosine similarity, optionally restricted to folders."""
        sql, params = _build_search_query(limit, threshold, folder_ids)
        params["embedding"] = [float(v) for v in query_embedding]
        try:
            cur = await self._conn.execute(sql, params)
            rows = await cur.fetchall()
        except PsycopgError as e:
            raise StoreError(f"Similarity search failed: {e}") from e
        return [
            SearchResult(
                chunk=Chunk(
                    id=r[0],
                    content=r[1],
                    embedding=[],
                    metadata=r[2] or {},
                    created_at=r[3],
                ),
                similarity=float(r[4]),
            )
            for r in rows
        ]

    async def delete_by_source(self, source_type: str, source_id: str) -> int:
        """Delete all chunks cut from a source."""
        try:
            cur = await self._conn.execute(
                "DELETE FROM context_chunk "
                "WHERE metadata->>'source_type' = %s AND metadata->>'source_id' = %s",
                (source_type, str(source_id)),
            )
        except PsycopgError as e:
            raise StoreError(f"Failed to delete chunks: {e}") from e
        return cur.rowcount

    async def update_weight(self, source_type: str, source_id: str, weight: int) -> int:
        """Set metadata.context_weight on every chunk of a source."""
        try:
            cur = await self._conn.execute(
                "UPDATE context_chunk "
                "SET metadata = jsonb_set(metadata, '{context_weight}', to_jsonb(%s::int)) "
                "WHERE metadata->>'source_type' = %s AND metadata->>'source_id' = %s",
                (weight, source_type, str(source_id)),
            )
        except PsycopgError as e:
            raise StoreError(f"Failed to update context weight: {e}") from e
        return cur.rowcount

    async def get_weight(self, source_type: str, source_id: str) -> int | None:
        """Context weight of a source's chunks, None when the source has no chunks."""
        try:
            cur = await self._conn.execute(
                "SELECT metadata->>'context_weight' FROM context_chunk "
                "WHERE metadata->>'source_type' = %s AND metadata->>'source_id' = %s "
                "LIMIT 1",
                (source_type, str(source_id)),
            )
            row = await cur.fetchone()
        except PsycopgError as e:
            raise StoreError(f"Failed to read context weight: {e}") from e
        if row is None:
            return None
        try:
            return int(row[0])
        except (TypeError, ValueError):
            return DEFAULT_CONTEXT_WEIGHT

    async def count(self) -> int:
        """Total chunks in the store."""
        try:
            cur = await self._conn.execute("SELECT count(*) FROM context_chunk")
            row = await cur.fetchone()
        except PsycopgError as e:
            raise StoreError(f"Failed to count chunks: {e}") from e
        return int(row[0])
