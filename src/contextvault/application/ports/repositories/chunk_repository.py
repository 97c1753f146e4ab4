"""Chunk repository port."""

from typing import Any, Protocol

from contextvault.domain.entities import Chunk, SearchResult


class ChunkRepository(Protocol):
    """Port for chunk persistence and vector similarity search."""

    async def save(
        self, content: str, metadata: dict[str, Any], embedding: list[float]
    ) -> Chunk: ...

    async def search(
        self,
        query_embedding: list[float],
        limit: int = 5,
        threshold: float = 0.7,
        folder_ids: list[str] | None = None,
    ) -> list[SearchResult]: ...

    async def delete_by_source(self, source_type: str, source_id: str) -> int: ...

    async def update_weight(self, source_type: str, source_id: str, weight: int) -> int: ...

    async def get_weight(self, source_type: str, source_id: str) -> int | None: ...

    async def count(self) -> int: ...
