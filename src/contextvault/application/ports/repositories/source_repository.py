"""Source repository port - read-only view of externally owned content."""

from typing import Protocol

from contextvault.domain.entities import SourceRecord


class SourceRepository(Protocol):
    """Port for listing workspace content that can be ingested."""

    async def list_documents(self) -> list[SourceRecord]: ...

    async def list_notes(self) -> list[SourceRecord]: ...

    async def list_urls(self) -> list[SourceRecord]: ...

    async def list_videos(self) -> list[SourceRecord]: ...

    async def count_by_type(self) -> dict[str, int]: ...
