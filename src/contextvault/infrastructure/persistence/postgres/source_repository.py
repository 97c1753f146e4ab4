"""PostgreSQL source repository - reads workspace content tables owned by other services."""

from psycopg import AsyncConnection, Error as PsycopgError

from contextvault.domain.entities import SourceRecord
from contextvault.domain.exceptions import StoreError
from contextvault.domain.value_objects import SourceType

_TABLES = {
    SourceType.DOCUMENT: "documents",
    SourceType.NOTE: "notebook_entries",
    SourceType.URL: "source_urls",
    SourceType.YOUTUBE: "youtube_videos",
}


def url_reference_text(topic: str | None, url: str, title: str | None) -> str:
    """Searchable text for a saved URL that has no scraped body."""
    return (
        f"Topic: {topic}\nURL: {url}\nTitle: {title or 'No title'}\n\n"
        f"This is a saved URL reference for the topic: {topic}. The URL points to: {url}"
    )


class PostgresSourceRepository:
    """Read-only access to documents, notebook entries, saved URLs and videos."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def _fetch(self, sql: str) -> list[tuple]:
        try:
            cur = await self._conn.execute(sql)
            return await cur.fetchall()
        except PsycopgError as e:
            raise StoreError(f"Failed to read sources: {e}") from e

    async def list_documents(self) -> list[SourceRecord]:
        """Documents with extracted content."""
        rows = await self._fetch(
            "SELECT id, name, type, content, folder_id FROM documents "
            "WHERE content IS NOT NULL ORDER BY created_at"
        )
        return [
            SourceRecord(
                source_type=SourceType.DOCUMENT,
                source_id=str(r[0]),
                title=r[1],
                content=r[3],
                folder_id=str(r[4]) if r[4] else None,
                metadata={"type": r[2]},
            )
            for r in rows
        ]

    async def list_notes(self) -> list[SourceRecord]:
        """Notebook entries."""
        rows = await self._fetch(
            "SELECT id, title, type, content, folder_id, tags FROM notebook_entries "
            "ORDER BY created_at"
        )
        return [
            SourceRecord(
                source_type=SourceType.NOTE,
                source_id=str(r[0]),
                title=r[1],
                content=r[3] or "",
                folder_id=str(r[4]) if r[4] else None,
                metadata={"type": r[2], "tags": list(r[5] or [])},
            )
            for r in rows
        ]

    async def list_urls(self) -> list[SourceRecord]:
        """Saved URLs, rendered as reference text."""
        rows = await self._fetch(
            "SELECT id, url, title, topic, folder_id FROM source_urls ORDER BY created_at"
        )
        return [
            SourceRecord(
                source_type=SourceType.URL,
                source_id=str(r[0]),
                title=r[2] or r[1],
                content=url_reference_text(r[3], r[1], r[2]),
                folder_id=str(r[4]) if r[4] else None,
                metadata={"url": r[1], "topic": r[3]},
            )
            for r in rows
        ]

    async def list_videos(self) -> list[SourceRecord]:
        """YouTube videos with a transcript."""
        rows = await self._fetch(
            "SELECT id, url, title, transcript, folder_id FROM youtube_videos "
            "WHERE transcript IS NOT NULL ORDER BY created_at"
        )
        return [
            SourceRecord(
                source_type=SourceType.YOUTUBE,
                source_id=str(r[0]),
                title=r[2],
                content=r[3],
                folder_id=str(r[4]) if r[4] else None,
                metadata={"url": r[1]},
            )
            for r in rows
        ]

    async def count_by_type(self) -> dict[str, int]:
        """Row count per source table."""
        counts: dict[str, int] = {}
        for source_type, table in _TABLES.items():
            rows = await self._fetch(f"SELECT count(*) FROM {table}")
            counts[source_type.value] = int(rows[0][0])
        return counts
