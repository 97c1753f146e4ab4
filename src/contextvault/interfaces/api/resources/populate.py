"""Populate-existing API resource."""

import falcon.asgi

from contextvault.application.use_cases.ingestion.populate_existing import (
    GetContextStatsUseCase,
    PopulateExistingUseCase,
)
from contextvault.domain.exceptions import StoreError


class PopulateExistingResource:
    """GET/POST /v1/context/populate-existing - source statistics and full backfill."""

    def __init__(
        self, populate_existing: PopulateExistingUseCase, get_stats: GetContextStatsUseCase
    ) -> None:
        self._populate_existing = populate_existing
        self._get_stats = get_stats

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """Counts of available sources and existing chunks."""
        try:
            stats = await self._get_stats.execute()
        except StoreError:
            resp.status = falcon.HTTP_503
            resp.media = {"error": "Chunk store unavailable"}
            return
        resp.status = falcon.HTTP_200
        resp.media = {
            "available_sources": stats.available_sources,
            "existing_chunks": stats.existing_chunks,
            "total_available": stats.total_available,
        }

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """Re-ingest every existing source."""
        try:
            result = await self._populate_existing.execute()
        except StoreError:
            resp.status = falcon.HTTP_503
            resp.media = {"error": "Chunk store unavailable"}
            return
        resp.status = falcon.HTTP_200
        resp.media = {
            "processed": result.processed,
            "failed": result.failed,
            "chunks_saved": result.chunks_saved,
        }
