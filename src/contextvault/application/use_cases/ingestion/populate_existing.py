"""Populate existing use case - re-ingest all workspace content."""

import logging

from contextvault.application.dto.ingestion_dto import (
    ContextStats,
    IngestInput,
    PopulateResult,
)
from contextvault.application.use_cases.ingestion.ingest_source import IngestSourceUseCase
from contextvault.domain.entities import SourceRecord
from contextvault.domain.exceptions import ContextVaultError

logger = logging.getLogger(__name__)


class PopulateExistingUseCase:
    """Rebuild context chunks for every existing document, note, URL and video.

    Prior chunks of each source are deleted before it is re-ingested.
    A failing source is logged and counted, the rest still run.
    """

    def __init__(self, unit_of_work_factory: type, ingest_source: IngestSourceUseCase) -> None:
        self._uow_factory = unit_of_work_factory
        self._ingest_source = ingest_source

    async def execute(self) -> PopulateResult:
        async with self._uow_factory() as uow:
            groups = [
                ("documents", await uow.sources.list_documents()),
                ("notebook entries", await uow.sources.list_notes()),
                ("source URLs", await uow.sources.list_urls()),
                ("YouTube videos", await uow.sources.list_videos()),
            ]

        result = PopulateResult()
        for label, records in groups:
            if not records:
                continue
            logger.info("Processing %d %s...", len(records), label)
            for record in records:
                await self._populate_one(record, result)

        logger.info(
            "Processed %d items for context chunks (%d failed, %d chunks saved)",
            result.processed,
            result.failed,
            result.chunks_saved,
        )
        return result

    async def _populate_one(self, record: SourceRecord, result: PopulateResult) -> None:
        if not (record.content or "").strip():
            return
        metadata = dict(record.metadata)
        if record.folder_id:
            metadata["folder_id"] = record.folder_id
        try:
            async with self._uow_factory() as uow:
                await uow.chunks.delete_by_source(record.source_type, record.source_id)
            ingested = await self._ingest_source.execute(
                IngestInput(
                    source_type=record.source_type,
                    source_id=record.source_id,
                    title=record.title or record.source_id,
                    full_text=record.content,
                    metadata=metadata,
                )
            )
        except ContextVaultError as e:
            logger.error(
                "Failed to populate %s %s: %s", record.source_type, record.source_id, e
            )
            result.failed += 1
            return
        result.processed += 1
        result.chunks_saved += ingested.saved


class GetContextStatsUseCase:
    """Count available sources and existing chunks."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self) -> ContextStats:
        async with self._uow_factory() as uow:
            available = await uow.sources.count_by_type()
            existing = await uow.chunks.count()
        return ContextStats(available_sources=available, existing_chunks=existing)
