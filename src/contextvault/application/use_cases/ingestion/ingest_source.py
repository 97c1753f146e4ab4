"""Ingest source use case - chunk, embed and save one source."""

import asyncio
import logging

from contextvault.application.dto.chunking_config import ChunkingConfig, chunking_config_for
from contextvault.application.dto.ingestion_dto import IngestInput, IngestResult
from contextvault.application.ports import Chunker, EmbeddingProvider
from contextvault.domain.exceptions import StoreError, ValidationError
from contextvault.domain.value_objects import SourceType

logger = logging.getLogger(__name__)

# Set by the pipeline; extra metadata cannot override them.
_POSITIONAL_KEYS = ("source_id", "chunk_index", "total_chunks")


class IngestSourceUseCase:
    """Turn a full source text into persisted, searchable chunks.

    Chunks are embedded and saved in index order. A chunk whose embedding
    is unavailable, or whose save is rejected, is skipped; later chunks are
    still attempted and nothing already saved is rolled back.
    """

    def __init__(
        self,
        unit_of_work_factory: type,
        chunker: Chunker,
        embedding_provider: EmbeddingProvider,
        delay_seconds: float = 0.1,
        document_chunk_size: int = 1000,
        default_chunk_size: int = 1200,
        chunk_overlap: int = 200,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._chunker = chunker
        self._embedding_provider = embedding_provider
        self._delay_seconds = delay_seconds
        self._document_chunk_size = document_chunk_size
        self._default_chunk_size = default_chunk_size
        self._chunk_overlap = chunk_overlap

    def chunking_config(self, source_type: str) -> ChunkingConfig:
        return chunking_config_for(
            source_type,
            document_chunk_size=self._document_chunk_size,
            default_chunk_size=self._default_chunk_size,
            chunk_overlap=self._chunk_overlap,
        )

    async def execute(self, input_data: IngestInput) -> IngestResult:
        """Ingest source. Returns saved/skipped counts."""
        _validate(input_data)

        chunks = self._chunker.chunk(
            input_data.full_text, self.chunking_config(input_data.source_type)
        )
        total = len(chunks)
        logger.info(
            "Saving %d chunks for %s: %s",
            total,
            input_data.source_type,
            input_data.title,
        )

        saved = 0
        for i, text in enumerate(chunks):
            if i > 0 and self._delay_seconds > 0:
                await asyncio.sleep(self._delay_seconds)

            embedding = await self._embedding_provider.embed(text)
            if not embedding:
                logger.warning(
                    "Failed to generate embedding for chunk %d of %s", i, input_data.title
                )
                continue

            metadata = {
                "source_type": input_data.source_type,
                "title": input_data.title,
                **{k: v for k, v in input_data.metadata.items() if k not in _POSITIONAL_KEYS},
                "source_id": str(input_data.source_id),
                "chunk_index": i,
                "total_chunks": total,
            }
            try:
                async with self._uow_factory() as uow:
                    await uow.chunks.save(text, metadata, embedding)
            except StoreError as e:
                logger.warning("Failed to save chunk %d of %s: %s", i, input_data.title, e)
                continue
            saved += 1

        result = IngestResult(
            source_type=input_data.source_type,
            source_id=str(input_data.source_id),
            total_chunks=total,
            saved=saved,
            skipped=total - saved,
        )
        if result.failed_entirely:
            logger.warning(
                "No chunks saved for %s: %s", input_data.source_type, input_data.title
            )
        else:
            logger.info(
                "Saved %d/%d chunks for %s: %s",
                saved,
                total,
                input_data.source_type,
                input_data.title,
            )
        return result


def _is_source_type(value: object) -> bool:
    return isinstance(value, str) and value in {s.value for s in SourceType}


def _validate(input_data: IngestInput) -> None:
    if not _is_source_type(input_data.source_type):
        raise ValidationError(f"Unknown source type: {input_data.source_type}")
    if not str(input_data.source_id or "").strip():
        raise ValidationError("source_id is required")
    if not isinstance(input_data.title, str) or not input_data.title.strip():
        raise ValidationError("title is required")
    if not isinstance(input_data.full_text, str) or not input_data.full_text.strip():
        raise ValidationError("content is required")
    if not isinstance(input_data.metadata, dict):
        raise ValidationError("metadata must be an object")
    # Extra metadata may relabel a source, but only as another known type.
    override = input_data.metadata.get("source_type")
    if override is not None and not _is_source_type(override):
        raise ValidationError(f"Unknown source type in metadata: {override}")
