"""Best-effort ingestion dispatch for content-creation flows."""

import logging

from contextvault.application.dto.ingestion_dto import IngestInput, IngestResult
from contextvault.application.use_cases.ingestion.ingest_source import IngestSourceUseCase

logger = logging.getLogger(__name__)


class IngestionDispatcher:
    """Run ingestion without letting its failure reach the primary write.

    Callers save their document/note/URL first, then hand the text here;
    every error is logged and converted to a None result.
    """

    def __init__(self, ingest_source: IngestSourceUseCase) -> None:
        self._ingest_source = ingest_source

    async def dispatch(self, input_data: IngestInput) -> IngestResult | None:
        try:
            return await self._ingest_source.execute(input_data)
        except Exception:
            logger.exception(
                "Background ingestion failed for %s %s",
                input_data.source_type,
                input_data.source_id,
            )
            return None
