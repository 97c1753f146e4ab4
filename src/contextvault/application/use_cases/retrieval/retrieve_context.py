"""Retrieve context use case - similarity search grouped into a labeled context block."""

import logging

from contextvault.application.dto.retrieval_dto import (
    RetrieveContextInput,
    validate_search_bounds,
)
from contextvault.application.filters import (
    exclude_zero_weight,
    filter_by_source_ids,
    filter_by_threshold,
)
from contextvault.application.ports import EmbeddingProvider
from contextvault.domain.entities import ContextBundle, SearchResult
from contextvault.domain.exceptions import ValidationError
from contextvault.domain.value_objects import source_label

logger = logging.getLogger(__name__)


def build_context_bundle(
    results: list[SearchResult], selected_folders: list[str] | None = None
) -> ContextBundle:
    """Group results by (source_type, title) and render one labeled block per group.

    Groups keep first-seen order; chunks inside a group are ordered by chunk_index.
    """
    groups: dict[tuple[str, str], list[SearchResult]] = {}
    for r in results:
        groups.setdefault((r.chunk.source_type, r.chunk.title), []).append(r)

    blocks: list[str] = []
    sources: list[str] = []
    total = 0
    for (source_type, title), members in groups.items():
        members = sorted(members, key=lambda r: r.chunk.chunk_index)
        body = "\n\n".join(r.content for r in members)
        blocks.append(f"[{source_label(source_type)}: {title}]\n{body}")
        sources.append(f"{source_type}: {title}")
        total += len(members)

    return ContextBundle(
        context_text="\n\n".join(blocks).strip(),
        sources=sources,
        chunk_count=total,
        context_chunks=list(results),
        selected_folders=list(selected_folders or []),
    )


class RetrieveContextUseCase:
    """Build a context bundle for a user query from the most similar chunks."""

    def __init__(
        self,
        unit_of_work_factory: type,
        embedding_provider: EmbeddingProvider,
        default_limit: int = 5,
        default_threshold: float = 0.7,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._embedding_provider = embedding_provider
        self._default_limit = default_limit
        self._default_threshold = default_threshold

    async def execute(self, input_data: RetrieveContextInput) -> ContextBundle:
        """Retrieve context. StoreError propagates; no matches yield an empty bundle."""
        query = (input_data.query or "").strip()
        if not query:
            raise ValidationError("Query is required")
        validate_search_bounds(input_data.limit, input_data.threshold)

        limit = input_data.limit if input_data.limit is not None else self._default_limit
        threshold = (
            input_data.threshold if input_data.threshold is not None else self._default_threshold
        )
        folders = list(input_data.selected_folders or [])

        embedding = await self._embedding_provider.embed(query)
        if not embedding:
            logger.warning("Query embedding unavailable, continuing without context")
            return ContextBundle(selected_folders=folders)

        folder_scoped = not input_data.include_all_sources and bool(folders)
        async with self._uow_factory() as uow:
            if folder_scoped:
                results = await uow.chunks.search(
                    embedding, limit=limit, threshold=threshold, folder_ids=folders
                )
            else:
                results = await uow.chunks.search(embedding, limit=limit, threshold=threshold)

        if not folder_scoped:
            results = filter_by_source_ids(results, input_data.selected_source_ids)
        results = exclude_zero_weight(filter_by_threshold(results, threshold))

        if not results:
            logger.info("No relevant context found (folders=%s)", folders or "all")
            return ContextBundle(selected_folders=folders)

        bundle = build_context_bundle(results, folders)
        logger.info(
            "Found %d relevant chunks from %d sources (folders=%s)",
            bundle.chunk_count,
            len(bundle.sources),
            folders or "all",
        )
        return bundle
