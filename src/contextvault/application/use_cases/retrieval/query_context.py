"""Query context use case - raw similarity search over context chunks."""

from contextvault.application.dto.retrieval_dto import (
    QueryContextInput,
    validate_search_bounds,
)
from contextvault.application.filters import filter_by_source_types
from contextvault.application.ports import EmbeddingProvider
from contextvault.domain.entities import SearchResult
from contextvault.domain.exceptions import ValidationError


class QueryContextUseCase:
    """Return the chunks most similar to a prompt, optionally limited to source types."""

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

    async def execute(self, input_data: QueryContextInput) -> list[SearchResult]:
        prompt = (input_data.prompt or "").strip()
        if not prompt:
            raise ValidationError("Prompt is required")
        validate_search_bounds(input_data.limit, input_data.threshold)

        embedding = await self._embedding_provider.embed(prompt)
        if not embedding:
            return []

        async with self._uow_factory() as uow:
            results = await uow.chunks.search(
                embedding,
                limit=input_data.limit if input_data.limit is not None else self._default_limit,
                threshold=(
                    input_data.threshold
                    if input_data.threshold is not None
                    else self._default_threshold
                ),
            )
        return filter_by_source_types(results, input_data.source_types)
