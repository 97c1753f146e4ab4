"""Client-side filters applied to similarity search results."""

from collections.abc import Iterable

from contextvault.domain.entities import SearchResult


def filter_by_source_ids(
    results: list[SearchResult], source_ids: Iterable[str] | None
) -> list[SearchResult]:
    """Keep results whose metadata.source_id is in the allow-list. Empty allow-list keeps all."""
    allowed = {str(s) for s in source_ids or ()}
    if not allowed:
        return results
    return [r for r in results if r.chunk.source_id and r.chunk.source_id in allowed]


def filter_by_source_types(
    results: list[SearchResult], source_types: Iterable[str] | None
) -> list[SearchResult]:
    """Keep results whose metadata.source_type is listed. Empty list keeps all."""
    allowed = set(source_types or ())
    if not allowed:
        return results
    return [r for r in results if r.metadata.get("source_type") in allowed]


def filter_by_threshold(results: list[SearchResult], threshold: float) -> list[SearchResult]:
    """Drop results scoring below the similarity threshold (inclusive bound)."""
    return [r for r in results if r.similarity >= threshold]


def exclude_zero_weight(results: list[SearchResult]) -> list[SearchResult]:
    """Drop results whose source was excluded from context (weight 0)."""
    return [r for r in results if r.chunk.context_weight != 0]
