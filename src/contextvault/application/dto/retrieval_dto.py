"""Retrieval DTOs."""

from dataclasses import dataclass, field

from contextvault.domain.exceptions import ValidationError


@dataclass
class RetrieveContextInput:
    """Input for building a context bundle for a user query."""

    query: str
    selected_folders: list[str] = field(default_factory=list)
    include_all_sources: bool = True
    selected_source_ids: list[str] = field(default_factory=list)
    limit: int | None = None
    threshold: float | None = None


@dataclass
class QueryContextInput:
    """Input for a raw similarity query over context chunks."""

    prompt: str
    limit: int | None = None
    threshold: float | None = None
    source_types: list[str] = field(default_factory=list)


def validate_search_bounds(limit: object, threshold: object) -> None:
    """Reject a limit that is not a positive int or a threshold outside [0, 1]."""
    if limit is not None and (
        isinstance(limit, bool) or not isinstance(limit, int) or limit <= 0
    ):
        raise ValidationError("limit must be a positive integer")
    if threshold is not None and (
        isinstance(threshold, bool)
        or not isinstance(threshold, int | float)
        or not 0 <= threshold <= 1
    ):
        raise ValidationError("threshold must be a number between 0 and 1")
