"""Domain value objects."""

from contextvault.domain.value_objects.context_weight import (
    DEFAULT_CONTEXT_WEIGHT,
    MAX_CONTEXT_WEIGHT,
    MIN_CONTEXT_WEIGHT,
    is_valid_weight,
)
from contextvault.domain.value_objects.source_type import SourceType, source_label

__all__ = [
    "DEFAULT_CONTEXT_WEIGHT",
    "MAX_CONTEXT_WEIGHT",
    "MIN_CONTEXT_WEIGHT",
    "SourceType",
    "is_valid_weight",
    "source_label",
]
