"""Source record - existing workspace content eligible for ingestion."""

from dataclasses import dataclass, field
from typing import Any

from contextvault.domain.value_objects import SourceType


@dataclass
class SourceRecord:
    """Content entity owned by an external collaborator (document, note, URL, video)."""

    source_type: SourceType
    source_id: str
    title: str
    content: str
    folder_id: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)
