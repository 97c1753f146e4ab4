"""Context bundle - retrieval output ready for prompt injection."""

from dataclasses import dataclass, field

from contextvault.domain.entities.chunk import SearchResult


@dataclass
class ContextBundle:
    """Labeled context text plus the provenance it was built from."""

    context_text: str = ""
    sources: list[str] = field(default_factory=list)
    chunk_count: int = 0
    context_chunks: list[SearchResult] = field(default_factory=list)
    selected_folders: list[str] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return self.chunk_count == 0
