"""Sentence-boundary-aware text chunker implementation."""

import re

from contextvault.application.dto.chunking_config import ChunkingConfig
from contextvault.domain.exceptions import ValidationError

_SENTENCE_END = re.compile(r"[.!?]\s+")

# Characters searched on each side of the naive cutoff for a sentence end.
_BOUNDARY_WINDOW = 100


class SentenceBoundaryChunker:
    """Chunker using fixed-size windows that prefer to end at a sentence boundary."""

    def chunk(self, text: str, config: ChunkingConfig) -> list[str]:
        """Split text into overlapping chunks."""
        chunk_size = config.chunk_size
        overlap = config.chunk_overlap
        if chunk_size <= 0:
            raise ValidationError("chunk_size must be positive")
        if overlap < 0 or overlap >= chunk_size:
            raise ValidationError("chunk_overlap must be in [0, chunk_size)")

        if len(text) <= chunk_size:
            return [text]

        length = len(text)
        chunks: list[str] = []
        start = 0
        while start < length:
            end = start + chunk_size
            if end < length:
                end = self._sentence_end(text, start, end, chunk_size) or end

            chunk = text[start:end].strip()
            if chunk:
                chunks.append(chunk)

            next_start = end - overlap
            # An early boundary must not pull the window back onto itself.
            start = next_start if next_start > start else end
        return chunks

    @staticmethod
    def _sentence_end(text: str, start: int, end: int, chunk_size: int) -> int | None:
        """Offset just past the last sentence ending near the cutoff, if any."""
        search_start = max(start + chunk_size - _BOUNDARY_WINDOW, start)
        search_end = min(end + _BOUNDARY_WINDOW, len(text))
        last = None
        for match in _SENTENCE_END.finditer(text, search_start, search_end):
            last = match
        if last is None:
            return None
        return last.end()
