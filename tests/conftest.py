"""Pytest fixtures for contextvault tests."""

from __future__ import annotations

import math
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from typing import Any
from unittest.mock import AsyncMock
from uuid import uuid4

import pytest

from contextvault.application.dto.chunking_config import ChunkingConfig
from contextvault.domain.entities import Chunk, SearchResult, SourceRecord
from contextvault.domain.exceptions import StoreError
from contextvault.domain.value_objects import DEFAULT_CONTEXT_WEIGHT


def cosine(a: list[float], b: list[float]) -> float:
    dot = sum(x * y for x, y in zip(a, b, strict=True))
    norm = math.sqrt(sum(x * x for x in a)) * math.sqrt(sum(y * y for y in b))
    return dot / norm if norm else 0.0


def one_hot(i: int, dims: int = 8) -> list[float]:
    vec = [0.0] * dims
    vec[i % dims] = 1.0
    return vec


def make_result(
    content: str,
    similarity: float,
    **metadata: Any,
) -> SearchResult:
    """SearchResult with the given metadata, for stores with preset scores."""
    return SearchResult(
        chunk=Chunk(id=uuid4(), content=content, embedding=[], metadata=metadata),
        similarity=similarity,
    )


# --- Fake repositories ---


class FakeChunkRepository:
    """In-memory chunk repository with cosine similarity search."""

    def __init__(self, dimensions: int | None = None) -> None:
        self.chunks: list[Chunk] = []
        self.search_calls: list[dict[str, Any]] = []
        self.unreachable = False
        self.reject_indices: set[int] = set()
        self._dimensions = dimensions
        self._search_results: list[SearchResult] | None = None

    def set_search_results(self, results: list[SearchResult]) -> None:
        """Set predefined search results (scores already assigned, threshold not applied)."""
        self._search_results = results

    def _check_reachable(self) -> None:
        if self.unreachable:
            raise StoreError("Chunk store unreachable")

    async def save(
        self, content: str, metadata: dict[str, Any], embedding: list[float]
    ) -> Chunk:
        self._check_reachable()
        if not embedding:
            raise StoreError("Refusing to save chunk without embedding")
        if self._dimensions and len(embedding) != self._dimensions:
            raise StoreError("Dimension mismatch")
        if metadata.get("chunk_index") in self.reject_indices:
            raise StoreError("Write rejected")
        chunk = Chunk(
            id=uuid4(),
            content=content,
            embedding=list(embedding),
            metadata=dict(metadata),
            created_at=datetime.now(UTC),
        )
        self.chunks.append(chunk)
        return chunk

    async def search(
        self,
        query_embedding: list[float],
        limit: int = 5,
        threshold: float = 0.7,
        folder_ids: list[str] | None = None,
    ) -> list[SearchResult]:
        self._check_reachable()
        self.search_calls.append(
            {"limit": limit, "threshold": threshold, "folder_ids": folder_ids}
        )
        if self._search_results is not None:
            candidates = list(self._search_results)
        else:
            candidates = [
                SearchResult(chunk=c, similarity=cosine(query_embedding, c.embedding))
                for c in self.chunks
            ]
            candidates = [r for r in candidates if r.similarity >= threshold]
            candidates.sort(key=lambda r: r.similarity, reverse=True)
        if folder_ids:
            allowed = set(folder_ids)
            candidates = [r for r in candidates if r.metadata.get("folder_id") in allowed]
        return candidates[:limit]

    def _of_source(self, source_type: str, source_id: str) -> list[Chunk]:
        return [
            c
            for c in self.chunks
            if c.metadata.get("source_type") == source_type
            and str(c.metadata.get("source_id")) == str(source_id)
        ]

    async def delete_by_source(self, source_type: str, source_id: str) -> int:
        self._check_reachable()
        doomed = self._of_source(source_type, source_id)
        self.chunks = [c for c in self.chunks if c not in doomed]
        return len(doomed)

    async def update_weight(self, source_type: str, source_id: str, weight: int) -> int:
        self._check_reachable()
        matched = self._of_source(source_type, source_id)
        for c in matched:
            c.metadata["context_weight"] = weight
        return len(matched)

    async def get_weight(self, source_type: str, source_id: str) -> int | None:
        self._check_reachable()
        matched = self._of_source(source_type, source_id)
        if not matched:
            return None
        return matched[0].metadata.get("context_weight", DEFAULT_CONTEXT_WEIGHT)

    async def count(self) -> int:
        self._check_reachable()
        return len(self.chunks)


class FakeSourceRepository:
    """In-memory view of workspace content."""

    def __init__(self) -> None:
        self.documents: list[SourceRecord] = []
        self.notes: list[SourceRecord] = []
        self.urls: list[SourceRecord] = []
        self.videos: list[SourceRecord] = []

    async def list_documents(self) -> list[SourceRecord]:
        return list(self.documents)

    async def list_notes(self) -> list[SourceRecord]:
        return list(self.notes)

    async def list_urls(self) -> list[SourceRecord]:
        return list(self.urls)

    async def list_videos(self) -> list[SourceRecord]:
        return list(self.videos)

    async def count_by_type(self) -> dict[str, int]:
        return {
            "document": len(self.documents),
            "note": len(self.notes),
            "url": len(self.urls),
            "youtube": len(self.videos),
        }


# --- Fake UnitOfWork ---


class FakeUnitOfWork:
    """In-memory Unit of Work with fake repositories."""

    def __init__(self) -> None:
        self.chunks = FakeChunkRepository()
        self.sources = FakeSourceRepository()

    async def commit(self) -> None:
        pass

    async def rollback(self) -> None:
        pass


def make_uow_factory(uow: FakeUnitOfWork):
    """Factory yielding the same FakeUnitOfWork so writes persist across calls."""

    @asynccontextmanager
    async def _factory() -> AsyncIterator[FakeUnitOfWork]:
        yield uow

    return _factory


class SequenceEmbedder:
    """Embedder giving the n-th distinct text the n-th one-hot vector.

    Texts registered with ``alias`` reuse another text's vector, which makes
    "query closest to chunk k" scenarios deterministic.
    """

    def __init__(self, dims: int = 8) -> None:
        self._dims = dims
        self._vectors: dict[str, list[float]] = {}
        self.calls: list[str] = []

    def alias(self, text: str, vector: list[float]) -> None:
        self._vectors[text] = vector

    def vector_for(self, text: str) -> list[float]:
        return self._vectors[text]

    async def embed(self, text: str) -> list[float]:
        self.calls.append(text)
        if text not in self._vectors:
            self._vectors[text] = one_hot(len(self._vectors), self._dims)
        return self._vectors[text]


# --- Fixtures ---


@pytest.fixture
def fake_uow() -> FakeUnitOfWork:
    """Fresh in-memory UnitOfWork for each test."""
    return FakeUnitOfWork()


@pytest.fixture
def uow_factory(fake_uow: FakeUnitOfWork):
    """Factory returning async context manager with the test's FakeUnitOfWork."""
    return make_uow_factory(fake_uow)


@pytest.fixture
def mock_embedding_provider():
    """AsyncMock for EmbeddingProvider - returns fixed vectors per text."""

    async def _embed(text: str) -> list[float]:
        return [0.1] * 8 if text.strip() else []

    mock = AsyncMock()
    mock.embed = AsyncMock(side_effect=_embed)
    return mock


@pytest.fixture
def failing_embedding_provider():
    """AsyncMock for EmbeddingProvider that never produces a vector."""
    mock = AsyncMock()
    mock.embed = AsyncMock(return_value=[])
    return mock


@pytest.fixture
def sequence_embedder() -> SequenceEmbedder:
    return SequenceEmbedder()


@pytest.fixture
def chunking_config() -> ChunkingConfig:
    """Small chunking config for SentenceBoundaryChunker tests."""
    return ChunkingConfig(chunk_size=100, chunk_overlap=20)
