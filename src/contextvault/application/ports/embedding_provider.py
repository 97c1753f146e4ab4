"""Embedding provider port - OpenAI compatible API."""

from typing import Protocol


class EmbeddingProvider(Protocol):
    """Port for generating text embeddings.

    An empty vector means the embedding is unavailable; implementations
    never raise provider errors to the caller.
    """

    async def embed(self, text: str) -> list[float]: ...
