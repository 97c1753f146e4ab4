"""OpenAI-compatible embedding provider."""

import logging

from openai import APIConnectionError, AsyncOpenAI, RateLimitError
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential_jitter,
)

logger = logging.getLogger(__name__)


class OpenAIEmbeddingProvider:
    """Embedding provider using OpenAI-compatible API.

    Provider failures degrade to empty vectors. Rate limits and dropped
    connections are retried with exponential backoff first.
    """

    def __init__(
        self,
        base_url: str,
        api_key: str,
        model: str,
        max_retries: int = 3,
        client: AsyncOpenAI | None = None,
        retry_wait: object | None = None,
    ) -> None:
        # SDK-level retries are disabled; backoff is handled here.
        self._client = client or AsyncOpenAI(base_url=base_url, api_key=api_key, max_retries=0)
        self._model = model
        self._max_retries = max(1, max_retries)
        self._retry_wait = retry_wait or wait_exponential_jitter(initial=1, max=30, jitter=1)

    async def embed(self, text: str) -> list[float]:
        """Generate embedding for one text, empty list when unavailable."""
        text = text.strip()
        if not text:
            return []
        try:
            vectors = await self._create([text])
        except Exception as e:
            logger.warning("Embedding generation failed: %s", e)
            return []
        return vectors[0] if vectors else []

    async def _create(self, texts: list[str]) -> list[list[float]]:
        async for attempt in AsyncRetrying(
            retry=retry_if_exception_type((RateLimitError, APIConnectionError)),
            stop=stop_after_attempt(self._max_retries),
            wait=self._retry_wait,
            before_sleep=lambda state: logger.warning(
                "Embedding request retry %d/%d after %s",
                state.attempt_number,
                self._max_retries,
                type(state.outcome.exception()).__name__,
            ),
            reraise=True,
        ):
            with attempt:
                response = await self._client.embeddings.create(
                    model=self._model,
                    input=texts,
                )
        data = sorted(response.data, key=lambda d: d.index)
        return [list(d.embedding) for d in data]
