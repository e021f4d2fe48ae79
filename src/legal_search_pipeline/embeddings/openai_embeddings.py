"""
Embeddings Module - Single Responsibility: Generate text embeddings.

It has ONE job: convert question text to a fixed-length vector.

FAILURE POLICY:
- Transport errors, timeouts, empty responses and wrong-sized vectors all
  raise EmbeddingError with the original exception chained.
- There is no empty-vector fallback. Retrieval is meaningless without a
  query vector, so the caller must see the failure.
"""

from __future__ import annotations

import asyncio
import hashlib
import logging
from typing import TYPE_CHECKING

import numpy as np
from openai import AsyncOpenAI, OpenAIError

from legal_search_pipeline.core import EmbeddingError, EmbeddingProvider
from legal_search_pipeline.observability import (
    LEGAL_SEARCH_EMBEDDING_DIMENSIONS,
    get_tracer,
    model_call_attributes,
)

if TYPE_CHECKING:
    from legal_search_pipeline.config import Settings

logger = logging.getLogger(__name__)

MODEL_DIMENSIONS = {
    "text-embedding-3-small": 1536,
    "text-embedding-3-large": 3072,
    "text-embedding-ada-002": 1536,
}


class OpenAIEmbeddings:
    """
    OpenAI-based embedding provider.

    Uses text-embedding-3-small by default (1536 dimensions). The async
    client is created on first use so that a missing API key surfaces as an
    EmbeddingError on the request that needed it.
    """

    def __init__(
        self,
        model: str = "text-embedding-3-small",
        api_key: str | None = None,
        dimensions: int | None = None,
        timeout: float = 15.0,
        client: AsyncOpenAI | None = None,
    ):
        self.model = model
        self.timeout = timeout
        self._api_key = api_key
        self._dimensions = dimensions or MODEL_DIMENSIONS.get(model, 1536)
        self._client = client

    @property
    def dimensions(self) -> int:
        return self._dimensions

    def _get_client(self) -> AsyncOpenAI:
        if self._client is None:
            # AsyncOpenAI falls back to OPENAI_API_KEY when api_key is None
            self._client = AsyncOpenAI(api_key=self._api_key, timeout=self.timeout)
        return self._client

    def _to_vector(self, raw: list[float]) -> np.ndarray:
        vector = np.asarray(raw, dtype=np.float32)
        if vector.ndim != 1 or vector.shape[0] != self._dimensions:
            raise EmbeddingError(
                f"{self.model} returned a vector of shape {vector.shape}, "
                f"expected ({self._dimensions},)"
            )
        return vector

    async def _create(self, payload: str | list[str]):
        try:
            return await asyncio.wait_for(
                self._get_client().embeddings.create(input=payload, model=self.model),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError as e:
            logger.warning(f"Embedding request to {self.model} timed out after {self.timeout}s")
            raise EmbeddingError(f"Embedding request timed out after {self.timeout}s") from e
        except OpenAIError as e:
            logger.warning(f"Embedding request to {self.model} failed: {e}")
            raise EmbeddingError(f"Embedding request failed: {e}") from e

    async def embed(self, text: str) -> np.ndarray:
        """Generate embedding for a single text."""
        with get_tracer().start_span(
            "legal_search.embed",
            attributes=model_call_attributes("embeddings", self.model),
        ) as span:
            response = await self._create(text)
            if not response.data:
                raise EmbeddingError(f"{self.model} returned no embeddings")

            vector = self._to_vector(response.data[0].embedding)
            span.set_attribute(LEGAL_SEARCH_EMBEDDING_DIMENSIONS, int(vector.shape[0]))
            return vector

    async def embed_batch(self, texts: list[str]) -> list[np.ndarray]:
        """Generate embeddings for multiple texts in one request."""
        if not texts:
            return []

        response = await self._create(texts)
        if len(response.data) != len(texts):
            raise EmbeddingError(
                f"{self.model} returned {len(response.data)} embeddings for {len(texts)} texts"
            )
        return [self._to_vector(item.embedding) for item in response.data]


class MockEmbeddings:
    """
    Mock embedding provider for testing without API calls.

    Generates deterministic unit vectors seeded from the text hash.
    NOT for production use - only for testing/development.
    """

    def __init__(self, dimensions: int = 1536):
        self._dimensions = dimensions

    @property
    def dimensions(self) -> int:
        return self._dimensions

    def _vector(self, text: str) -> np.ndarray:
        seed = int.from_bytes(hashlib.sha256(text.encode()).digest()[:8], "big")
        vector = np.random.default_rng(seed).standard_normal(self._dimensions)
        return (vector / np.linalg.norm(vector)).astype(np.float32)

    async def embed(self, text: str) -> np.ndarray:
        return self._vector(text)

    async def embed_batch(self, texts: list[str]) -> list[np.ndarray]:
        return [self._vector(text) for text in texts]


def get_embedding_provider(
    settings: Settings | None = None,
    use_mock: bool = False,
) -> EmbeddingProvider:
    """
    Factory function to get the appropriate embedding provider.

    Args:
        settings: Model, dimensions, key and timeout (defaults if None)
        use_mock: If True, return MockEmbeddings (for testing)
    """
    from legal_search_pipeline.config import Settings

    settings = settings or Settings()
    if use_mock:
        return MockEmbeddings(dimensions=settings.embedding_dimensions)
    return OpenAIEmbeddings(
        model=settings.embedding_model,
        api_key=settings.openai_api_key,
        dimensions=settings.embedding_dimensions,
        timeout=settings.embedding_timeout_s,
    )
