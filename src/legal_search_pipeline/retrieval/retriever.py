"""
Similarity retriever - typed wrapper over a DocumentStore.

Takes a query vector, asks the store for its nearest passages, and returns
them as LegalDocument in store order. It does not re-rank, re-score or
deduplicate.

A failed store query is not fatal to the caller. The failure is wrapped in
RetrievalError, logged with its cause and recorded on the span, then
reported upward as "no documents", which the answer stage already handles.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Iterable

import numpy as np

from legal_search_pipeline.core import DocumentStore, LegalDocument, RetrievalError
from legal_search_pipeline.observability import (
    LEGAL_SEARCH_DOC_COUNT,
    LEGAL_SEARCH_DOC_IDS,
    get_tracer,
    record_degraded,
    retrieval_attributes,
)

logger = logging.getLogger(__name__)

DEFAULT_TOP_K = 3
DEFAULT_THRESHOLD = 0.1


def filter_by_threshold(
    docs: Iterable[LegalDocument],
    threshold: float | None,
) -> list[LegalDocument]:
    """
    Keep documents whose similarity is at least `threshold`.

    Order is preserved. A missing similarity counts as 0.
    `threshold=None` keeps everything.
    """
    if threshold is None:
        return list(docs)
    return [doc for doc in docs if (doc.similarity or 0.0) >= threshold]


class SimilarityRetriever:
    """Nearest-neighbour lookup of legal passages for a query vector."""

    def __init__(self, store: DocumentStore, timeout: float = 10.0):
        self._store = store
        self.timeout = timeout

    async def _query(self, query_vector: np.ndarray, match_count: int) -> list[LegalDocument]:
        try:
            records = await asyncio.wait_for(
                self._store.match(query_vector, match_count),
                timeout=self.timeout,
            )
            return [LegalDocument.from_record(record) for record in records or []]
        except asyncio.TimeoutError as e:
            raise RetrievalError(f"Store query timed out after {self.timeout}s") from e
        except Exception as e:
            raise RetrievalError(f"Store query failed: {e}") from e

    async def retrieve(
        self,
        query_vector: np.ndarray,
        top_k: int = DEFAULT_TOP_K,
    ) -> list[LegalDocument]:
        """
        Return at most `top_k` documents, most similar first.

        `top_k` below 1 is treated as 1. Store failures yield [].
        """
        match_count = max(1, int(top_k))

        with get_tracer().start_span(
            "legal_search.retrieve",
            attributes=retrieval_attributes(match_count),
        ) as span:
            try:
                docs = await self._query(query_vector, match_count)
            except RetrievalError as e:
                logger.error(f"Retrieval failed, continuing with no documents: {e}", exc_info=e)
                record_degraded(span, e)
                return []

            docs = docs[:match_count]
            span.set_attribute(LEGAL_SEARCH_DOC_COUNT, len(docs))
            span.set_attribute(LEGAL_SEARCH_DOC_IDS, [doc.id for doc in docs])
            return docs

    async def retrieve_relevant(
        self,
        query_vector: np.ndarray,
        top_k: int = DEFAULT_TOP_K,
        threshold: float | None = DEFAULT_THRESHOLD,
    ) -> list[LegalDocument]:
        """Plain retrieval followed by a similarity threshold filter."""
        with get_tracer().start_span(
            "legal_search.retrieve_relevant",
            attributes=retrieval_attributes(max(1, int(top_k)), threshold),
        ) as span:
            docs = await self.retrieve(query_vector, top_k)
            relevant = filter_by_threshold(docs, threshold)
            if len(relevant) < len(docs):
                logger.debug(
                    f"Threshold {threshold} dropped {len(docs) - len(relevant)} of {len(docs)} documents"
                )
            span.set_attribute(LEGAL_SEARCH_DOC_COUNT, len(relevant))
            return relevant
