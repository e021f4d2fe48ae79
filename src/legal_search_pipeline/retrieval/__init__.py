"""
Retrieval module - vector similarity search over the legal corpus.

This module provides:
- Document: The ingestion-side passage model
- StoreConfig: Configuration for stores
- PgVectorStore: PostgreSQL production store
- InMemoryVectorStore: Testing/development store
- get_vector_store(): Factory function
- SimilarityRetriever: typed, failure-absorbing wrapper over a store
- filter_by_threshold(): similarity post-filter
"""

from legal_search_pipeline.retrieval.document import Document

from legal_search_pipeline.retrieval.store import (
    StoreConfig,
    PgVectorStore,
    InMemoryVectorStore,
    get_vector_store,
)

from legal_search_pipeline.retrieval.retriever import (
    DEFAULT_THRESHOLD,
    DEFAULT_TOP_K,
    SimilarityRetriever,
    filter_by_threshold,
)

from legal_search_pipeline.retrieval.seeds import (
    get_legal_documents,
    seed_vector_store,
)

__all__ = [
    # Document
    "Document",
    # Config
    "StoreConfig",
    # Implementations
    "PgVectorStore",
    "InMemoryVectorStore",
    # Factory
    "get_vector_store",
    # Retriever
    "DEFAULT_THRESHOLD",
    "DEFAULT_TOP_K",
    "SimilarityRetriever",
    "filter_by_threshold",
    # Seeds
    "get_legal_documents",
    "seed_vector_store",
]
