"""
Core module - shared protocols, types and errors for the pipeline.

This module provides the foundational contracts that enable:
- Dependency injection of embedder, store and chat model
- Easy testing with mock implementations
- One error taxonomy shared by every stage

USAGE:
------
from legal_search_pipeline.core import DocumentStore, LegalDocument

class MyStore:
    '''Implements DocumentStore protocol.'''
    ...
"""

from legal_search_pipeline.core.errors import (
    LegalSearchError,
    EmbeddingError,
    RetrievalError,
    SynthesisError,
)
from legal_search_pipeline.core.protocols import (
    # Protocols
    EmbeddingProvider,
    DocumentStore,
    ChatModel,
    # Data classes
    LegalDocument,
)

__all__ = [
    # Protocols
    "EmbeddingProvider",
    "DocumentStore",
    "ChatModel",
    # Data classes
    "LegalDocument",
    # Errors
    "LegalSearchError",
    "EmbeddingError",
    "RetrievalError",
    "SynthesisError",
]
