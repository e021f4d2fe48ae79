"""
Core protocols defining contracts for the search/answer pipeline.

The three external collaborators of a query: the embedder, the passage
store and the chat model. Each has a production class, an offline stand-in
and a get_* factory; callers only ever see the protocol.

LegalDocument is the read-side record every stage passes along.

INTERVIEW TALKING POINT:
------------------------
"The pipeline never constructs its own clients. Embedder, store and chat
model are handed in as a capability set, so a test can swap any of them for
a fake and assert exactly which external calls were made."
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Protocol, Sequence, runtime_checkable

import numpy as np


# ---------------------------------------------------------------------------
# EMBEDDING PROVIDER PROTOCOL
# ---------------------------------------------------------------------------

@runtime_checkable
class EmbeddingProvider(Protocol):
    """
    Contract for embedding generation.

    Implementations:
    - OpenAIEmbeddings (production)
    - MockEmbeddings (testing)
    """

    @property
    def dimensions(self) -> int:
        """Fixed output dimensionality of the model."""
        ...

    async def embed(self, text: str) -> np.ndarray:
        """Generate embedding for a single text."""
        ...

    async def embed_batch(self, texts: list[str]) -> list[np.ndarray]:
        """Generate embeddings for multiple texts."""
        ...


# ---------------------------------------------------------------------------
# DOCUMENT STORE PROTOCOL
# ---------------------------------------------------------------------------

def _as_int(value: Any) -> int | None:
    # Sub-sections such as "193/30" have no integer form
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _as_float(value: Any) -> float | None:
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


@dataclass(frozen=True)
class LegalDocument:
    """
    A retrieved legal passage.

    `similarity` is filled in by the store query for this request only.
    It is None on raw records and is never changed after retrieval.
    """
    id: str
    content: str
    title: str
    section: int | None
    law_type: str
    similarity: float | None = None

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "LegalDocument":
        """Build from a store row. Absent or unparseable fields become defaults."""
        law_type = record.get("law_type")
        if law_type is None:
            law_type = record.get("lawType")
        return cls(
            id=str(record.get("id") or ""),
            content=record.get("content") or "",
            title=record.get("title") or "",
            section=_as_int(record.get("section")),
            law_type=law_type or "",
            similarity=_as_float(record.get("similarity")),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "content": self.content,
            "title": self.title,
            "section": self.section,
            "law_type": self.law_type,
            "similarity": self.similarity,
        }


@runtime_checkable
class DocumentStore(Protocol):
    """
    Contract for the vector-indexed document store.

    Implementations:
    - PgVectorStore (production, calls the match_legal_docs SQL function)
    - InMemoryVectorStore (testing/development)
    """

    async def connect(self) -> None:
        """Establish connection to the store."""
        ...

    async def close(self) -> None:
        """Close connection to the store."""
        ...

    async def match(
        self,
        query_vector: np.ndarray,
        match_count: int,
    ) -> list[dict]:
        """Return up to match_count nearest records, most similar first."""
        ...


# ---------------------------------------------------------------------------
# CHAT MODEL PROTOCOL
# ---------------------------------------------------------------------------

@runtime_checkable
class ChatModel(Protocol):
    """
    Contract for the generative text model.

    Implementations:
    - OpenAIChatModel (production)
    - MockChatModel (testing)
    """

    model: str

    async def complete(
        self,
        messages: Sequence[Mapping[str, str]],
        *,
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> str | None:
        """Return the first choice's content, or None when it is absent."""
        ...
