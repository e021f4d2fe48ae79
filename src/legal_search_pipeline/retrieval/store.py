"""
Document store implementations.

Pattern: Protocol -> Production impl -> Test double -> Factory

This module contains:
1. StoreConfig - Configuration dataclass
2. PgVectorStore - PostgreSQL with pgvector (production)
3. InMemoryVectorStore - In-memory store (testing/development)
4. get_vector_store() - Factory function

Both stores answer the same question: given a query vector, which passages
are nearest, and how similar are they? Nearest-neighbour search is the
store's job. The retriever above it never re-ranks.

INTERVIEW TALKING POINT:
------------------------
"Similarity search lives in a SQL function, match_legal_docs, so the
ranking logic sits next to the HNSW index. The Python side only passes a
vector and a count. The in-memory store reproduces the same contract with
numpy so tests never need a database."
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from legal_search_pipeline.retrieval.document import Document

if TYPE_CHECKING:
    from legal_search_pipeline.config import Settings

# Optional: Only import psycopg if available (for local dev without postgres)
try:
    import psycopg
    from psycopg.rows import dict_row
    from pgvector.psycopg import register_vector_async

    PGVECTOR_AVAILABLE = True
except ImportError:
    PGVECTOR_AVAILABLE = False

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# CONFIGURATION
# ---------------------------------------------------------------------------


@dataclass
class StoreConfig:
    """Configuration for the document store."""

    connection_string: str = "postgresql://localhost/legal_search"
    table_name: str = "legal_docs"
    match_function: str = "match_legal_docs"
    embedding_dim: int = 1536

    @classmethod
    def from_settings(cls, settings: Settings) -> "StoreConfig":
        return cls(
            connection_string=settings.database_url,
            table_name=settings.table_name,
            match_function=settings.match_function,
            embedding_dim=settings.embedding_dimensions,
        )


# ---------------------------------------------------------------------------
# PGVECTOR STORE (Production)
# ---------------------------------------------------------------------------


class PgVectorStore:
    """
    PostgreSQL document store using pgvector.

    Queries go through the match_legal_docs SQL function, which returns
    id, content, title, section, law_type and cosine similarity, most
    similar first.
    """

    def __init__(self, config: StoreConfig):
        self.config = config
        self._conn = None
        self._connect_lock = asyncio.Lock()

    async def connect(self) -> None:
        """Establish database connection."""
        if not PGVECTOR_AVAILABLE:
            raise ImportError(
                "pgvector not available. Install with: pip install pgvector psycopg[binary]"
            )

        async with self._connect_lock:
            if self._conn is not None:
                return
            self._conn = await psycopg.AsyncConnection.connect(
                self.config.connection_string,
                autocommit=True,
                row_factory=dict_row,
            )
            await register_vector_async(self._conn)

    async def close(self) -> None:
        """Close database connection."""
        if self._conn:
            await self._conn.close()
            self._conn = None

    async def match(self, query_vector: np.ndarray, match_count: int) -> list[dict]:
        """Call the match function and return its rows as dicts."""
        if not self._conn:
            await self.connect()

        cursor = await self._conn.execute(
            f"""
            SELECT id, content, title, section, law_type, similarity
            FROM {self.config.match_function}(%s, %s)
            """,
            (np.asarray(query_vector, dtype=np.float32), match_count),
        )
        return [dict(row) for row in await cursor.fetchall()]

    async def create_schema(self) -> None:
        """Create the passages table, its HNSW index and the match function."""
        if not self._conn:
            await self.connect()

        table = self.config.table_name
        dim = self.config.embedding_dim

        await self._conn.execute("CREATE EXTENSION IF NOT EXISTS vector")
        # The vector type may have been created just now
        await register_vector_async(self._conn)

        await self._conn.execute(
            f"""
            CREATE TABLE IF NOT EXISTS {table} (
                id TEXT PRIMARY KEY,
                title TEXT NOT NULL,
                content TEXT NOT NULL,
                section INTEGER,
                law_type TEXT,
                embedding vector({dim})
            )
            """
        )

        await self._conn.execute(
            f"""
            CREATE INDEX IF NOT EXISTS {table}_embedding_idx
            ON {table}
            USING hnsw (embedding vector_cosine_ops)
            WITH (m = 16, ef_construction = 64)
            """
        )

        await self._conn.execute(
            f"""
            CREATE OR REPLACE FUNCTION {self.config.match_function}(
                query_embedding vector({dim}),
                match_count INTEGER DEFAULT 3
            )
            RETURNS TABLE (
                id TEXT,
                content TEXT,
                title TEXT,
                section INTEGER,
                law_type TEXT,
                similarity DOUBLE PRECISION
            )
            LANGUAGE sql STABLE
            AS $$
                SELECT d.id, d.content, d.title, d.section, d.law_type,
                       1 - (d.embedding <=> query_embedding) AS similarity
                FROM {table} AS d
                ORDER BY d.embedding <=> query_embedding
                LIMIT match_count
            $$
            """
        )

    async def insert_documents(self, docs: list[Document]) -> None:
        """Upsert passages. Every document must already carry its embedding."""
        if not self._conn:
            await self.connect()

        for doc in docs:
            if doc.embedding is None:
                raise ValueError(f"Document {doc.id} has no embedding")
            await self._conn.execute(
                f"""
                INSERT INTO {self.config.table_name}
                    (id, title, content, section, law_type, embedding)
                VALUES (%s, %s, %s, %s, %s, %s)
                ON CONFLICT (id) DO UPDATE SET
                    title = EXCLUDED.title,
                    content = EXCLUDED.content,
                    section = EXCLUDED.section,
                    law_type = EXCLUDED.law_type,
                    embedding = EXCLUDED.embedding
                """,
                (doc.id, doc.title, doc.content, doc.section, doc.law_type, doc.embedding),
            )
        logger.info(f"Upserted {len(docs)} documents into {self.config.table_name}")


# ---------------------------------------------------------------------------
# IN-MEMORY STORE (Testing/Development)
# ---------------------------------------------------------------------------


class InMemoryVectorStore:
    """
    In-memory document store for development/testing.

    Implements the same contract as PgVectorStore without Postgres.
    Uses cosine similarity, sorted descending.
    """

    def __init__(self):
        self._documents: dict[str, Document] = {}

    async def connect(self) -> None:
        """No-op for in-memory store."""
        pass

    async def close(self) -> None:
        """No-op for in-memory store."""
        pass

    async def create_schema(self) -> None:
        """No-op for in-memory store."""
        pass

    async def insert_documents(self, docs: list[Document]) -> None:
        for doc in docs:
            if doc.embedding is None:
                raise ValueError(f"Document {doc.id} has no embedding")
            self._documents[doc.id] = doc

    def __len__(self) -> int:
        return len(self._documents)

    @staticmethod
    def _cosine_similarity(a: np.ndarray, b: np.ndarray) -> float:
        denom = np.linalg.norm(a) * np.linalg.norm(b)
        if denom == 0:
            return 0.0
        return float(np.dot(a, b) / denom)

    async def match(self, query_vector: np.ndarray, match_count: int) -> list[dict]:
        """Rank every stored passage by cosine similarity to the query."""
        scored = [
            (doc, self._cosine_similarity(query_vector, doc.embedding))
            for doc in self._documents.values()
        ]
        scored.sort(key=lambda x: x[1], reverse=True)

        return [
            {**doc.to_dict(), "similarity": score}
            for doc, score in scored[:match_count]
        ]


# ---------------------------------------------------------------------------
# FACTORY FUNCTION
# ---------------------------------------------------------------------------


def get_vector_store(
    settings: Settings | None = None,
    use_postgres: bool = True,
) -> PgVectorStore | InMemoryVectorStore:
    """
    Factory function to get the appropriate document store.

    Args:
        settings: Pipeline settings (connection string, table, function)
        use_postgres: Use the PostgreSQL store (False for tests/offline dev)
    """
    from legal_search_pipeline.config import Settings

    settings = settings or Settings()
    if use_postgres:
        return PgVectorStore(StoreConfig.from_settings(settings))
    return InMemoryVectorStore()
