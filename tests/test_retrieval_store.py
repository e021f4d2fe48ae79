"""
Unit Tests for Document Stores and the Document Models

Tests the InMemoryVectorStore contract, record parsing and seeding.

PATTERNS:
---------
1. Test through the match() contract shared with PgVectorStore
2. Hand-picked vectors so the expected ranking is obvious
3. Tolerance of partial records
"""

import dataclasses

import numpy as np
import pytest
import pytest_asyncio

from legal_search_pipeline.core import LegalDocument
from legal_search_pipeline.embeddings import MockEmbeddings
from legal_search_pipeline.retrieval import (
    Document,
    InMemoryVectorStore,
    PgVectorStore,
    get_legal_documents,
    get_vector_store,
    seed_vector_store,
)
from legal_search_pipeline.retrieval.seeds import CIVIL_CODE
from legal_search_pipeline.config import Settings


# ---------------------------------------------------------------------------
# FIXTURES
# ---------------------------------------------------------------------------


def _doc(doc_id, section, vector):
    return Document(
        id=doc_id,
        title=f"title {section}",
        content=f"content {section}",
        section=section,
        law_type=CIVIL_CODE,
        embedding=np.array(vector, dtype=np.float32),
    )


@pytest_asyncio.fixture
async def store_with_docs():
    store = InMemoryVectorStore()
    await store.insert_documents([
        _doc("tort", 420, [1.0, 0.0, 0.0]),
        _doc("lease", 537, [0.6, 0.8, 0.0]),
        _doc("marriage", 1457, [0.0, 0.0, 1.0]),
    ])
    return store


# ---------------------------------------------------------------------------
# IN-MEMORY STORE
# ---------------------------------------------------------------------------


class TestInMemoryVectorStore:
    """Test InMemoryVectorStore ranking and limits."""

    @pytest.mark.asyncio
    async def test_match_ranks_by_cosine_similarity(self, store_with_docs):
        records = await store_with_docs.match(np.array([1.0, 0.0, 0.0]), 3)

        assert [r["id"] for r in records] == ["tort", "lease", "marriage"]
        assert records[0]["similarity"] == pytest.approx(1.0)
        assert records[1]["similarity"] == pytest.approx(0.6)
        assert records[2]["similarity"] == pytest.approx(0.0)

    @pytest.mark.asyncio
    async def test_match_respects_count(self, store_with_docs):
        records = await store_with_docs.match(np.array([0.0, 1.0, 0.0]), 1)

        assert len(records) == 1
        assert records[0]["id"] == "lease"

    @pytest.mark.asyncio
    async def test_match_returns_record_fields(self, store_with_docs):
        record = (await store_with_docs.match(np.array([1.0, 0.0, 0.0]), 1))[0]

        assert set(record) == {"id", "title", "content", "section", "law_type", "similarity"}
        assert record["section"] == 420

    @pytest.mark.asyncio
    async def test_empty_store(self):
        assert await InMemoryVectorStore().match(np.array([1.0, 0.0]), 3) == []

    @pytest.mark.asyncio
    async def test_zero_vector_scores_zero(self, store_with_docs):
        records = await store_with_docs.match(np.zeros(3), 3)
        assert all(r["similarity"] == 0.0 for r in records)

    @pytest.mark.asyncio
    async def test_insert_without_embedding_rejected(self):
        doc = _doc("x", 1, [1.0])
        doc.embedding = None

        with pytest.raises(ValueError):
            await InMemoryVectorStore().insert_documents([doc])


# ---------------------------------------------------------------------------
# LEGAL DOCUMENT
# ---------------------------------------------------------------------------


class TestLegalDocument:
    """Test LegalDocument parsing from store records."""

    def test_from_full_record(self):
        doc = LegalDocument.from_record({
            "id": "ccc-420",
            "content": "ผู้ใดจงใจ...",
            "title": "ละเมิด",
            "section": 420,
            "law_type": CIVIL_CODE,
            "similarity": 0.9,
        })

        assert doc.id == "ccc-420"
        assert doc.section == 420
        assert doc.law_type == CIVIL_CODE
        assert doc.similarity == 0.9

    def test_missing_fields_tolerated(self):
        doc = LegalDocument.from_record({"id": 7, "content": "text"})

        assert doc.id == "7"
        assert doc.title == ""
        assert doc.section is None
        assert doc.law_type == ""
        assert doc.similarity is None

    def test_camel_case_law_type_accepted(self):
        doc = LegalDocument.from_record({"lawType": CIVIL_CODE})
        assert doc.law_type == CIVIL_CODE

    def test_immutable(self):
        doc = LegalDocument.from_record({"id": "a", "similarity": 0.5})

        with pytest.raises(dataclasses.FrozenInstanceError):
            doc.similarity = 0.9

    def test_to_dict(self):
        doc = LegalDocument("a", "c", "t", 1, "law", 0.3)
        assert doc.to_dict()["similarity"] == 0.3


class TestDocument:
    """Test the ingestion-side Document model."""

    def test_embedding_text_includes_section(self):
        doc = _doc("tort", 420, [1.0])
        assert "มาตรา 420" in doc.embedding_text
        assert doc.content in doc.embedding_text

    def test_to_dict_excludes_embedding(self):
        assert "embedding" not in _doc("tort", 420, [1.0]).to_dict()


# ---------------------------------------------------------------------------
# SEEDS AND FACTORY
# ---------------------------------------------------------------------------


class TestSeeds:

    def test_seed_documents_are_well_formed(self):
        docs = get_legal_documents()

        assert len(docs) >= 5
        assert len({d.id for d in docs}) == len(docs)
        assert all(isinstance(d.section, int) for d in docs)
        assert all(d.embedding is None for d in docs)

    @pytest.mark.asyncio
    async def test_seed_in_memory_store(self):
        store = InMemoryVectorStore()
        embeddings = MockEmbeddings(dimensions=16)

        docs = await seed_vector_store(store, embeddings)

        assert len(store) == len(docs)
        # A passage's own embedding text is its nearest neighbour
        vector = await embeddings.embed(docs[0].embedding_text)
        records = await store.match(vector, 1)
        assert records[0]["id"] == docs[0].id

    @pytest.mark.asyncio
    async def test_seed_rejects_read_only_store(self):
        with pytest.raises(TypeError):
            await seed_vector_store(object(), MockEmbeddings(dimensions=4))


class TestGetVectorStore:

    def test_in_memory(self):
        assert isinstance(get_vector_store(use_postgres=False), InMemoryVectorStore)

    def test_postgres_uses_settings(self):
        store = get_vector_store(
            Settings(database_url="postgresql://db/legal", table_name="docs"),
            use_postgres=True,
        )

        assert isinstance(store, PgVectorStore)
        assert store.config.connection_string == "postgresql://db/legal"
        assert store.config.table_name == "docs"
