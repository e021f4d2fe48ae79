"""
Shared fixtures: fake collaborators and a small legal corpus.

Every external service is replaced by a double, so the suite never touches
the network or a database.
"""

import numpy as np
import pytest
from unittest.mock import AsyncMock, MagicMock

from legal_search_pipeline.config import Settings
from legal_search_pipeline.core import LegalDocument
from legal_search_pipeline.observability import reset_tracer, reset_tracing_config
from legal_search_pipeline.pipeline import LegalSearchPipeline, PipelineComponents
from legal_search_pipeline.synthesis import MockChatModel


@pytest.fixture(autouse=True)
def _quiet_observability(monkeypatch):
    """Keep tracing disabled and singletons fresh for every test."""
    monkeypatch.delenv("PHOENIX_ENABLED", raising=False)
    reset_tracing_config()
    reset_tracer()
    yield
    reset_tracing_config()
    reset_tracer()


@pytest.fixture
def settings():
    return Settings(embedding_dimensions=3, store_timeout_s=1.0, chat_timeout_s=1.0)


@pytest.fixture
def query_vector():
    return np.array([1.0, 0.0, 0.0], dtype=np.float32)


@pytest.fixture
def mock_embedder(query_vector):
    """Embedder double returning a fixed 3-dim vector."""
    embedder = MagicMock()
    embedder.dimensions = 3
    embedder.embed = AsyncMock(return_value=query_vector)
    embedder.embed_batch = AsyncMock(side_effect=lambda texts: [query_vector for _ in texts])
    return embedder


@pytest.fixture
def civil_records():
    """Three store rows, most similar first, as match_legal_docs returns them."""
    return [
        {
            "id": "ccc-420",
            "content": "ผู้ใดจงใจหรือประมาทเลินเล่อ ทำต่อบุคคลอื่นโดยผิดกฎหมาย",
            "title": "ลักษณะละเมิด",
            "section": 420,
            "law_type": "ประมวลกฎหมายแพ่งและพาณิชย์",
            "similarity": 0.82,
        },
        {
            "id": "ccc-448",
            "content": "สิทธิเรียกร้องค่าเสียหายอันเกิดแต่มูลละเมิดนั้น ท่านว่าขาดอายุความ",
            "title": "อายุความละเมิด",
            "section": 448,
            "law_type": "ประมวลกฎหมายแพ่งและพาณิชย์",
            "similarity": 0.47,
        },
        {
            "id": "ccc-537",
            "content": "อันว่าเช่าทรัพย์สินนั้น คือสัญญาซึ่งบุคคลคนหนึ่ง เรียกว่าผู้ให้เช่า",
            "title": "เช่าทรัพย์",
            "section": 537,
            "law_type": "ประมวลกฎหมายแพ่งและพาณิชย์",
            "similarity": 0.05,
        },
    ]


@pytest.fixture
def civil_docs(civil_records):
    return [LegalDocument.from_record(record) for record in civil_records]


@pytest.fixture
def mock_store(civil_records):
    """Store double whose match() returns the three civil records."""
    store = MagicMock()
    store.connect = AsyncMock()
    store.close = AsyncMock()
    store.match = AsyncMock(return_value=civil_records)
    return store


@pytest.fixture
def chat_model():
    return MockChatModel(reply="ผู้ทำละเมิดต้องใช้ค่าสินไหมทดแทน (อ้างอิง ป.พ.พ. มาตรา 420)")


@pytest.fixture
def pipeline(mock_embedder, mock_store, chat_model, settings):
    return LegalSearchPipeline(
        PipelineComponents(embedder=mock_embedder, store=mock_store, chat_model=chat_model),
        settings,
    )
