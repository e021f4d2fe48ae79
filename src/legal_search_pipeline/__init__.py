"""
legal_search_pipeline - semantic search and grounded answers over Thai law.

Quick start:

    from legal_search_pipeline import build_pipeline

    async with build_pipeline() as pipeline:
        answer = await pipeline.answer_question("ขอคำปรึกษาคดีแพ่ง")
"""

from legal_search_pipeline.config import Settings
from legal_search_pipeline.core import (
    EmbeddingError,
    LegalDocument,
    LegalSearchError,
    RetrievalError,
    SynthesisError,
)
from legal_search_pipeline.pipeline import (
    LegalSearchPipeline,
    PipelineComponents,
    build_pipeline,
)

__version__ = "0.1.0"

__all__ = [
    "Settings",
    "LegalDocument",
    "LegalSearchError",
    "EmbeddingError",
    "RetrievalError",
    "SynthesisError",
    "LegalSearchPipeline",
    "PipelineComponents",
    "build_pipeline",
]
