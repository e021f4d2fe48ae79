"""
Seed data for the retrieval system.

Separating the corpus from infrastructure keeps store tests and local
demos on a small, known set of passages.
"""

from legal_search_pipeline.retrieval.seeds.civil_code import (
    CIVIL_CODE,
    get_legal_documents,
    seed_vector_store,
)

__all__ = ["CIVIL_CODE", "get_legal_documents", "seed_vector_store"]
