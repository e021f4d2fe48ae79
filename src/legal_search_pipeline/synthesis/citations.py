"""Deterministic, model-free renderings of retrieved passages."""

from __future__ import annotations

from typing import Sequence

from legal_search_pipeline.core import LegalDocument

PASSAGE_SEPARATOR = "\n\n"


def format_context(docs: Sequence[LegalDocument]) -> str:
    """Passage contents in retrieval order, separated by blank lines."""
    return PASSAGE_SEPARATOR.join(doc.content for doc in docs)


def format_citation(doc: LegalDocument) -> str:
    return f"{doc.law_type} มาตรา {doc.section}: {doc.content}"


def generate_enhanced_answer(question: str, docs: Sequence[LegalDocument]) -> str:
    """
    Cite each passage on its own line, in the order given.

    Used where a model call is unwanted or unavailable, and as the legal
    context block of the assistant prompt. The question is accepted for
    signature parity with the model-grounded answer and does not affect
    the output.

    Returns:
        "" for no documents, otherwise one "<law_type> มาตรา <section>:
        <content>" line per document joined by blank lines
    """
    if not docs:
        return ""
    return PASSAGE_SEPARATOR.join(format_citation(doc) for doc in docs)
