"""
Output schemas for the legal assistant chat.

These Pydantic models are the contract between the assistant and whatever
renders the conversation: the reply text plus the passages it was grounded
on, formatted for display.
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Literal

from pydantic import BaseModel, Field

from legal_search_pipeline.core import LegalDocument


def format_percent(similarity: float | None) -> str:
    """Whole percentage, exact halves rounded up: 0.125 -> "13%"."""
    # Scale as a float first; Decimal then sees the product exactly
    percent = Decimal((similarity or 0.0) * 100)
    return f"{percent.quantize(Decimal(1), rounding=ROUND_HALF_UP)}%"


class ChatTurn(BaseModel):
    """One earlier message in the conversation."""

    role: Literal["user", "assistant"]
    content: str


class LegalSource(BaseModel):
    """A passage shown alongside a reply."""

    title: str
    section: int | None = Field(
        default=None,
        description="Section number within the source law",
    )
    law_type: str
    similarity: str = Field(
        description="Similarity as a whole percentage, e.g. '87%'"
    )

    @classmethod
    def from_document(cls, doc: LegalDocument) -> "LegalSource":
        return cls(
            title=doc.title,
            section=doc.section,
            law_type=doc.law_type,
            similarity=format_percent(doc.similarity),
        )


class AssistantReply(BaseModel):
    """What the assistant says, and what it was grounded on."""

    text: str
    sources: list[LegalSource] = Field(default_factory=list)
    fallback: bool = Field(
        default=False,
        description="True when text is the fixed error message",
    )
