"""
Document model for the legal corpus.

Single responsibility: Define the structure of passages as they are
written into a vector store by the seeding tools.
"""

from dataclasses import dataclass

import numpy as np


@dataclass
class Document:
    """
    A legal passage with its embedding.

    This is the ingestion-side representation. Query results are returned
    as LegalDocument (defined in core.protocols), which carries a
    per-query similarity instead of the embedding.
    """
    id: str
    title: str
    content: str
    section: int | None
    law_type: str
    embedding: np.ndarray | None = None

    @property
    def embedding_text(self) -> str:
        """Text that gets embedded for this passage."""
        return f"{self.law_type} มาตรา {self.section}\n{self.content}"

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "id": self.id,
            "title": self.title,
            "content": self.content,
            "section": self.section,
            "law_type": self.law_type,
        }
