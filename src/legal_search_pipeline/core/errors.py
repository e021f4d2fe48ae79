"""
Error taxonomy for the search/answer pipeline.

Only EmbeddingError crosses the pipeline boundary. RetrievalError and
SynthesisError are raised internally so the cause is logged and traced,
then converted to a degraded-but-valid result at the API boundary.
"""


class LegalSearchError(Exception):
    """Base class for pipeline errors."""


class EmbeddingError(LegalSearchError):
    """Embedding service unreachable, timed out, or returned an unusable vector."""


class RetrievalError(LegalSearchError):
    """Vector store query failed or timed out."""


class SynthesisError(LegalSearchError):
    """Chat model call failed or returned no content."""
