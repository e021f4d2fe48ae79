"""
Semantic Conventions for Span Attributes

Defines attribute keys following OpenTelemetry GenAI conventions
plus a custom namespace for the legal search pipeline.

Reference: https://opentelemetry.io/docs/specs/semconv/gen-ai/
"""

# ---------------------------------------------------------------------------
# GENAI NAMESPACE (OTel standard)
# ---------------------------------------------------------------------------

GEN_AI_SYSTEM = "gen_ai.system"  # "openai"
GEN_AI_OPERATION_NAME = "gen_ai.operation.name"  # "embeddings", "chat"
GEN_AI_REQUEST_MODEL = "gen_ai.request.model"
GEN_AI_REQUEST_TEMPERATURE = "gen_ai.request.temperature"
GEN_AI_REQUEST_MAX_TOKENS = "gen_ai.request.max_tokens"

# Request/Response (optional, controlled by PHOENIX_CAPTURE_LLM_CONTENT)
GEN_AI_PROMPT = "gen_ai.prompt"
GEN_AI_COMPLETION = "gen_ai.completion"


# ---------------------------------------------------------------------------
# LEGAL SEARCH NAMESPACE (custom)
# ---------------------------------------------------------------------------

# Embedding
LEGAL_SEARCH_EMBEDDING_DIMENSIONS = "legal_search.embedding.dimensions"

# Retrieval
LEGAL_SEARCH_TOP_K = "legal_search.retrieval.top_k"
LEGAL_SEARCH_THRESHOLD = "legal_search.retrieval.threshold"
LEGAL_SEARCH_DOC_COUNT = "legal_search.retrieval.doc_count"
LEGAL_SEARCH_DOC_IDS = "legal_search.retrieval.doc_ids"
LEGAL_SEARCH_DEGRADED = "legal_search.degraded"  # bool, failure absorbed

# Synthesis
LEGAL_SEARCH_OUTCOME = "legal_search.answer.outcome"  # "answered", "fallback"
LEGAL_SEARCH_HISTORY_TURNS = "legal_search.chat.history_turns"


# ---------------------------------------------------------------------------
# HELPER FUNCTIONS
# ---------------------------------------------------------------------------


def retrieval_attributes(
    top_k: int,
    threshold: float | None = None,
) -> dict:
    """Create attributes dict for a retrieval span."""
    attrs = {LEGAL_SEARCH_TOP_K: top_k}
    if threshold is not None:
        attrs[LEGAL_SEARCH_THRESHOLD] = threshold
    return attrs


def model_call_attributes(
    operation: str,
    model: str,
    temperature: float | None = None,
    max_tokens: int | None = None,
) -> dict:
    """Create attributes dict for an embedding or chat call span."""
    attrs = {
        GEN_AI_SYSTEM: "openai",
        GEN_AI_OPERATION_NAME: operation,
        GEN_AI_REQUEST_MODEL: model,
    }
    if temperature is not None:
        attrs[GEN_AI_REQUEST_TEMPERATURE] = temperature
    if max_tokens is not None:
        attrs[GEN_AI_REQUEST_MAX_TOKENS] = max_tokens
    return attrs
