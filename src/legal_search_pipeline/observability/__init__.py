"""
Observability - Phoenix tracing for the search/answer pipeline.

Spans opened by the pipeline:

    legal_search.embed       one per query embedding
    legal_search.retrieve_relevant
                             threshold and documents kept; parent of retrieve
    legal_search.retrieve    one store query, document count and ids
    legal_search.synthesize  grounded answer, outcome answered/fallback
    legal_search.chat        assistant reply, history turns replayed

OpenAI requests are traced underneath them by OpenInference.

USAGE:
------
from legal_search_pipeline.observability import init_phoenix, get_tracer

init_phoenix()  # No-op unless PHOENIX_ENABLED=true

with get_tracer().start_span("legal_search.retrieve") as span:
    span.set_attribute(LEGAL_SEARCH_DOC_COUNT, len(docs))
"""

from legal_search_pipeline.observability.tracer import (
    NoOpSpan,
    NoOpTracer,
    OTelTracer,
    SpanProtocol,
    TracerProtocol,
    get_tracer,
    get_tracing_config,
    record_degraded,
    reset_tracer,
    reset_tracing_config,
)
from legal_search_pipeline.observability.attributes import (
    GEN_AI_COMPLETION,
    GEN_AI_PROMPT,
    GEN_AI_REQUEST_MODEL,
    GEN_AI_SYSTEM,
    LEGAL_SEARCH_DEGRADED,
    LEGAL_SEARCH_DOC_COUNT,
    LEGAL_SEARCH_DOC_IDS,
    LEGAL_SEARCH_EMBEDDING_DIMENSIONS,
    LEGAL_SEARCH_HISTORY_TURNS,
    LEGAL_SEARCH_OUTCOME,
    LEGAL_SEARCH_THRESHOLD,
    LEGAL_SEARCH_TOP_K,
    model_call_attributes,
    retrieval_attributes,
)
from legal_search_pipeline.observability.phoenix import init_phoenix, shutdown_phoenix

__all__ = [
    # Startup
    "init_phoenix",
    "shutdown_phoenix",
    # Tracer
    "NoOpSpan",
    "NoOpTracer",
    "OTelTracer",
    "SpanProtocol",
    "TracerProtocol",
    "get_tracer",
    "get_tracing_config",
    "record_degraded",
    "reset_tracer",
    "reset_tracing_config",
    # Attributes
    "GEN_AI_COMPLETION",
    "GEN_AI_PROMPT",
    "GEN_AI_REQUEST_MODEL",
    "GEN_AI_SYSTEM",
    "LEGAL_SEARCH_DEGRADED",
    "LEGAL_SEARCH_DOC_COUNT",
    "LEGAL_SEARCH_DOC_IDS",
    "LEGAL_SEARCH_EMBEDDING_DIMENSIONS",
    "LEGAL_SEARCH_HISTORY_TURNS",
    "LEGAL_SEARCH_OUTCOME",
    "LEGAL_SEARCH_THRESHOLD",
    "LEGAL_SEARCH_TOP_K",
    "model_call_attributes",
    "retrieval_attributes",
]
