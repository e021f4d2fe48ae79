"""
Phoenix startup and shutdown.

init_phoenix() is the only place a tracer provider is installed. It points
OpenTelemetry at Phoenix (a remote collector, or a local app launched on the
spot) and turns on OpenInference's OpenAI instrumentor, so each embeddings
and chat completions request nests under the stage span that issued it.

Tracing is optional: a missing package or a failed launch is logged and the
pipeline keeps running on NoOp spans.
"""

from __future__ import annotations

import logging

from legal_search_pipeline.config import TracingConfig
from legal_search_pipeline.observability.tracer import (
    get_tracing_config,
    reset_tracer,
    reset_tracing_config,
)

logger = logging.getLogger(__name__)

_initialized = False
_openai_instrumentor = None


def _register_provider(config: TracingConfig) -> None:
    import phoenix as px
    from phoenix.otel import register

    if config.collector_endpoint:
        logger.info(f"Phoenix exporting to {config.collector_endpoint}")
        register(project_name=config.project_name, endpoint=config.collector_endpoint)
        return

    session = px.launch_app()
    logger.info(f"Phoenix UI available at: {session.url}")
    register(project_name=config.project_name)


def _instrument_openai() -> None:
    global _openai_instrumentor
    try:
        from openinference.instrumentation.openai import OpenAIInstrumentor
    except ImportError:
        logger.debug("openinference-instrumentation-openai not installed, OpenAI calls untraced")
        return

    _openai_instrumentor = OpenAIInstrumentor()
    _openai_instrumentor.instrument()


def init_phoenix(config: TracingConfig | None = None) -> bool:
    """
    Start exporting traces to Phoenix. Safe to call more than once.

    Args:
        config: Tracing settings (read from the environment if None)

    Returns:
        True when traces are being exported, False when tracing is off
    """
    global _initialized
    if _initialized:
        return True

    config = config or get_tracing_config()
    if not config.enabled:
        logger.debug("Tracing disabled (PHOENIX_ENABLED is not set)")
        return False

    try:
        _register_provider(config)
    except ImportError as e:
        logger.warning(f"Phoenix not installed, tracing disabled: {e}")
        return False
    except Exception as e:
        logger.error(f"Failed to initialize Phoenix, tracing disabled: {e}")
        return False

    _instrument_openai()
    # A NoOpTracer may have been cached before the provider existed
    reset_tracer()
    _initialized = True
    return True


def shutdown_phoenix() -> None:
    """Flush pending spans and return to the untraced state."""
    global _initialized, _openai_instrumentor
    if not _initialized:
        return

    from opentelemetry import trace

    provider = trace.get_tracer_provider()
    if hasattr(provider, "shutdown"):
        provider.shutdown()

    if _openai_instrumentor is not None:
        _openai_instrumentor.uninstrument()
        _openai_instrumentor = None

    reset_tracer()
    reset_tracing_config()
    _initialized = False
