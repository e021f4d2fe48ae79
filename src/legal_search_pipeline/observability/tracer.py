"""
Stage tracing.

Every pipeline stage opens a span unconditionally. get_tracer() decides what
that costs: an OpenTelemetry-backed tracer once init_phoenix() has installed
an SDK provider, a NoOpTracer otherwise (tracing off, OTel missing, or
called before startup finished).

Stages that absorb a failure call record_degraded(), so a request that
"found nothing" because Postgres was down is still distinguishable in the
trace from one that genuinely matched nothing.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Iterator, Protocol

from legal_search_pipeline.config import TracingConfig
from legal_search_pipeline.observability.attributes import (
    LEGAL_SEARCH_DEGRADED,
    LEGAL_SEARCH_OUTCOME,
)


class SpanProtocol(Protocol):
    def set_attribute(self, key: str, value: Any) -> None:
        ...

    def set_status(self, status: str, description: str | None = None) -> None:
        """status is "ok" or "error"."""
        ...

    def record_exception(self, exception: BaseException) -> None:
        ...


class TracerProtocol(Protocol):
    def start_span(
        self, name: str, attributes: dict[str, Any] | None = None
    ) -> Any:
        """Context manager yielding a SpanProtocol."""
        ...


# ---------------------------------------------------------------------------
# TRACERS
# ---------------------------------------------------------------------------


class NoOpSpan:
    """Accepts and discards everything."""

    __slots__ = ()

    def set_attribute(self, key: str, value: Any) -> None:
        return None

    def set_status(self, status: str, description: str | None = None) -> None:
        return None

    def record_exception(self, exception: BaseException) -> None:
        return None


_NOOP_SPAN = NoOpSpan()


class NoOpTracer:
    @contextmanager
    def start_span(
        self, name: str, attributes: dict[str, Any] | None = None
    ) -> Iterator[NoOpSpan]:
        yield _NOOP_SPAN


class OTelTracer:
    """Adapts an opentelemetry Tracer to TracerProtocol."""

    class _Span:
        def __init__(self, span: Any):
            self._span = span

        def set_attribute(self, key: str, value: Any) -> None:
            self._span.set_attribute(key, value)

        def set_status(self, status: str, description: str | None = None) -> None:
            from opentelemetry.trace import StatusCode

            if status == "error":
                self._span.set_status(StatusCode.ERROR, description)
            else:
                self._span.set_status(StatusCode.OK)

        def record_exception(self, exception: BaseException) -> None:
            self._span.record_exception(exception)

    def __init__(self, tracer: Any):
        self._tracer = tracer

    @contextmanager
    def start_span(
        self, name: str, attributes: dict[str, Any] | None = None
    ) -> Iterator[SpanProtocol]:
        # An exception escaping the block (EmbeddingError) is recorded by OTel.
        with self._tracer.start_as_current_span(name, attributes=attributes) as span:
            yield OTelTracer._Span(span)


def record_degraded(
    span: SpanProtocol,
    error: BaseException,
    outcome: str | None = None,
) -> None:
    """Mark a span whose stage swallowed `error` and returned a default."""
    span.record_exception(error)
    span.set_status("error", str(error))
    span.set_attribute(LEGAL_SEARCH_DEGRADED, True)
    if outcome is not None:
        span.set_attribute(LEGAL_SEARCH_OUTCOME, outcome)


# ---------------------------------------------------------------------------
# PROCESS-WIDE STATE
# ---------------------------------------------------------------------------

_tracing_config: TracingConfig | None = None
_tracer: TracerProtocol | None = None


def get_tracing_config() -> TracingConfig:
    """Tracing settings, read from the environment on first use."""
    global _tracing_config
    if _tracing_config is None:
        _tracing_config = TracingConfig.from_env()
    return _tracing_config


def reset_tracing_config() -> None:
    global _tracing_config
    _tracing_config = None


def _build_tracer() -> TracerProtocol:
    config = get_tracing_config()
    if not config.enabled:
        return NoOpTracer()

    try:
        from opentelemetry import trace
        from opentelemetry.sdk.trace import TracerProvider
    except ImportError:
        return NoOpTracer()

    # Still the default proxy provider: init_phoenix() has not run
    if not isinstance(trace.get_tracer_provider(), TracerProvider):
        return NoOpTracer()
    return OTelTracer(trace.get_tracer(config.project_name))


def get_tracer() -> TracerProtocol:
    """The tracer every stage should use. Built once, then cached."""
    global _tracer
    if _tracer is None:
        _tracer = _build_tracer()
    return _tracer


def reset_tracer() -> None:
    global _tracer
    _tracer = None
