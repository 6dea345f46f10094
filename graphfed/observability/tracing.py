"""
OpenTelemetry tracing for graph-federation.

Each federated operation runs under a ``federation.<operation>`` span and
each backend call under a ``backend.<operation>`` child span, so a slow or
failing backend shows up in the trace of the request it slowed down.

Until setup_tracing() (or the host application) installs a tracer provider,
every span is a no-op.
"""

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any, Optional

from opentelemetry import trace
from opentelemetry.sdk.resources import SERVICE_NAME, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import (
    BatchSpanProcessor,
    ConsoleSpanExporter,
    SpanExporter,
)
from opentelemetry.trace import Span, Tracer

_TRACER_NAME = "graphfed.federation"


def _span_exporter(otlp_endpoint: Optional[str]) -> SpanExporter:
    """OTLP exporter for an endpoint when the exporter extra is installed, else console."""
    if not otlp_endpoint:
        return ConsoleSpanExporter()
    try:
        from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import (
            OTLPSpanExporter,
        )
    except ImportError:
        return ConsoleSpanExporter()
    return OTLPSpanExporter(endpoint=otlp_endpoint)


def setup_tracing(
    service_name: str = "graph-federation",
    otlp_endpoint: Optional[str] = None,
) -> TracerProvider:
    """
    Install an SDK TracerProvider as the global provider.

    Args:
        service_name: ``service.name`` resource attribute
        otlp_endpoint: OTLP collector endpoint (e.g., http://localhost:4317);
            spans go to the console when unset

    Returns:
        The installed TracerProvider
    """
    provider = TracerProvider(resource=Resource.create({SERVICE_NAME: service_name}))
    provider.add_span_processor(BatchSpanProcessor(_span_exporter(otlp_endpoint)))
    trace.set_tracer_provider(provider)
    return provider


def get_tracer(name: str = _TRACER_NAME) -> Tracer:
    """Get a named tracer instance."""
    return trace.get_tracer(name)


def get_current_trace_id() -> Optional[str]:
    """Get the current trace ID as hex string."""
    span_context = trace.get_current_span().get_span_context()

    if span_context.trace_id == 0:
        return None

    return format(span_context.trace_id, "032x")


def get_current_span_id() -> Optional[str]:
    """Get the current span ID as hex string."""
    span_context = trace.get_current_span().get_span_context()

    if span_context.span_id == 0:
        return None

    return format(span_context.span_id, "016x")


@contextmanager
def traced(name: str, **attributes: Any) -> Iterator[Span]:
    """Run a block under a span named ``name`` with the given attributes.

    Attributes whose value is None are skipped.
    """
    with get_tracer().start_as_current_span(name) as span:
        for key, value in attributes.items():
            if value is not None:
                span.set_attribute(key, value)
        yield span
