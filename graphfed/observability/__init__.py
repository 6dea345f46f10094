"""
Observability package: OpenTelemetry tracing for federated operations.
"""

from graphfed.observability.tracing import (
    get_current_span_id,
    get_current_trace_id,
    get_tracer,
    setup_tracing,
    traced,
)

__all__ = [
    "setup_tracing",
    "get_tracer",
    "get_current_trace_id",
    "get_current_span_id",
    "traced",
]
