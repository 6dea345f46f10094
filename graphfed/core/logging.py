"""Structured logging module for graph-federation.

Provides JSON-formatted structured logging using structlog.

Patterns applied:
- Singleton _configured flag prevents reconfiguration
- configure_logging() called ONCE at startup
- Underscore-prefix for unused structlog processor params
- JSON output via JSONRenderer
- Trace/span ids taken from the active OpenTelemetry span
"""

import logging
import sys
from typing import Any, TextIO

import structlog
from structlog.types import EventDict

from graphfed.observability.tracing import get_current_span_id, get_current_trace_id


_configured: bool = False


# =============================================================================
# Custom Processors
# =============================================================================
def add_trace_context(
    _logger: object, _method_name: str, event_dict: EventDict
) -> EventDict:
    """Add the active trace and span ids to a log event.

    Lets a per-backend failure warning be matched with the federated
    operation span it happened under.

    Args:
        _logger: Logger instance (unused - required by structlog interface).
        _method_name: Method name (unused).
        event_dict: Event dictionary to process.

    Returns:
        Event dictionary with trace_id/span_id added when a span is recording.
    """
    trace_id = get_current_trace_id()
    if trace_id is not None:
        event_dict["trace_id"] = trace_id
        event_dict["span_id"] = get_current_span_id()
    return event_dict


def _level_to_int(level: str) -> int:
    """Convert a level name to its numeric value, INFO when unknown."""
    value = logging.getLevelName(level.upper())
    return value if isinstance(value, int) else logging.INFO


# =============================================================================
# Singleton Configuration
# =============================================================================
def configure_logging(
    level: str = "INFO",
    stream: TextIO | None = None,
    force: bool = False,
) -> None:
    """Configure structlog ONCE at application startup.

    Subsequent calls are no-ops unless force=True (for testing).

    Args:
        level: Minimum log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        stream: Output stream. Defaults to sys.stdout.
        force: Force reconfiguration (for testing only).
    """
    global _configured

    if _configured and not force:
        return

    processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", key="timestamp"),
        add_trace_context,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.JSONRenderer(),
    ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(_level_to_int(level)),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=stream or sys.stdout),
        cache_logger_on_first_use=False,
    )

    _configured = True


def reset_logging() -> None:
    """Reset configuration state for test isolation."""
    global _configured
    _configured = False


def get_logger(name: str) -> Any:
    """Get configured logger by name.

    Auto-configures with defaults if not already configured.

    Args:
        name: Logger name (typically __name__ of the module).

    Returns:
        Configured structlog BoundLogger instance.
    """
    configure_logging()
    return structlog.get_logger().bind(logger=name)
