"""Process-wide observability setup.

Call configure_observability() ONCE when the host application starts,
before the first federation is built:
- structlog is configured at the configured log level
- an OpenTelemetry SDK tracer provider is installed when tracing is enabled
"""

from opentelemetry.sdk.trace import TracerProvider

from graphfed.core.config import Settings, get_settings
from graphfed.core.logging import configure_logging, get_logger
from graphfed.observability.tracing import setup_tracing


def configure_observability(settings: Settings | None = None) -> TracerProvider | None:
    """Configure logging and, when enabled, tracing from settings.

    Args:
        settings: Settings to apply. Defaults to get_settings().

    Returns:
        The installed TracerProvider, or None when tracing is disabled.
    """
    settings = settings or get_settings()

    configure_logging(level=settings.log_level)
    logger = get_logger(__name__)

    provider = None
    if settings.tracing_enabled:
        provider = setup_tracing(
            service_name=settings.service_name,
            otlp_endpoint=settings.otlp_endpoint,
        )

    logger.info(
        "observability_configured",
        service=settings.service_name,
        log_level=settings.log_level,
        tracing=settings.tracing_enabled,
        merge_policy=settings.merge_policy,
    )
    return provider
