"""Core configuration module for graph-federation.

Loads settings from GRAPHFED_* prefixed environment variables using Pydantic Settings.

Patterns applied:
- pydantic-settings BaseSettings
- env_prefix = "GRAPHFED_" for namespace isolation
- @field_validator + @classmethod (Pydantic v2 pattern)
- @lru_cache for singleton pattern
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings

from graphfed.core.exceptions import ConfigurationError


class Settings(BaseSettings):
    """Application settings loaded from GRAPHFED_* environment variables.

    Example: GRAPHFED_MERGE_POLICY=sequential_narrowing, GRAPHFED_LOG_LEVEL=DEBUG

    Attributes:
        service_name: Service identifier for logging and tracing.
        log_level: Logging verbosity. Default: INFO.
        merge_policy: Fan-out policy used when none is passed explicitly.
        backend_name_prefix: Prefix for synthetic names of unnamed backends.
        tracing_enabled: Install an OpenTelemetry SDK tracer provider.
        otlp_endpoint: Optional OTLP collector endpoint for span export.
    """

    # =========================================================================
    # Core Settings
    # =========================================================================
    service_name: str = Field(
        default="graph-federation",
        description="Service name for identification",
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )

    # =========================================================================
    # Federation Settings
    # =========================================================================
    merge_policy: Literal["parallel_merge", "sequential_narrowing"] = Field(
        default="parallel_merge",
        description="Default fan-out policy of the federated backend",
    )
    backend_name_prefix: str = Field(
        default="backend_",
        min_length=1,
        description="Prefix for auto-assigned backend names",
    )

    # =========================================================================
    # Tracing Settings
    # =========================================================================
    tracing_enabled: bool = Field(
        default=False,
        description="Configure an OpenTelemetry tracer provider at startup",
    )
    otlp_endpoint: str | None = Field(
        default=None,
        description="OTLP exporter endpoint (e.g. http://localhost:4317)",
    )

    model_config = {
        "env_prefix": "GRAPHFED_",
        "case_sensitive": False,
        "extra": "ignore",
    }

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate and normalize log level to uppercase.

        Raises:
            ValueError: If log level is not valid.
        """
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        normalized = v.upper()
        if normalized not in valid_levels:
            msg = f"log_level must be one of {valid_levels}, got '{v}'"
            raise ValueError(msg)
        return normalized


@lru_cache
def get_settings() -> Settings:
    """Get singleton Settings instance.

    Returns:
        Cached Settings instance.
    """
    return Settings()


def load_settings() -> Settings:
    """Get the Settings singleton for library code.

    Returns:
        Cached Settings instance.

    Raises:
        ConfigurationError: If a GRAPHFED_* variable is invalid. ``setting``
            names the offending field(s).
    """
    try:
        return get_settings()
    except ValidationError as e:
        fields = ", ".join(str(err["loc"][0]) for err in e.errors() if err["loc"])
        raise ConfigurationError(
            f"Invalid GRAPHFED_* environment: {e}",
            setting=fields or None,
        ) from e
