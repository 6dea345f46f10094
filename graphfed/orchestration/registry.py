"""Backend registry - the ordered set of backends behind a federation.

Registry order is the priority order of both fan-out policies: it decides
which backend wins a conflicting key and which backend a sequential
federation asks first.
"""

from collections.abc import Iterator, Mapping, Sequence
from typing import Any

from graphfed.backends.base import (
    BACKEND_OPERATIONS,
    BackendCapability,
    BackendDefinition,
)
from graphfed.core.config import load_settings
from graphfed.core.exceptions import ConfigurationError


BackendSpec = BackendCapability | BackendDefinition | Mapping[str, Any]


class BackendRegistry:
    """Read-only, ordered list of named backends.

    Unnamed backends are named ``<prefix>1``, ``<prefix>2``, ... counting
    only unnamed entries, in construction order. The default prefix is
    ``backend_`` (``GRAPHFED_BACKEND_NAME_PREFIX``).

    Safe for concurrent reads; nothing mutates it after construction.

    Example:
        registry = BackendRegistry([
            {"name": "wikidata", "backend": sparql_backend},
            local_backend,  # becomes "backend_1"
        ])
    """

    def __init__(
        self,
        backends: Sequence[BackendSpec],
        name_prefix: str | None = None,
    ) -> None:
        """Register backends in order.

        Args:
            backends: Bare backends, BackendDefinitions, or
                {"name": ..., "backend": ...} mappings.
            name_prefix: Prefix for synthetic names. Defaults to settings.

        Raises:
            ConfigurationError: On an empty list, a blank or duplicate name,
                a backend that lacks an interface operation, or invalid
                settings when a synthetic name is needed.
        """
        if not backends:
            raise ConfigurationError(
                "A federation needs at least one backend", setting="backends"
            )

        prefix = name_prefix
        counter = 1
        definitions: list[BackendDefinition] = []
        for spec in backends:
            definition = _as_definition(spec)
            if definition is None:
                if prefix is None:
                    prefix = load_settings().backend_name_prefix
                definition = BackendDefinition(name=f"{prefix}{counter}", backend=spec)
                counter += 1
            definitions.append(definition)

        seen: set[str] = set()
        for definition in definitions:
            if not isinstance(definition.name, str) or not definition.name.strip():
                raise ConfigurationError(
                    "Backend names must not be blank", setting="backends"
                )
            if definition.name in seen:
                raise ConfigurationError(
                    f"Duplicate backend name '{definition.name}'", setting="backends"
                )
            seen.add(definition.name)
            _check_capabilities(definition)

        self._definitions: tuple[BackendDefinition, ...] = tuple(definitions)

    @property
    def definitions(self) -> tuple[BackendDefinition, ...]:
        """Registered backends in priority order."""
        return self._definitions

    @property
    def names(self) -> list[str]:
        """Backend names in priority order."""
        return [d.name for d in self._definitions]

    def get(self, name: str) -> BackendCapability:
        """Get a backend by registry name.

        Raises:
            KeyError: If no backend has that name.
        """
        for definition in self._definitions:
            if definition.name == name:
                return definition.backend
        raise KeyError(name)

    def __iter__(self) -> Iterator[BackendDefinition]:
        return iter(self._definitions)

    def __len__(self) -> int:
        return len(self._definitions)

    def __repr__(self) -> str:
        return f"BackendRegistry({self.names!r})"


def _as_definition(spec: BackendSpec) -> BackendDefinition | None:
    """Normalize an explicitly named spec; None for a bare backend."""
    if isinstance(spec, BackendDefinition):
        return spec
    if isinstance(spec, Mapping):
        if "name" not in spec or "backend" not in spec:
            raise ConfigurationError(
                "Backend mappings need 'name' and 'backend' keys", setting="backends"
            )
        return BackendDefinition(name=spec["name"], backend=spec["backend"])
    return None


def _check_capabilities(definition: BackendDefinition) -> None:
    missing = [
        operation
        for operation in BACKEND_OPERATIONS
        if not callable(getattr(definition.backend, operation, None))
    ]
    if missing:
        raise ConfigurationError(
            f"Backend '{definition.name}' does not implement: {', '.join(missing)}",
            setting="backends",
        )
