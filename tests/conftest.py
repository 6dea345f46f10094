"""pytest configuration and fixtures for graph-federation tests.

Shared fixtures for unit tests: entity factories, settings isolation and
logging isolation.
"""

from __future__ import annotations

import os
from collections.abc import Generator

import pytest

from graphfed.core.config import get_settings
from graphfed.core.logging import reset_logging
from graphfed.models.entities import ElementModel
from tests.unit.factories import make_element


# =============================================================================
# Markers
# =============================================================================


def pytest_configure(config: pytest.Config) -> None:
    """Register custom pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests (fast, no external dependencies)")


# =============================================================================
# Isolation Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Drop GRAPHFED_* variables and the cached Settings around each test."""
    for key in list(os.environ):
        if key.upper().startswith("GRAPHFED_"):
            monkeypatch.delenv(key)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture(autouse=True)
def clean_logging() -> Generator[None, None, None]:
    """Let each test configure logging from scratch."""
    reset_logging()
    yield
    reset_logging()


# =============================================================================
# Entity Fixtures
# =============================================================================


@pytest.fixture
def elements() -> dict[str, ElementModel]:
    """Three people, keyed by id."""
    return {
        "alice": make_element("alice", "Alice", "Person"),
        "bob": make_element("bob", "Bob", "Person"),
        "carol": make_element("carol", "Carol", "Person"),
    }
