"""Tests for core configuration module.

Tests verify:
- Settings defaults
- GRAPHFED_* environment overrides
- Validation with clear error messages
- get_settings() singleton
"""

import pytest
from pydantic import ValidationError

from graphfed.core.config import Settings, get_settings, load_settings
from graphfed.core.exceptions import ConfigurationError


class TestSettingsDefaults:
    """Test Settings class default values."""

    def test_default_service_name(self) -> None:
        assert Settings().service_name == "graph-federation"

    def test_default_log_level_is_info(self) -> None:
        assert Settings().log_level == "INFO"

    def test_default_merge_policy_is_parallel_merge(self) -> None:
        assert Settings().merge_policy == "parallel_merge"

    def test_default_backend_name_prefix(self) -> None:
        assert Settings().backend_name_prefix == "backend_"

    def test_tracing_disabled_by_default(self) -> None:
        settings = Settings()
        assert settings.tracing_enabled is False
        assert settings.otlp_endpoint is None


class TestSettingsEnvironment:
    """Test GRAPHFED_* environment variable loading."""

    def test_merge_policy_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("GRAPHFED_MERGE_POLICY", "sequential_narrowing")
        assert Settings().merge_policy == "sequential_narrowing"

    def test_env_is_case_insensitive(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("graphfed_backend_name_prefix", "source_")
        assert Settings().backend_name_prefix == "source_"

    def test_unprefixed_variables_ignored(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MERGE_POLICY", "sequential_narrowing")
        assert Settings().merge_policy == "parallel_merge"


class TestSettingsValidation:
    """Test Settings validation."""

    def test_log_level_normalized_to_uppercase(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("GRAPHFED_LOG_LEVEL", "debug")
        assert Settings().log_level == "DEBUG"

    def test_invalid_log_level_rejected(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("GRAPHFED_LOG_LEVEL", "chatty")
        with pytest.raises(ValidationError, match="log_level"):
            Settings()

    def test_invalid_merge_policy_rejected(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("GRAPHFED_MERGE_POLICY", "fetch_everything")
        with pytest.raises(ValidationError):
            Settings()

    def test_empty_name_prefix_rejected(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("GRAPHFED_BACKEND_NAME_PREFIX", "")
        with pytest.raises(ValidationError):
            Settings()


class TestGetSettings:
    """Test get_settings() singleton."""

    def test_returns_same_instance(self) -> None:
        assert get_settings() is get_settings()

    def test_cache_clear_reloads(self, monkeypatch: pytest.MonkeyPatch) -> None:
        first = get_settings()
        monkeypatch.setenv("GRAPHFED_MERGE_POLICY", "sequential_narrowing")
        get_settings.cache_clear()
        second = get_settings()
        assert first is not second
        assert second.merge_policy == "sequential_narrowing"


class TestLoadSettings:
    """Test load_settings() error translation."""

    def test_returns_cached_settings(self) -> None:
        assert load_settings() is get_settings()

    def test_invalid_environment_raises_configuration_error(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("GRAPHFED_MERGE_POLICY", "round_robin")

        with pytest.raises(ConfigurationError) as exc_info:
            load_settings()

        assert exc_info.value.setting == "merge_policy"
        assert isinstance(exc_info.value.__cause__, ValidationError)
