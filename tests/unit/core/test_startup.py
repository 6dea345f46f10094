"""Tests for configure_observability()."""

import json
from unittest.mock import MagicMock

import pytest

from graphfed.core import startup
from graphfed.core.config import Settings


@pytest.fixture
def captured(monkeypatch: pytest.MonkeyPatch) -> dict[str, MagicMock]:
    """Replace logging and tracing setup with mocks."""
    mocks = {"configure_logging": MagicMock(), "setup_tracing": MagicMock()}
    for name, mock in mocks.items():
        monkeypatch.setattr(startup, name, mock)
    return mocks


class TestConfigureObservability:
    def test_tracing_disabled_by_default(self, captured: dict[str, MagicMock]) -> None:
        assert startup.configure_observability(Settings()) is None
        captured["configure_logging"].assert_called_once_with(level="INFO")
        captured["setup_tracing"].assert_not_called()

    def test_tracing_enabled(self, captured: dict[str, MagicMock]) -> None:
        settings = Settings(
            tracing_enabled=True,
            otlp_endpoint="http://collector:4317",
            service_name="kg-explorer",
        )

        provider = startup.configure_observability(settings)

        captured["setup_tracing"].assert_called_once_with(
            service_name="kg-explorer", otlp_endpoint="http://collector:4317"
        )
        assert provider is captured["setup_tracing"].return_value

    def test_reads_environment_when_no_settings_given(
        self, captured: dict[str, MagicMock], monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("GRAPHFED_LOG_LEVEL", "debug")

        startup.configure_observability()

        captured["configure_logging"].assert_called_once_with(level="DEBUG")

    def test_logs_startup_event(self, capsys: pytest.CaptureFixture[str]) -> None:
        startup.configure_observability(Settings(merge_policy="sequential_narrowing"))

        record = json.loads(capsys.readouterr().out.strip().splitlines()[-1])
        assert record["event"] == "observability_configured"
        assert record["merge_policy"] == "sequential_narrowing"
        assert record["tracing"] is False
