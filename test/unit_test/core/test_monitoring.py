"""Unit tests for the Logfire monitoring integration.

Logfire is disabled in the test environment, so these tests cover the
disabled path and the configuration failure path without any network access.
"""

from unittest.mock import MagicMock, patch

import pytest

from access_registry.core import monitoring


@pytest.fixture(autouse=True)
def _reset_initialized(monkeypatch):
    monkeypatch.setattr(monitoring, "_initialized", False)


class TestInitializeLogfire:
    def test_disabled_does_not_configure(self, monkeypatch):
        monkeypatch.setattr(monitoring, "LOGFIRE_ENABLED", False)

        with patch.object(monitoring.logfire, "configure") as configure:
            monitoring.initialize_logfire()

        configure.assert_not_called()
        assert monitoring._initialized is False

    def test_enabled_without_token_does_not_configure(self, monkeypatch):
        monkeypatch.setattr(monitoring, "LOGFIRE_ENABLED", True)
        monkeypatch.setattr(monitoring, "LOGFIRE_TOKEN", "")

        with patch.object(monitoring.logfire, "configure") as configure:
            monitoring.initialize_logfire()

        configure.assert_not_called()
        assert monitoring._initialized is False

    def test_enabled_with_token_instruments_engine_and_app(self, monkeypatch):
        monkeypatch.setattr(monitoring, "LOGFIRE_ENABLED", True)
        monkeypatch.setattr(monitoring, "LOGFIRE_TOKEN", "token")
        engine = MagicMock()
        app = MagicMock()

        with (
            patch.object(monitoring.logfire, "configure") as configure,
            patch.object(monitoring.logfire, "instrument_sqlalchemy") as instrument_sqlalchemy,
            patch.object(monitoring.logfire, "instrument_fastapi") as instrument_fastapi,
        ):
            monitoring.initialize_logfire(app=app, engine=engine)

        configure.assert_called_once()
        instrument_sqlalchemy.assert_called_once_with(engine=engine.sync_engine)
        instrument_fastapi.assert_called_once_with(app)
        assert monitoring._initialized is True

    def test_configure_failure_leaves_monitoring_disabled(self, monkeypatch):
        monkeypatch.setattr(monitoring, "LOGFIRE_ENABLED", True)
        monkeypatch.setattr(monitoring, "LOGFIRE_TOKEN", "token")

        with patch.object(monitoring.logfire, "configure", side_effect=RuntimeError("bad token")):
            monitoring.initialize_logfire()

        assert monitoring._initialized is False


class TestEventHelpers:
    def test_log_api_request_skips_logfire_when_disabled(self):
        with patch.object(monitoring.logfire, "info") as info:
            monitoring.log_api_request("GET", "/health", 200, 1.5)

        info.assert_not_called()

    def test_log_api_request_reports_when_enabled(self, monkeypatch):
        monkeypatch.setattr(monitoring, "_initialized", True)

        with patch.object(monitoring.logfire, "info") as info:
            monitoring.log_api_request("GET", "/health", 200, 1.5)

        info.assert_called_once()
        assert info.call_args.kwargs["status_code"] == 200

    def test_log_transaction_rollback_reports_when_enabled(self, monkeypatch):
        monkeypatch.setattr(monitoring, "_initialized", True)

        with patch.object(monitoring.logfire, "warn") as warn:
            monitoring.log_transaction_rollback("IntegrityError", "duplicate key")

        warn.assert_called_once_with(
            "Transaction rolled back", error_type="IntegrityError", error_message="duplicate key"
        )
