"""Tests for configuration loading."""

import logging

import pytest
from pydantic import ValidationError

from splitledger.config import (
    LedgerSettings,
    LoggingSettings,
    get_settings,
    validate_all_settings,
)
from splitledger.models.ledger import AssociationPolicy


@pytest.fixture(autouse=True)
def clean_environment(tmp_path, monkeypatch):
    """Run every test away from any .env file and with a fresh cache."""
    monkeypatch.chdir(tmp_path)
    for name in (
        "SPLITLEDGER_ASSOCIATION_POLICY",
        "SPLITLEDGER_SNAPSHOT_INDENT",
        "SPLITLEDGER_AUTOLOAD_PATH",
        "SPLITLEDGER_LOG_LEVEL",
        "SPLITLEDGER_LOG_JSON_OUTPUT",
    ):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class TestLedgerSettings:
    def test_defaults(self):
        settings = LedgerSettings()
        assert settings.association_policy == AssociationPolicy.IGNORE
        assert settings.snapshot_indent == 2
        assert settings.snapshot_encoding == "utf-8"
        assert settings.autoload_path is None

    def test_environment_override(self, monkeypatch):
        monkeypatch.setenv("SPLITLEDGER_ASSOCIATION_POLICY", "reject")
        monkeypatch.setenv("SPLITLEDGER_SNAPSHOT_INDENT", "0")
        settings = LedgerSettings()
        assert settings.association_policy == AssociationPolicy.REJECT
        assert settings.snapshot_indent == 0

    def test_dotenv_file(self, tmp_path):
        (tmp_path / ".env").write_text("SPLITLEDGER_AUTOLOAD_PATH=ledger.json\n")
        assert LedgerSettings().autoload_path == "ledger.json"

    @pytest.mark.parametrize("name,value", [
        ("SPLITLEDGER_ASSOCIATION_POLICY", "sometimes"),
        ("SPLITLEDGER_SNAPSHOT_INDENT", "12"),
    ])
    def test_invalid_values(self, monkeypatch, name, value):
        monkeypatch.setenv(name, value)
        with pytest.raises(ValidationError):
            LedgerSettings()


class TestLoggingSettings:
    def test_defaults(self):
        settings = LoggingSettings()
        assert settings.level == "WARNING"
        assert settings.json_output is True
        assert settings.level_number == logging.WARNING

    def test_level_is_normalised(self, monkeypatch):
        monkeypatch.setenv("SPLITLEDGER_LOG_LEVEL", " debug ")
        settings = LoggingSettings()
        assert settings.level == "DEBUG"
        assert settings.level_number == logging.DEBUG

    def test_unknown_level(self):
        with pytest.raises(ValidationError, match="Unknown log level"):
            LoggingSettings(level="chatty")

    def test_console_rendering(self, monkeypatch):
        monkeypatch.setenv("SPLITLEDGER_LOG_JSON_OUTPUT", "false")
        assert LoggingSettings().json_output is False


class TestSettingsContainer:
    """Tests for get_settings and validate_all_settings."""

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()

    def test_sub_settings(self):
        settings = get_settings()
        assert isinstance(settings.ledger, LedgerSettings)
        assert isinstance(settings.logging, LoggingSettings)
        assert settings.app.prompt == "> "

    def test_validate_all_settings(self):
        assert validate_all_settings() == {"ledger": True, "logging": True, "app": True}

    def test_validate_reports_failures(self, monkeypatch):
        monkeypatch.setenv("SPLITLEDGER_LOG_LEVEL", "chatty")
        results = validate_all_settings()
        assert results["logging"] is False
        assert "Unknown log level" in results["logging_error"]
        assert results["ledger"] is True


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
