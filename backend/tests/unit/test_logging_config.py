"""Tests for centralized logging configuration."""

import logging

import pytest
from pydantic import ValidationError

from config import Settings
from logging_config import QUIET_LOGGERS, setup_logging


@pytest.fixture
def use_log_level(monkeypatch):
    """Point logging_config at settings built with the given LOG_LEVEL."""

    def apply(level: str) -> None:
        monkeypatch.setenv("LOG_LEVEL", level)
        monkeypatch.setattr("logging_config.settings", Settings())

    return apply


class TestSetupLogging:
    """Tests for setup_logging()."""

    @pytest.mark.parametrize("level", ["INFO", "DEBUG", "WARNING"])
    def test_root_level_from_settings(self, use_log_level, level):
        use_log_level(level)
        setup_logging()
        assert logging.getLogger().level == getattr(logging, level)

    def test_quiet_loggers(self, use_log_level):
        """Library loggers stay at WARNING even when the root is DEBUG."""
        use_log_level("DEBUG")
        setup_logging()
        for name in QUIET_LOGGERS:
            assert logging.getLogger(name).level == logging.WARNING, f"{name} not quieted"

    def test_preference_loggers_follow_root(self, use_log_level):
        use_log_level("DEBUG")
        setup_logging()
        assert logging.getLogger("preferences.resolver").getEffectiveLevel() == logging.DEBUG


class TestLogLevelSetting:
    """Tests for the LOG_LEVEL setting."""

    def test_invalid_log_level_rejected(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "VERBOS")
        with pytest.raises(ValidationError, match="LOG_LEVEL"):
            Settings()

    def test_log_level_case_insensitive(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "debug")
        assert Settings().LOG_LEVEL == "DEBUG"
