"""Tests for application settings."""

import pytest
from pydantic import ValidationError

from config import Settings


class TestPreferenceErrorPolicy:
    """Tests for the PREFERENCE_ERROR_POLICY setting."""

    def test_default_is_raise(self, monkeypatch):
        monkeypatch.delenv("PREFERENCE_ERROR_POLICY", raising=False)
        assert Settings(_env_file=None).PREFERENCE_ERROR_POLICY == "raise"

    def test_errors_policy(self, monkeypatch):
        monkeypatch.setenv("PREFERENCE_ERROR_POLICY", "ERRORS")
        assert Settings().PREFERENCE_ERROR_POLICY == "errors"

    def test_invalid_policy_rejected(self, monkeypatch):
        monkeypatch.setenv("PREFERENCE_ERROR_POLICY", "ignore")
        with pytest.raises(ValidationError, match="PREFERENCE_ERROR_POLICY"):
            Settings()


class TestDatabaseUrl:
    """Tests for the DATABASE_URL setting."""

    def test_default_is_local_sqlite(self, monkeypatch):
        monkeypatch.delenv("DATABASE_URL", raising=False)
        assert Settings(_env_file=None).DATABASE_URL.startswith("sqlite:///")

    def test_from_environment(self, monkeypatch):
        monkeypatch.setenv("DATABASE_URL", "sqlite:///:memory:")
        assert Settings().DATABASE_URL == "sqlite:///:memory:"
