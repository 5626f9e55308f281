"""Unit tests for the preference exception hierarchy."""

import pytest

from preferences import (
    InvalidPreferenceType,
    InvalidPreferenceValue,
    PreferenceError,
    UnknownPreference,
)


class TestExceptionHierarchy:
    """All preference exceptions are caught by except PreferenceError."""

    def test_catch_all_preference_errors(self):
        exceptions = [
            UnknownPreference("User", "theme"),
            InvalidPreferenceType("float", "ratio"),
            InvalidPreferenceValue("color", "purple", ("red",)),
        ]
        for exc in exceptions:
            with pytest.raises(PreferenceError):
                raise exc

    def test_name_is_carried(self):
        assert UnknownPreference("User", "theme").name == "theme"
        assert InvalidPreferenceType("float", "ratio").name == "ratio"
        assert InvalidPreferenceValue("color", "purple", ()).name == "color"


class TestMessages:
    """Tests for exception messages."""

    def test_unknown_with_type_name(self):
        assert str(UnknownPreference("User", "theme")) == "Unknown preference: theme (for User)"

    def test_unknown_with_class(self):
        class Account:
            pass

        assert str(UnknownPreference(Account, "x")) == "Unknown preference: x (for Account)"

    def test_invalid_value(self):
        exc = InvalidPreferenceValue("color", "purple", ("red", "blue"))
        assert str(exc) == "'purple' is not a valid value for color (allowed: 'red', 'blue')"
        assert exc.value == "purple"
        assert exc.allowed_values == ("red", "blue")

    def test_invalid_type(self):
        exc = InvalidPreferenceType("float")
        assert str(exc) == "Invalid preference type: 'float'"
        assert exc.value_type == "float"
