"""Tests for PreferenceRegistry."""

import pytest

from preferences import (
    COLLECT_ERRORS,
    INTEGER,
    RAISE,
    STRING,
    InvalidPreferenceType,
    PreferenceRegistry,
    UnknownPreference,
)


class Vehicle:
    pass


class Truck(Vehicle):
    pass


class Pickup(Truck):
    pass


@pytest.fixture
def definitions() -> PreferenceRegistry:
    return PreferenceRegistry()


class TestRegister:
    """Tests for declaring preferences."""

    def test_register_and_lookup(self, definitions):
        definitions.register(Vehicle, "language", STRING, default="English")

        definition = definitions.lookup(Vehicle, "language")
        assert definition.name == "language"
        assert definition.value_type == STRING
        assert definition.default_value == "English"

    def test_reregister_replaces(self, definitions):
        """Re-registering a name replaces the definition (last write wins)."""
        definitions.register(Vehicle, "age", INTEGER, default=1)
        definitions.register(Vehicle, "age", INTEGER, default=2)

        assert definitions.lookup(Vehicle, "age").default_value == 2
        assert list(definitions.definitions(Vehicle)) == ["age"]

    def test_invalid_type(self, definitions):
        with pytest.raises(InvalidPreferenceType):
            definitions.register(Vehicle, "ratio", "decimal")

    def test_unregister(self, definitions):
        definitions.register(Vehicle, "wheels", INTEGER)

        assert definitions.unregister(Vehicle, "wheels") is True
        assert definitions.unregister(Vehicle, "wheels") is False
        assert not definitions.is_declared(Vehicle, "wheels")


class TestInheritance:
    """Tests for resolving definitions along the class hierarchy."""

    def test_subclass_inherits(self, definitions):
        definitions.register(Vehicle, "notifications", default=True)

        assert definitions.lookup(Pickup, "notifications").default_value is True

    def test_nearest_definition_wins(self, definitions):
        definitions.register(Vehicle, "wheels", INTEGER, default=4)
        definitions.register(Truck, "wheels", INTEGER, default=6)

        assert definitions.lookup(Vehicle, "wheels").default_value == 4
        assert definitions.lookup(Truck, "wheels").default_value == 6
        assert definitions.lookup(Pickup, "wheels").default_value == 6

    def test_later_parent_registration_is_visible(self, definitions):
        """Definitions added to a parent after the subclass exists are inherited."""
        definitions.register(Vehicle, "late", STRING)

        assert definitions.is_declared(Truck, "late")

    def test_parent_does_not_see_child(self, definitions):
        definitions.register(Truck, "payload", INTEGER)

        with pytest.raises(UnknownPreference, match="payload"):
            definitions.lookup(Vehicle, "payload")

    def test_definitions_and_defaults(self, definitions):
        definitions.register(Vehicle, "wheels", INTEGER, default=4)
        definitions.register(Vehicle, "color", STRING, default="red")
        definitions.register(Truck, "wheels", INTEGER, default=6)

        assert set(definitions.definitions(Truck)) == {"wheels", "color"}
        assert definitions.defaults(Truck) == {"wheels": 6, "color": "red"}
        assert definitions.defaults(Vehicle) == {"wheels": 4, "color": "red"}


class TestLookup:
    """Tests for unknown names and type lookup."""

    def test_unknown_preference_message(self, definitions):
        with pytest.raises(UnknownPreference) as exc_info:
            definitions.lookup(Vehicle, "missing")

        assert exc_info.value.name == "missing"
        assert exc_info.value.owner_type is Vehicle
        assert str(exc_info.value) == "Unknown preference: missing (for Vehicle)"

    def test_type_for(self, definitions):
        definitions.register(Truck, "payload", INTEGER)

        assert definitions.type_for("Truck") is Truck
        assert definitions.type_for("Boat") is None


class TestErrorPolicy:
    """Tests for per-type error policies."""

    def test_default_from_settings(self, definitions, monkeypatch):
        monkeypatch.setattr("preferences.registry.settings.PREFERENCE_ERROR_POLICY", COLLECT_ERRORS)

        assert definitions.error_policy(Vehicle) == COLLECT_ERRORS

    def test_configured_policy_is_inherited(self, definitions):
        definitions.configure(Vehicle, on_error=COLLECT_ERRORS)
        definitions.configure(Pickup, on_error=RAISE)

        assert definitions.error_policy(Truck) == COLLECT_ERRORS
        assert definitions.error_policy(Pickup) == RAISE

    def test_callable_policy(self, definitions):
        def handler(owner, error):
            return None

        definitions.configure(Truck, on_error=handler)
        assert definitions.error_policy(Pickup) is handler

    def test_invalid_policy_rejected(self, definitions):
        with pytest.raises(ValueError, match="on_error"):
            definitions.configure(Vehicle, on_error="ignore")
