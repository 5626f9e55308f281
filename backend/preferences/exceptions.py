"""Typed exception hierarchy for preference errors.

Callers can tell an undeclared preference name apart from a value that
is not allowed for a declared one.
"""


class PreferenceError(Exception):
    """Base exception for all preference-related errors.

    Carries the preference name so callers can identify which one failed.
    """

    def __init__(self, message: str, name: str = ""):
        self.name = name
        super().__init__(message)


class UnknownPreference(PreferenceError):
    """No definition for the name on the owning type or any of its ancestors."""

    def __init__(self, owner_type: type | str, name: str):
        self.owner_type = owner_type
        type_name = owner_type if isinstance(owner_type, str) else owner_type.__name__
        super().__init__(f"Unknown preference: {name} (for {type_name})", name)


class InvalidPreferenceType(PreferenceError):
    """A preference was declared with a type that cannot be type cast."""

    def __init__(self, value_type: str, name: str = ""):
        self.value_type = value_type
        super().__init__(f"Invalid preference type: {value_type!r}", name)


class InvalidPreferenceValue(PreferenceError):
    """A written value is not among the preference's allowed values."""

    def __init__(self, name: str, value, allowed_values: tuple):
        self.value = value
        self.allowed_values = allowed_values
        allowed = ", ".join(repr(v) for v in allowed_values)
        super().__init__(
            f"{value!r} is not a valid value for {name} (allowed: {allowed})",
            name,
        )
