"""Preference definition registry.

The registry is responsible for:
- Holding the preference definitions declared on each owning type
- Resolving a name for a type by walking its MRO (nearest definition wins)
- Tracking the single error policy active for each owning type

Definitions are process-lifetime state keyed by type identity. Subclasses
see their ancestors' definitions without copying them.
"""

import logging
from collections.abc import Callable
from typing import Any

from config import settings
from preferences.definition import BOOLEAN, PreferenceDefinition
from preferences.exceptions import UnknownPreference

logger = logging.getLogger(__name__)

RAISE = "raise"
COLLECT_ERRORS = "errors"

ERROR_POLICIES = (RAISE, COLLECT_ERRORS)

ErrorPolicy = str | Callable[[Any, Exception], Any]


class PreferenceRegistry:
    """Registry of preference definitions per owning type.

    Example:
        registry = PreferenceRegistry()
        registry.register(User, "language", "string", default="English")
        registry.lookup(User, "language").default_value  # "English"
    """

    def __init__(self):
        self._definitions: dict[type, dict[str, PreferenceDefinition]] = {}
        self._error_policies: dict[type, ErrorPolicy] = {}

    def register(
        self,
        owner_type: type,
        name: str,
        value_type: str = BOOLEAN,
        default: Any = None,
        allowed_values=None,
    ) -> PreferenceDefinition:
        """Declare a preference on an owning type.

        Re-registering a name replaces the previous definition for that
        type (last write wins).

        Raises:
            InvalidPreferenceType: If value_type is not a known type.
        """
        name = str(name)
        definition = PreferenceDefinition(
            name=name,
            value_type=value_type,
            default_value=default,
            allowed_values=tuple(allowed_values or ()),
        )
        own = self._definitions.setdefault(owner_type, {})
        if name in own:
            logger.debug("Replacing preference definition %s.%s", owner_type.__name__, name)
        own[name] = definition
        return definition

    def unregister(self, owner_type: type, name: str) -> bool:
        """Remove a definition declared directly on owner_type.

        Returns True if removed, False if the type never declared it.
        """
        own = self._definitions.get(owner_type, {})
        return own.pop(name, None) is not None

    def lookup(self, owner_type: type, name: str) -> PreferenceDefinition:
        """Get the nearest definition for name along owner_type's MRO.

        Raises:
            UnknownPreference: If neither the type nor an ancestor declares it.
        """
        name = str(name)
        for klass in owner_type.__mro__:
            own = self._definitions.get(klass)
            if own and name in own:
                return own[name]
        raise UnknownPreference(owner_type, name)

    def is_declared(self, owner_type: type, name: str) -> bool:
        try:
            self.lookup(owner_type, name)
        except UnknownPreference:
            return False
        return True

    def definitions(self, owner_type: type) -> dict[str, PreferenceDefinition]:
        """All visible definitions for owner_type, ancestors first."""
        result: dict[str, PreferenceDefinition] = {}
        for klass in reversed(owner_type.__mro__):
            result.update(self._definitions.get(klass, {}))
        return result

    def defaults(self, owner_type: type) -> dict[str, Any]:
        """Map of name -> default value for every visible definition."""
        return {name: d.default_value for name, d in self.definitions(owner_type).items()}

    def type_for(self, type_name: str) -> type | None:
        """Find a registered owning type by class name.

        Stored records only know their owner's class name, so this is how
        they get back to a definition.
        """
        for klass in self._definitions:
            if klass.__name__ == type_name:
                return klass
        return None

    def configure(self, owner_type: type, on_error: ErrorPolicy) -> None:
        """Set the invalid-value policy for owner_type (and its subclasses).

        Args:
            on_error: "raise", "errors", or a callable handler(owner, error).
        """
        if not callable(on_error) and on_error not in ERROR_POLICIES:
            raise ValueError(
                f"on_error must be one of {ERROR_POLICIES} or a callable, got {on_error!r}"
            )
        self._error_policies[owner_type] = on_error

    def error_policy(self, owner_type: type) -> ErrorPolicy:
        """Nearest configured policy, or the application-wide default."""
        for klass in owner_type.__mro__:
            if klass in self._error_policies:
                return self._error_policies[klass]
        return settings.PREFERENCE_ERROR_POLICY


registry = PreferenceRegistry()
