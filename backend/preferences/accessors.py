"""Per-name accessors for an owner's preferences.

``owner.prefs["language"]`` returns a small wrapper bound to the owner and
one definition, routing to the owner's resolver. The table is read straight
from the registry, so there is no generated code per preference.
"""

from collections.abc import Iterator, Mapping
from typing import Any

from preferences.definition import PreferenceDefinition


class PreferenceAccessor:
    """get/query/set for one declared preference on one owner."""

    def __init__(self, resolver, definition: PreferenceDefinition):
        self._resolver = resolver
        self.definition = definition

    @property
    def name(self) -> str:
        return self.definition.name

    def get(self, scope: Any = None) -> Any:
        return self._resolver.get(self.name, scope)

    def query(self, scope: Any = None) -> bool:
        return self._resolver.query(self.name, scope)

    def set(self, value: Any, scope: Any = None) -> Any:
        return self._resolver.set(self.name, value, scope)

    def __repr__(self) -> str:
        return f"<PreferenceAccessor {self.name} ({self.definition.value_type})>"


class PreferenceAccessors(Mapping):
    """Read-only mapping of preference name -> PreferenceAccessor for an owner."""

    def __init__(self, resolver):
        self._resolver = resolver

    def __getitem__(self, name: str) -> PreferenceAccessor:
        # raises UnknownPreference for undeclared names
        definition = self._resolver.definition(str(name))
        return PreferenceAccessor(self._resolver, definition)

    def __iter__(self) -> Iterator[str]:
        return iter(self._resolver.registry.definitions(self._resolver.owner_type))

    def __len__(self) -> int:
        return len(self._resolver.registry.definitions(self._resolver.owner_type))

    def __contains__(self, name: object) -> bool:
        return self._resolver.registry.is_declared(self._resolver.owner_type, str(name))
