"""Overlay resolver - per-instance preference cache and write-back.

Each owning instance gets one resolver. Reads resolve in this order:

1. pending (unsaved) writes and values already loaded for the scope
2. the stored record for (owner, name, scope)
3. the declared default

Writes only touch memory. The dirty set remembers, per scope and name, the
value that was current before the first write since the last flush; flush()
turns every entry whose value really changed into a record upsert.
"""

import copy
import logging
from collections.abc import Callable
from typing import Any

from preferences.definition import PreferenceDefinition, is_blank
from preferences.exceptions import InvalidPreferenceValue
from preferences.registry import COLLECT_ERRORS, RAISE, PreferenceRegistry, registry
from preferences.scope import ROOT, PreferenceScope
from preferences.store import UNSET, PreferenceStore

logger = logging.getLogger(__name__)


class PreferenceResolver:
    """Resolves, caches and stages preference values for one owner.

    Args:
        owner: The owning record.
        store: Persistence collaborator (defaults to PreferenceStore()).
        definitions: Registry to read definitions and the error policy from.
        on_change: Called with the owner whenever a scope/name becomes dirty.
    """

    def __init__(
        self,
        owner,
        store: PreferenceStore | None = None,
        definitions: PreferenceRegistry = registry,
        on_change: Callable[[Any], None] | None = None,
    ):
        self.owner = owner
        self.owner_type = type(owner)
        self.store = store or PreferenceStore()
        self.registry = definitions
        self.on_change = on_change
        self.errors: dict[str, list[str]] = {}
        self._values: dict[PreferenceScope, dict[str, Any]] = {}
        self._changed: dict[PreferenceScope, dict[str, Any]] = {}
        self._loaded_scopes: set[PreferenceScope] = set()
        self._all_loaded = False

    # -- reads ---------------------------------------------------------------

    def definition(self, name: str) -> PreferenceDefinition:
        return self.registry.lookup(self.owner_type, name)

    def get(self, name: str, scope: Any = None) -> Any:
        """Resolved value of a preference (the default when nothing is stored).

        Raises:
            UnknownPreference: If name is not declared for the owner's type.
        """
        name = str(name)
        definition = self.definition(name)
        scope = PreferenceScope.of(scope)
        group = self._group(scope)
        if name in group:
            return group[name]

        preference = None
        if not self._is_loaded(scope):
            preference = self.store.find(self.owner, name, scope)
            logger.debug(
                "Preference lookup %s[%s] for %r: %s",
                name, scope, self.owner, "hit" if preference else "miss",
            )

        value = preference.value if preference is not None else definition.default_value
        group[name] = value
        return value

    def query(self, name: str, scope: Any = None) -> bool:
        """Whether the resolved value is present/truthy for its declared type."""
        definition = self.definition(str(name))
        return definition.query(self.get(name, scope))

    def all_preferences(self, scope: Any = UNSET) -> dict[str, Any]:
        """Snapshot of every declared preference for a scope.

        Without an argument the root scope is returned with every other
        known scope nested under its key. Passing a scope (None included)
        returns just that scope's values.
        """
        defaults = self.registry.defaults(self.owner_type)

        if scope is UNSET:
            if not self._all_loaded:
                self._merge_records(self.store.find_all(self.owner))
                self._all_loaded = True
            result: dict[str, Any] = {}
            for group_scope, values in self._values.items():
                if not group_scope.is_root:
                    result[group_scope.key] = {**defaults, **values}
            # root values win over a same-named scope key
            result.update({**defaults, **self._group(ROOT)})
            return result

        scope = PreferenceScope.of(scope)
        if not self._is_loaded(scope):
            self._merge_records(self.store.find_all(self.owner, scope))
            self._group(scope)
            self._loaded_scopes.add(scope)
        return {**defaults, **self._values[scope]}

    # -- writes --------------------------------------------------------------

    def set(self, name: str, value: Any, scope: Any = None) -> Any:
        """Stage a new value; nothing is persisted until flush().

        Raises:
            UnknownPreference: If name is not declared for the owner's type.
            InvalidPreferenceValue: If the value is not allowed and the
                owner's error policy is "raise".
        """
        name = str(name)
        definition = self.definition(name)
        scope = PreferenceScope.of(scope)
        new_value = definition.type_cast(value)

        if not definition.is_allowed(new_value):
            self._handle_invalid(InvalidPreferenceValue(name, new_value, definition.allowed_values))
            return value

        if name not in self._changed.get(scope, {}):
            # get() may autoflush, which clears the dirty set
            old = copy.deepcopy(self.get(name, scope))
            changed = self._changed.setdefault(scope, {})
            if name not in changed and self._value_changed(definition, old, value):
                changed[name] = old
                if self.on_change is not None:
                    self.on_change(self.owner)

        self._group(scope)[name] = new_value
        return value

    def flush(self) -> list:
        """Write every changed scope/name to its record and clear the dirty set.

        Loaded values are kept so reads after a save need no new queries.
        Persistence errors propagate unchanged.

        Returns:
            The records that were created or updated.
        """
        written = []
        for scope, names in self._changed.items():
            for name, old in names.items():
                value = self._values[scope][name]
                if value == old:
                    continue
                preference = self.store.find_or_build(self.owner, name, scope)
                is_new = preference.id is None
                preference.value = value
                written.append(preference)
                logger.info(
                    "%s preference %s[%s] for %r",
                    "Created" if is_new else "Updated", name, scope, self.owner,
                )
        self._changed.clear()
        return written

    def reset(self) -> None:
        """Forget loaded values, pending writes and collected errors."""
        self._values.clear()
        self._changed.clear()
        self._loaded_scopes.clear()
        self._all_loaded = False
        self.errors.clear()

    @property
    def has_changes(self) -> bool:
        return any(self._changed.values())

    @property
    def changed(self) -> dict[PreferenceScope, dict[str, Any]]:
        """Dirty scope/name -> value before the first unsaved write."""
        return {scope: dict(names) for scope, names in self._changed.items() if names}

    # -- internals -----------------------------------------------------------

    def _group(self, scope: PreferenceScope) -> dict[str, Any]:
        return self._values.setdefault(scope, {})

    def _is_loaded(self, scope: PreferenceScope) -> bool:
        return self._all_loaded or scope in self._loaded_scopes

    def _merge_records(self, preferences) -> None:
        # pending writes and values already cached take precedence
        for preference in preferences:
            self._group(preference.scope).setdefault(preference.name, preference.value)

    @staticmethod
    def _value_changed(definition: PreferenceDefinition, old: Any, value: Any) -> bool:
        if definition.is_numeric and old is None:
            # blank form input for an unset integer is not a change
            value = None if is_blank(value) else definition.type_cast(value)
        else:
            value = definition.type_cast(value)
        return old != value

    def _handle_invalid(self, error: InvalidPreferenceValue) -> None:
        policy = self.registry.error_policy(self.owner_type)
        if policy == RAISE:
            raise error
        if policy == COLLECT_ERRORS:
            logger.warning("Invalid preference value for %r: %s", self.owner, error)
            self.errors.setdefault(error.name, []).append(str(error))
            return
        policy(self.owner, error)
