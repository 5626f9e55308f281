"""Scope keys - the optional group a preference value is overridden under.

A scope is one of:
- root: no group at all, ``(None, None)``
- label: a bare label with no id, ``(None, "cars")``
- entity: another persisted record, ``("<pk>", "Car")``

Two scope arguments denote the same scope iff their normalized pairs match.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any

from sqlalchemy import inspect
from sqlalchemy.exc import NoInspectionAvailable


def _mapped_state(value: Any):
    """Return the ORM instance state for a mapped object, else None."""
    if isinstance(value, type):
        return None
    try:
        return inspect(value)
    except NoInspectionAvailable:
        return None


def entity_type_name(mapper) -> str:
    """Name stored for a mapped class: its base mapped class's name."""
    return mapper.base_mapper.class_.__name__


@dataclass(frozen=True)
class PreferenceScope:
    """Normalized (group_id, group_type) pair used as a resolver key."""

    group_id: str | None = None
    group_type: str | None = None

    @classmethod
    def of(cls, group: Any) -> "PreferenceScope":
        """Normalize a scope argument.

        Raises:
            ValueError: If group is a mapped entity without an identity yet.
        """
        if group is None:
            return ROOT
        if isinstance(group, PreferenceScope):
            return group
        if isinstance(group, Enum):
            return cls(None, str(group.value))
        state = _mapped_state(group)
        if state is not None and hasattr(state, "mapper"):
            if not state.has_identity:
                raise ValueError(
                    f"Cannot scope preferences to an unsaved {type(group).__name__}"
                )
            identity = state.identity
            group_id = identity[0] if len(identity) == 1 else ":".join(map(str, identity))
            return cls(str(group_id), entity_type_name(state.mapper))
        return cls(None, str(group))

    @property
    def is_root(self) -> bool:
        return self.group_id is None and self.group_type is None

    @property
    def is_label(self) -> bool:
        return self.group_id is None and self.group_type is not None

    @property
    def key(self) -> str | None:
        """Identifier used when nesting this scope in a snapshot."""
        if self.is_root:
            return None
        if self.is_label:
            return self.group_type
        return f"{self.group_type}:{self.group_id}"

    def __str__(self) -> str:
        return self.key or "(root)"


ROOT = PreferenceScope()
