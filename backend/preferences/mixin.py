"""Preferenced mixin - declares preferences on a mapped model.

Usage:
    class User(Preferenced, Base):
        __tablename__ = "users"
        id = Column(String(36), primary_key=True, default=generate_uuid)

    User.preference("notifications", default=True)
    User.preference("language", "string", default="English")

    user.preferred("language")              # "English"
    user.write_preference("language", "Latin")
    user.prefs["language"].get()            # "Latin"
    db.commit()                             # stores one Preference record

Values are written to the database when the owner's session flushes, in
the same unit of work as the owner itself. A full expiry of the owner
(commit, rollback, expire(), refresh()) drops cached and unsaved values.
"""

import logging
from typing import Any

from sqlalchemy import and_, event
from sqlalchemy.orm import Session, foreign, object_session, relationship, remote
from sqlalchemy.orm.attributes import flag_dirty
from sqlalchemy.sql import Select

from preferences.accessors import PreferenceAccessors
from preferences.definition import BOOLEAN, PreferenceDefinition
from preferences.filters import with_preferences, without_preferences
from preferences.record import Preference
from preferences.registry import ErrorPolicy, registry
from preferences.resolver import PreferenceResolver
from preferences.scope import entity_type_name
from preferences.store import UNSET

logger = logging.getLogger(__name__)

_RESOLVER_KEY = "_preference_resolver"


class Preferenced:
    """Mixin for declarative models that carry preferences."""

    @classmethod
    def preference(
        cls,
        name: str,
        value_type: str = BOOLEAN,
        default: Any = None,
        allowed_values=None,
    ) -> PreferenceDefinition:
        """Declare a preference for every record of this model and its subclasses."""
        return registry.register(cls, name, value_type, default, allowed_values)

    @classmethod
    def preference_options(cls, on_error: ErrorPolicy) -> None:
        """Choose how invalid enumerated values are reported for this model."""
        registry.configure(cls, on_error=on_error)

    @classmethod
    def preference_definitions(cls) -> dict[str, PreferenceDefinition]:
        return registry.definitions(cls)

    @classmethod
    def default_preferences(cls) -> dict[str, Any]:
        return registry.defaults(cls)

    @classmethod
    def with_preferences(cls, preferences: dict, stmt: Select | None = None) -> Select:
        return with_preferences(cls, preferences, stmt)

    @classmethod
    def without_preferences(cls, preferences: dict, stmt: Select | None = None) -> Select:
        return without_preferences(cls, preferences, stmt)

    @property
    def preference_resolver(self) -> PreferenceResolver:
        resolver = self.__dict__.get(_RESOLVER_KEY)
        if resolver is None:
            resolver = PreferenceResolver(self, on_change=flag_dirty)
            self.__dict__[_RESOLVER_KEY] = resolver
        return resolver

    @property
    def prefs(self) -> PreferenceAccessors:
        """Lookup table of name -> accessor with get/query/set."""
        return PreferenceAccessors(self.preference_resolver)

    @property
    def preference_errors(self) -> dict[str, list[str]]:
        """Invalid values collected under the "errors" policy, by name."""
        return self.preference_resolver.errors

    def preferred(self, name: str, scope: Any = None) -> Any:
        """Current value of a preference, or its default."""
        return self.preference_resolver.get(name, scope)

    def prefers(self, name: str, scope: Any = None) -> bool:
        """Whether a value is present for the preference, per its type."""
        return self.preference_resolver.query(name, scope)

    def write_preference(self, name: str, value: Any, scope: Any = None) -> Any:
        """Set a preference; it is stored when this record's session flushes."""
        return self.preference_resolver.set(name, value, scope)

    def all_preferences(self, scope: Any = UNSET) -> dict[str, Any]:
        """Every preference with defaults filled in.

        With no argument, other scopes that have values are nested by key.
        """
        return self.preference_resolver.all_preferences(scope)

    def reload(self) -> None:
        """Reload attributes from the database and drop unsaved preferences."""
        session = object_session(self)
        if session is not None:
            session.refresh(self)
        self.preference_resolver.reset()


@event.listens_for(Preferenced, "mapper_configured", propagate=True)
def _setup_stored_preferences(mapper, class_):
    # subclasses in an inheritance hierarchy share the base class association
    if mapper.inherits is not None:
        return
    owner_type = entity_type_name(mapper)
    class_.stored_preferences = relationship(
        Preference,
        primaryjoin=and_(
            mapper.primary_key[0] == foreign(remote(Preference.owner_id)),
            Preference.owner_type == owner_type,
        ),
        cascade="all",
        overlaps="stored_preferences",
    )
    logger.debug("Configured stored_preferences for %s", owner_type)


@event.listens_for(Preferenced, "expire", propagate=True)
def _reset_preferences(target, attrs):
    if attrs is not None:
        return
    resolver = target.__dict__.get(_RESOLVER_KEY)
    if resolver is not None:
        resolver.reset()


@event.listens_for(Session, "before_flush")
def _flush_preferences(session, flush_context, instances):
    for owner in list(session.new) + list(session.dirty):
        if not isinstance(owner, Preferenced):
            continue
        resolver = owner.__dict__.get(_RESOLVER_KEY)
        if resolver is not None and resolver.has_changes:
            resolver.flush()
