"""Persistence collaborator - preference record lookups through the ORM session.

Owners that are not persistent yet (no identity or no session) have no
stored records, so every lookup for them comes back empty.
"""

import logging
from typing import Any

from sqlalchemy import inspect
from sqlalchemy.orm import Session, object_session

from preferences.record import Preference
from preferences.scope import PreferenceScope, entity_type_name

logger = logging.getLogger(__name__)

UNSET: Any = object()


def owner_identity(owner) -> tuple[str, str] | None:
    """Return (owner_id, owner_type) for a persistent owner, else None."""
    state = inspect(owner)
    if not state.has_identity:
        return None
    return str(state.identity[0]), entity_type_name(state.mapper)


class PreferenceStore:
    """Point, bulk and find-or-build access to Preference records."""

    def _session(self, owner) -> Session | None:
        return object_session(owner)

    def _owner_query(self, owner):
        session = self._session(owner)
        identity = owner_identity(owner)
        if session is None or identity is None:
            return None
        owner_id, owner_type = identity
        return session.query(Preference).filter(
            Preference.owner_id == owner_id,
            Preference.owner_type == owner_type,
        )

    @staticmethod
    def _filter_scope(query, scope: PreferenceScope):
        return query.filter(
            Preference.group_id.is_(None) if scope.group_id is None
            else Preference.group_id == scope.group_id,
            Preference.group_type.is_(None) if scope.group_type is None
            else Preference.group_type == scope.group_type,
        )

    def find(self, owner, name: str, scope: PreferenceScope) -> Preference | None:
        """Point lookup by (owner, name, scope)."""
        query = self._owner_query(owner)
        if query is None:
            return None
        query = self._filter_scope(query.filter(Preference.name == name), scope)
        return query.first()

    def find_all(self, owner, scope: PreferenceScope = UNSET) -> list[Preference]:
        """All records for owner, optionally limited to one scope."""
        query = self._owner_query(owner)
        if query is None:
            return []
        if scope is not UNSET:
            query = self._filter_scope(query, scope)
        preferences = query.all()
        logger.debug(
            "Loaded %d preference records for %r (scope %s)",
            len(preferences), owner, "all" if scope is UNSET else scope,
        )
        return preferences

    def find_or_build(self, owner, name: str, scope: PreferenceScope) -> Preference:
        """Existing record for the unique tuple, or a new one attached to owner.

        New records join the owner's ``stored_preferences`` collection, which
        cascades them into the owner's session and fills in ``owner_id``
        once the owner row exists. A record already in a loaded collection is
        reused, so an owner whose insert was rolled back does not build a
        second record for the same key on retry.
        """
        # only a collection that is already loaded; never trigger a lazy load
        for preference in owner.__dict__.get("stored_preferences", ()):
            if preference.name == name and preference.scope == scope:
                return preference

        preference = self.find(owner, name, scope)
        if preference is not None:
            return preference

        preference = Preference(
            owner_type=entity_type_name(inspect(owner).mapper),
            name=name,
            group_id=scope.group_id,
            group_type=scope.group_type,
        )
        owner.stored_preferences.append(preference)
        return preference
