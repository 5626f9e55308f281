"""Preference service - reads and writes preferences of a preferenced owner."""

import logging
from typing import Any

from sqlalchemy.orm import Session

from preferences import PreferenceDefinition, Preferenced

logger = logging.getLogger(__name__)


class PreferenceService:
    """Service for managing an owner's preferences.

    Reads go through the owner's resolver (pending > stored > default);
    writes are committed together with the owner.
    """

    @staticmethod
    def get_all(owner: Preferenced, scope: str | None = None) -> dict[str, Any]:
        """All preferences for owner.

        Without a scope the root values are returned with other known
        scopes nested by key; with a scope only that scope's values.
        """
        if scope is None:
            return owner.all_preferences()
        return owner.all_preferences(scope)

    @staticmethod
    def get(owner: Preferenced, name: str, scope: str | None = None) -> tuple[Any, bool]:
        """Resolved (value, truthiness) for one preference."""
        return owner.preferred(name, scope), owner.prefers(name, scope)

    @staticmethod
    def set(
        db: Session, owner: Preferenced, name: str, value: Any, scope: str | None = None
    ) -> Any:
        """Write a preference and commit. Returns the resolved value.

        Raises:
            UnknownPreference: If the name is not declared on the owner.
            InvalidPreferenceValue: If the value is not allowed ("raise" policy).
            ValueError: If the value is not allowed ("errors" policy).
        """
        owner.write_preference(name, value, scope)
        errors = owner.preference_errors.pop(name, None)
        if errors:
            db.rollback()
            raise ValueError("; ".join(errors))

        db.commit()
        logger.info("Saved preference %s for %r", name, owner)
        return owner.preferred(name, scope)

    @staticmethod
    def definitions(owner_cls: type[Preferenced]) -> list[PreferenceDefinition]:
        """Declared definitions for a model, ordered by name."""
        return sorted(owner_cls.preference_definitions().values(), key=lambda d: d.name)

    @staticmethod
    def find_owners(
        db: Session,
        owner_cls: type[Preferenced],
        preferences: dict,
        differing: dict | None = None,
    ) -> list:
        """Owners whose values equal every value in preferences.

        Values in differing must all differ from the owner's values.
        """
        stmt = owner_cls.with_preferences(preferences)
        if differing:
            stmt = owner_cls.without_preferences(differing, stmt)
        return list(db.scalars(stmt).unique().all())
