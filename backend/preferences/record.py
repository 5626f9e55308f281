"""Preference record - a stored override of a declared preference."""

import json
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import CheckConstraint, Column, DateTime, Index, String, Text, UniqueConstraint
from sqlalchemy.orm import object_session

from database import Base, generate_uuid
from preferences.definition import PreferenceDefinition
from preferences.exceptions import UnknownPreference
from preferences.registry import registry
from preferences.scope import PreferenceScope


def encode_value(value: Any) -> str | None:
    """Serialize a type cast value for the ``value`` column (None stays NULL)."""
    if value is None:
        return None
    return json.dumps(value)


def decode_value(raw: str | None) -> Any:
    """Inverse of encode_value.

    Text that is not JSON (written by hand or by an older schema) comes back
    as is and is left to the definition's type cast.
    """
    if raw is None:
        return None
    try:
        return json.loads(raw)
    except ValueError:
        return raw


class Preference(Base):
    """A preferred value for one owner, one preference name and one scope.

    The owner is polymorphic: ``owner_type`` holds the owner's base mapped
    class name and ``owner_id`` its primary key. The optional group is either
    a bare label (``group_type`` only) or another record (``group_id`` plus
    ``group_type``).
    """

    __tablename__ = "preferences"
    __table_args__ = (
        UniqueConstraint(
            "owner_id", "owner_type", "name", "group_id", "group_type",
            name="uix_preference_owner_name_group",
        ),
        CheckConstraint(
            "group_id IS NULL OR group_type IS NOT NULL",
            name="ck_preference_group_type_with_id",
        ),
        Index("ix_preferences_owner", "owner_type", "owner_id"),
    )

    id = Column(String(36), primary_key=True, default=generate_uuid)
    owner_id = Column(String(36), nullable=False)
    owner_type = Column(String, nullable=False)
    name = Column(String, nullable=False)
    group_id = Column(String(36), nullable=True)
    group_type = Column(String, nullable=True)
    raw_value = Column("value", Text, nullable=True)  # JSON-serialized, NULL for None
    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc))
    updated_at = Column(
        DateTime,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    @property
    def definition(self) -> PreferenceDefinition | None:
        """The owning type's definition for this record, if still declared."""
        if not self.owner_type or not self.name:
            return None
        owner_cls = registry.type_for(self.owner_type)
        if owner_cls is None:
            return None
        try:
            return registry.lookup(owner_cls, self.name)
        except UnknownPreference:
            return None

    @property
    def value(self) -> Any:
        """Stored value, type cast through the definition when there is one."""
        value = decode_value(self.raw_value)
        definition = self.definition
        return definition.type_cast(value) if definition else value

    @value.setter
    def value(self, value: Any) -> None:
        self.raw_value = encode_value(value)

    @property
    def scope(self) -> PreferenceScope:
        return PreferenceScope(self.group_id, self.group_type)

    @property
    def group(self) -> Any:
        """The label for label scopes, the referenced record for entity scopes."""
        if self.group_id is None:
            return self.group_type
        session = object_session(self)
        if session is None:
            return None
        for mapper in Base.registry.mappers:
            if mapper.class_.__name__ == self.group_type:
                return session.get(mapper.class_, self.group_id)
        return None

    def __repr__(self) -> str:
        return (
            f"<Preference {self.owner_type}:{self.owner_id} {self.name}"
            f"[{self.scope}]={self.raw_value}>"
        )
