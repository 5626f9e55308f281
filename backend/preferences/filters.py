"""Query-by-preference filters.

Preference definitions are not in the database, so matching an owner on a
preference value has to account for defaults: an owner matches when it has
a record holding the value, or when it has no record and the value is the
declared default. Every requested (scope, name) pair gets its own outer
join against an alias of the preferences table.

Example:
    stmt = with_preferences(User, {"notifications": True, car: {"color": "blue"}})
    users = db.scalars(stmt).all()
"""

from typing import Any

from sqlalchemy import and_, inspect, or_, select
from sqlalchemy.orm import aliased
from sqlalchemy.sql import Select

from preferences.record import Preference, encode_value
from preferences.registry import PreferenceRegistry, registry
from preferences.scope import ROOT, PreferenceScope, entity_type_name


def flatten_preferences(
    owner_cls: type, preferences: dict, definitions: PreferenceRegistry = registry
) -> dict[tuple[PreferenceScope, str], Any]:
    """Turn {name: value, scope: {name: value}} into {(scope, name): value}.

    A key that is a declared preference name is always a plain name, so
    dict values of ``any`` preferences are not mistaken for scopes.
    """
    flat: dict[tuple[PreferenceScope, str], Any] = {}
    for key, value in preferences.items():
        is_name = isinstance(key, str) and definitions.is_declared(owner_cls, key)
        if isinstance(value, dict) and not is_name:
            scope = PreferenceScope.of(key)
            for name, scoped_value in value.items():
                flat[(scope, str(name))] = scoped_value
        else:
            flat[(ROOT, str(key))] = value
    return flat


def _scope_condition(column, value):
    return column.is_(None) if value is None else column == value


def build_preference_filter(
    owner_cls: type,
    preferences: dict,
    stmt: Select | None = None,
    inverse: bool = False,
    definitions: PreferenceRegistry = registry,
) -> Select:
    """Add one outer join and one condition per requested preference to stmt.

    Raises:
        UnknownPreference: If a requested name is not declared on owner_cls.
    """
    if stmt is None:
        stmt = select(owner_cls)
    mapper = inspect(owner_cls)
    owner_pk = mapper.primary_key[0]
    owner_type = entity_type_name(mapper)

    conditions = []
    for (scope, name), value in flatten_preferences(owner_cls, preferences, definitions).items():
        definition = definitions.lookup(owner_cls, name)
        value = definition.type_cast(value)
        is_default = value == definition.default_value

        stored = aliased(Preference)
        stmt = stmt.outerjoin(
            stored,
            and_(
                stored.owner_id == owner_pk,
                stored.owner_type == owner_type,
                stored.name == name,
                _scope_condition(stored.group_id, scope.group_id),
                _scope_condition(stored.group_type, scope.group_type),
            ),
        )

        found = stored.id.isnot(None)
        missing = stored.id.is_(None)
        encoded = encode_value(value)
        if inverse:
            differs = (
                stored.raw_value.isnot(None) if encoded is None
                else or_(stored.raw_value.is_(None), stored.raw_value != encoded)
            )
            condition = and_(found, differs)
            if not is_default:
                condition = or_(condition, missing)
        else:
            matches = (
                stored.raw_value.is_(None) if encoded is None
                else stored.raw_value == encoded
            )
            condition = and_(found, matches)
            if is_default:
                condition = or_(condition, missing)
        conditions.append(condition)

    if conditions:
        stmt = stmt.where(and_(*conditions))
    return stmt


def with_preferences(owner_cls: type, preferences: dict, stmt: Select | None = None) -> Select:
    """Owners whose resolved values equal every requested value."""
    return build_preference_filter(owner_cls, preferences, stmt)


def without_preferences(owner_cls: type, preferences: dict, stmt: Select | None = None) -> Select:
    """Owners whose resolved values differ from every requested value."""
    return build_preference_filter(owner_cls, preferences, stmt, inverse=True)
