"""Preference definitions - static metadata plus type casting rules.

A definition is built once when a preference is declared on an owning type
and never changes afterwards. Values read from storage or written by callers
are coerced through ``type_cast`` using the same rules a database column of
the declared type would apply (``"0"`` is false, blank strings are null for
non-string types, and so on).
"""

import re
from collections.abc import Sized
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any

from preferences.exceptions import InvalidPreferenceType

BOOLEAN = "boolean"
INTEGER = "integer"
STRING = "string"
ANY = "any"

VALUE_TYPES = (BOOLEAN, INTEGER, STRING, ANY)

TRUE_VALUES = frozenset({True, 1, "1", "t", "T", "true", "TRUE", "True"})

_LEADING_INT_RE = re.compile(r"^\s*([+-]?\d+)")


def is_blank(value: Any) -> bool:
    """Return True for None, False, whitespace-only strings and empty collections."""
    if value is None or value is False:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, Sized):
        return len(value) == 0
    return False


def _cast_boolean(value: Any) -> bool | None:
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    try:
        return value in TRUE_VALUES
    except TypeError:  # unhashable
        return False


def _cast_integer(value: Any) -> int | None:
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, (float, Decimal)):
        return int(value)
    match = _LEADING_INT_RE.match(str(value))
    return int(match.group(1)) if match else 0


def _cast_string(value: Any) -> str | None:
    if value is None or isinstance(value, str):
        return value
    return str(value)


_CASTERS = {
    BOOLEAN: _cast_boolean,
    INTEGER: _cast_integer,
    STRING: _cast_string,
}


@dataclass(frozen=True)
class PreferenceDefinition:
    """Definition of a single preference on an owning type.

    ``default_value`` and ``allowed_values`` are type cast when the
    definition is built, so comparisons against cast values are exact.
    """

    name: str
    value_type: str = BOOLEAN
    default_value: Any = None
    allowed_values: tuple = field(default=())

    def __post_init__(self):
        if self.value_type not in VALUE_TYPES:
            raise InvalidPreferenceType(self.value_type, self.name)
        object.__setattr__(self, "default_value", self.type_cast(self.default_value))
        object.__setattr__(
            self,
            "allowed_values",
            tuple(self.type_cast(v) for v in (self.allowed_values or ())),
        )

    @property
    def is_numeric(self) -> bool:
        return self.value_type == INTEGER

    @property
    def is_enumerated(self) -> bool:
        return bool(self.allowed_values)

    def type_cast(self, value: Any) -> Any:
        """Coerce a raw stored or input value into the declared type.

        ``any`` preferences are returned untouched.
        """
        if self.value_type == ANY:
            return value
        return _CASTERS[self.value_type](value)

    def query(self, value: Any) -> bool:
        """Truthiness of a value for this preference.

        The value is type cast first. Null and false are always false,
        numbers are false only when zero, and anything else is false
        only when blank.
        """
        value = self.type_cast(value)
        if value is None or value is False:
            return False
        if self.is_numeric or (
            isinstance(value, (int, float, Decimal)) and not isinstance(value, bool)
        ):
            return value != 0
        return not is_blank(value)

    def is_allowed(self, value: Any) -> bool:
        """Check a type cast value against ``allowed_values`` (None always passes)."""
        if not self.allowed_values or value is None:
            return True
        return value in self.allowed_values
