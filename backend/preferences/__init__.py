"""Typed, per-record preferences for SQLAlchemy models."""

from .exceptions import (
    InvalidPreferenceType,
    InvalidPreferenceValue,
    PreferenceError,
    UnknownPreference,
)
from .definition import ANY, BOOLEAN, INTEGER, STRING, PreferenceDefinition
from .registry import COLLECT_ERRORS, RAISE, PreferenceRegistry
from .scope import ROOT, PreferenceScope
from .record import Preference
from .resolver import PreferenceResolver
from .mixin import Preferenced

__all__ = [
    "ANY", "BOOLEAN", "COLLECT_ERRORS", "INTEGER", "RAISE", "ROOT", "STRING",
    "InvalidPreferenceType", "InvalidPreferenceValue", "Preference", "PreferenceDefinition",
    "PreferenceError", "PreferenceRegistry", "PreferenceResolver", "PreferenceScope",
    "Preferenced", "UnknownPreference",
]
