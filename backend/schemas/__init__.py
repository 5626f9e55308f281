"""Pydantic schemas for API request/response validation."""

from .preference import PreferenceDefinitionResponse, PreferenceResponse, PreferenceSet
from .user import UserCreate, UserResponse

__all__ = [
    "PreferenceDefinitionResponse", "PreferenceResponse", "PreferenceSet",
    "UserCreate", "UserResponse",
]
