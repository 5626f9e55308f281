"""Pydantic schemas for user preferences."""

from typing import Any

from pydantic import BaseModel


class PreferenceSet(BaseModel):
    """Request body for setting a preference value."""

    value: Any
    scope: str | None = None  # label scope, e.g. "cars"; omitted for the root scope


class PreferenceResponse(BaseModel):
    """Response schema for a single resolved preference."""

    name: str
    value: Any
    enabled: bool  # truthiness of the value for its declared type
    value_type: str
    scope: str | None = None


class PreferenceDefinitionResponse(BaseModel):
    """Response schema for a declared preference."""

    name: str
    value_type: str
    default_value: Any
    allowed_values: list[Any]

    model_config = {"from_attributes": True}
