"""Pydantic schemas for users."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, field_validator


class UserCreate(BaseModel):
    """Schema for creating a User."""

    login: str

    @field_validator("login")
    @classmethod
    def login_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("login must not be blank")
        return v


class UserResponse(BaseModel):
    """Schema for User API response."""

    id: str
    login: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
