"""SQLAlchemy ORM models."""

from preferences.record import Preference

from .car import Car
from .user import User

__all__ = ["Car", "Preference", "User"]
