"""API route handlers."""
from . import preferences, users

__all__ = ["preferences", "users"]
