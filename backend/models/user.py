"""User model - the owner of preferences in this application."""

from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, String
from sqlalchemy.orm import relationship

from database import Base, generate_uuid
from preferences import BOOLEAN, INTEGER, STRING
from preferences.mixin import Preferenced


class User(Preferenced, Base):
    """An application user with per-user (and per-car) preferences."""

    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    login = Column(String, unique=True, index=True, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc))
    updated_at = Column(
        DateTime,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    # Relationships
    cars = relationship("Car", back_populates="user")


User.preference("notifications", BOOLEAN, default=True)
User.preference("language", STRING, default="English")
User.preference("color", STRING, allowed_values=["red", "green", "blue"])
User.preference("age", INTEGER)
