"""Car model - a record preferences can be scoped to."""

from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, ForeignKey, String
from sqlalchemy.orm import relationship

from database import Base, generate_uuid


class Car(Base):
    """A car owned by a user.

    Users can keep a separate set of preference values per car, e.g. a
    preferred color for one particular car.
    """

    __tablename__ = "cars"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    name = Column(String, nullable=False)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc))

    # Relationships
    user = relationship("User", back_populates="cars")
