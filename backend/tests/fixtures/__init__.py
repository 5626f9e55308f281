"""Test fixtures and sample data."""
import pytest
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from models import Car, Preference, User


def count_preferences(db: Session, **filters) -> int:
    """Count stored Preference rows, optionally filtered by column values.

    This is a helper function (not a fixture) for tests that assert how many
    records a save wrote.
    """
    stmt = select(func.count()).select_from(Preference).where(
        *(getattr(Preference, column) == value for column, value in filters.items())
    )
    return db.scalar(stmt)


def create_user(db: Session, login: str, **preferences) -> User:
    """Create and commit a user, writing the given root preferences first."""
    user = User(login=login)
    for name, value in preferences.items():
        user.write_preference(name, value)
    db.add(user)
    db.commit()
    return user


@pytest.fixture
def user() -> User:
    """A new user that has not been added to a session."""
    return User(login="alice")


@pytest.fixture
def persisted_user(db: Session) -> User:
    """A committed user with no stored preferences."""
    return create_user(db, "bob")


@pytest.fixture
def car(db: Session, persisted_user: User) -> Car:
    """A committed car that preferences can be scoped to."""
    car = Car(name="Roadster", user_id=persisted_user.id)
    db.add(car)
    db.commit()
    db.refresh(car)
    return car


@pytest.fixture
def other_car(db: Session, persisted_user: User) -> Car:
    """A second committed car for the same user."""
    car = Car(name="Wagon", user_id=persisted_user.id)
    db.add(car)
    db.commit()
    db.refresh(car)
    return car
