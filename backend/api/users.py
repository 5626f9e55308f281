"""Users API endpoints."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from api.helpers import get_or_404
from database import get_db
from models import User
from preferences import UnknownPreference
from schemas import UserCreate, UserResponse
from services.preference_service import PreferenceService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/users", tags=["users"])


@router.post("", response_model=UserResponse, status_code=201)
def create_user(body: UserCreate, db: Session = Depends(get_db)):
    """Create a user."""
    user = User(login=body.login)
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=409, detail=f"User '{body.login}' already exists")
    db.refresh(user)
    logger.info("User created: %s (id=%s)", user.login, user.id)
    return user


@router.get("", response_model=list[UserResponse])
def list_users(request: Request, db: Session = Depends(get_db)):
    """List users, optionally filtered by preference values.

    Every query parameter is a preference name, e.g.
    ``/api/users?language=Latin&notifications=false``. Parameters
    prefixed with ``not.`` match users whose value differs instead.
    """
    matching: dict[str, str] = {}
    differing: dict[str, str] = {}
    for key, value in request.query_params.items():
        if key.startswith("not."):
            differing[key[len("not."):]] = value
        else:
            matching[key] = value

    try:
        users = PreferenceService.find_owners(db, User, matching, differing)
    except UnknownPreference as e:
        raise HTTPException(status_code=400, detail=str(e))
    return sorted(users, key=lambda u: u.login)


@router.get("/{user_id}", response_model=UserResponse)
def get_user(user_id: str, db: Session = Depends(get_db)):
    """Get a single user."""
    return get_or_404(db, User, user_id, detail="User not found")
