"""Preferences API endpoints."""

from typing import Any

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from api.helpers import get_or_404
from database import get_db
from models import User
from preferences import InvalidPreferenceValue, UnknownPreference
from schemas import PreferenceDefinitionResponse, PreferenceResponse, PreferenceSet
from services.preference_service import PreferenceService

router = APIRouter(prefix="/api", tags=["preferences"])


def _to_response(user: User, name: str, scope: str | None) -> PreferenceResponse:
    """Resolve one preference of a user into a PreferenceResponse."""
    value, enabled = PreferenceService.get(user, name, scope)
    return PreferenceResponse(
        name=name,
        value=value,
        enabled=enabled,
        value_type=User.preference_definitions()[name].value_type,
        scope=scope,
    )


@router.get("/preferences/definitions", response_model=list[PreferenceDefinitionResponse])
def list_definitions():
    """Get every preference declared for users."""
    return PreferenceService.definitions(User)


@router.get("/users/{user_id}/preferences", response_model=dict[str, Any])
def list_preferences(user_id: str, scope: str | None = None, db: Session = Depends(get_db)):
    """Get all of a user's preferences, defaults included."""
    user = get_or_404(db, User, user_id, detail="User not found")
    return PreferenceService.get_all(user, scope)


@router.get("/users/{user_id}/preferences/{name}", response_model=PreferenceResponse)
def get_preference(
    user_id: str, name: str, scope: str | None = None, db: Session = Depends(get_db)
):
    """Get a single resolved preference."""
    user = get_or_404(db, User, user_id, detail="User not found")
    try:
        return _to_response(user, name, scope)
    except UnknownPreference as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.put("/users/{user_id}/preferences/{name}", response_model=PreferenceResponse)
def set_preference(
    user_id: str, name: str, body: PreferenceSet, db: Session = Depends(get_db)
):
    """Write a preference value and save it."""
    user = get_or_404(db, User, user_id, detail="User not found")
    try:
        PreferenceService.set(db, user, name, body.value, body.scope)
    except UnknownPreference as e:
        raise HTTPException(status_code=404, detail=str(e))
    except (InvalidPreferenceValue, ValueError) as e:
        raise HTTPException(status_code=422, detail=str(e))
    return _to_response(user, name, body.scope)
