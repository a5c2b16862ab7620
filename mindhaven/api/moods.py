"""Mood log API."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from mindhaven.core.deps import get_current_user
from mindhaven.db.session import get_db
from mindhaven.models.user import User
from mindhaven.schemas.mood import MoodCreate, MoodResponse
from mindhaven.services.mood_service import create_mood, get_user_moods

router = APIRouter(prefix="/moods", tags=["moods"])


@router.post("", response_model=MoodResponse)
def log_mood(
    data: MoodCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Record a mood for the current user."""
    return create_mood(db, current_user.id, data.rating, data.note)


@router.get("", response_model=list[MoodResponse])
def my_moods(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Current user's moods, newest first."""
    return get_user_moods(db, current_user.id)
