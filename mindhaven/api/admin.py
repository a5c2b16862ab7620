"""Admin API. Every route requires an admin."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from mindhaven.core.deps import require_admin
from mindhaven.db.session import get_db
from mindhaven.schemas.auth import UserMe
from mindhaven.schemas.mood import MoodStats
from mindhaven.services.admin_service import delete_user, list_users
from mindhaven.services.mood_service import compute_mood_stats
from mindhaven.services.resource_service import delete_resource

router = APIRouter(prefix="/admin", tags=["admin"], dependencies=[Depends(require_admin)])


@router.get("/users", response_model=list[UserMe])
def all_users(db: Session = Depends(get_db)):
    return list_users(db)


@router.delete("/users/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_user(user_id: int, db: Session = Depends(get_db)):
    delete_user(db, user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/resources/{resource_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_resource(resource_id: int, db: Session = Depends(get_db)):
    delete_resource(db, resource_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/mood-stats", response_model=MoodStats)
def mood_stats(db: Session = Depends(get_db)):
    """Average, total and distribution of every user's mood ratings."""
    return compute_mood_stats(db)
