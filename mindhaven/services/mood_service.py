"""Mood logging and mood statistics."""

from __future__ import annotations

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy import desc, func, select
from sqlalchemy.orm import Session

from mindhaven.core.errors import ValidationError
from mindhaven.db.session import commit_or_raise
from mindhaven.models.mood import Mood
from mindhaven.schemas.mood import MoodCreate, MoodStats


def create_mood(db: Session, user_id: int, rating: int, note: str | None = None) -> Mood:
    """Record a mood entry for the user."""
    try:
        data = MoodCreate(rating=rating, note=note)
    except PydanticValidationError as exc:
        raise ValidationError.from_pydantic(exc) from exc

    mood = Mood(user_id=user_id, rating=data.rating, note=data.note)
    db.add(mood)
    commit_or_raise(db, "create mood")
    db.refresh(mood)
    return mood


def get_user_moods(db: Session, user_id: int) -> list[Mood]:
    """The user's own mood entries, newest first."""
    result = db.execute(
        select(Mood)
        .where(Mood.user_id == user_id)
        .order_by(desc(Mood.created_at), desc(Mood.id))
    )
    return list(result.scalars().all())


def compute_mood_stats(db: Session) -> MoodStats:
    """Average, total and per-rating histogram across all users.

    Ratings that never occur are left out of the distribution; the average
    of zero entries is 0.
    """
    rows = db.execute(select(Mood.rating, func.count(Mood.id)).group_by(Mood.rating)).all()
    distribution = {rating: count for rating, count in rows}
    total = sum(distribution.values())
    average = sum(rating * count for rating, count in distribution.items()) / total if total else 0.0
    return MoodStats(
        average_rating=average,
        total_entries=total,
        rating_distribution=distribution,
    )
