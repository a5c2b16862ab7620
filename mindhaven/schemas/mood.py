"""Mood schemas."""

from datetime import datetime

from pydantic import BaseModel, Field

from mindhaven.models.mood import MAX_RATING, MIN_RATING


class MoodCreate(BaseModel):
    rating: int = Field(ge=MIN_RATING, le=MAX_RATING, description="Mood 0-4, saddest to happiest")
    note: str | None = Field(default=None, max_length=2000)


class MoodResponse(BaseModel):
    id: int
    user_id: int
    rating: int
    note: str | None
    created_at: datetime

    model_config = {"from_attributes": True}


class MoodStats(BaseModel):
    """Aggregate over every user's mood entries."""

    average_rating: float
    total_entries: int
    rating_distribution: dict[int, int]
