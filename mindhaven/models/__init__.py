"""SQLAlchemy models."""

from __future__ import annotations

from mindhaven.models.comment import Comment
from mindhaven.models.forum_post import ForumPost
from mindhaven.models.like import Like
from mindhaven.models.mood import Mood
from mindhaven.models.resource import Resource
from mindhaven.models.user import User

__all__ = [
    "User",
    "Comment",
    "ForumPost",
    "Like",
    "Mood",
    "Resource",
]
