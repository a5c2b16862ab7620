"""Admin-only user management."""

from __future__ import annotations

import logging

from sqlalchemy import delete, or_, select
from sqlalchemy.orm import Session

from mindhaven.core.errors import NotFound
from mindhaven.db.session import commit_or_raise
from mindhaven.models.comment import Comment
from mindhaven.models.forum_post import ForumPost
from mindhaven.models.like import Like
from mindhaven.models.mood import Mood
from mindhaven.models.user import User

logger = logging.getLogger(__name__)


def list_users(db: Session) -> list[User]:
    """Every account, oldest first."""
    result = db.execute(select(User).order_by(User.created_at, User.id))
    return list(result.scalars().all())


def delete_user(db: Session, user_id: int) -> None:
    """Delete a user and everything they own in one transaction.

    Likes and comments left by others on the user's posts go too.
    """
    user = db.get(User, user_id)
    if not user:
        raise NotFound("User not found")

    own_posts = select(ForumPost.id).where(ForumPost.user_id == user_id)
    db.execute(delete(Like).where(or_(Like.user_id == user_id, Like.post_id.in_(own_posts))))
    db.execute(delete(Comment).where(or_(Comment.user_id == user_id, Comment.post_id.in_(own_posts))))
    db.execute(delete(ForumPost).where(ForumPost.user_id == user_id))
    db.execute(delete(Mood).where(Mood.user_id == user_id))
    db.delete(user)
    commit_or_raise(db, "delete user")
    logger.info("User %s deleted", user_id)
