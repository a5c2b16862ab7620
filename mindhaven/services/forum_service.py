"""Forum service: posts, comments and likes."""

from __future__ import annotations

import logging

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy import delete, desc, func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from mindhaven.core.deps import ensure_owner_or_admin
from mindhaven.core.errors import NotFound, PersistenceError, ValidationError
from mindhaven.db.session import commit_or_raise
from mindhaven.models.comment import Comment
from mindhaven.models.forum_post import ForumPost
from mindhaven.models.like import Like
from mindhaven.models.user import User
from mindhaven.schemas.forum import CommentCreate, ForumPostCreate, PostWithLikes

logger = logging.getLogger(__name__)


def _get_post_or_404(db: Session, post_id: int) -> ForumPost:
    post = db.get(ForumPost, post_id)
    if not post:
        raise NotFound("Post not found")
    return post


def create_post(db: Session, user_id: int, title: str, content: str) -> ForumPost:
    """Create a forum post after validating title and content."""
    try:
        data = ForumPostCreate(title=title, content=content)
    except PydanticValidationError as exc:
        raise ValidationError.from_pydantic(exc) from exc

    post = ForumPost(user_id=user_id, title=data.title, content=data.content)
    db.add(post)
    commit_or_raise(db, "create post")
    db.refresh(post)
    return post


def create_comment(db: Session, user_id: int, post_id: int, content: str) -> Comment:
    """Add a comment to an existing post."""
    try:
        data = CommentCreate(content=content)
    except PydanticValidationError as exc:
        raise ValidationError.from_pydantic(exc) from exc

    _get_post_or_404(db, post_id)
    comment = Comment(user_id=user_id, post_id=post_id, content=data.content)
    db.add(comment)
    try:
        db.commit()
    except IntegrityError as exc:
        # Post deleted between the lookup and the insert.
        db.rollback()
        raise NotFound("Post not found") from exc
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Failed to create comment on post %s", post_id)
        raise PersistenceError("Failed to create comment") from exc
    db.refresh(comment)
    return comment


def toggle_like(db: Session, user_id: int, post_id: int) -> bool:
    """Flip the user's like on a post. Returns True if the post is now liked.

    The unique (user_id, post_id) constraint settles concurrent toggles: a
    losing insert is treated as the like already being in place.
    """
    _get_post_or_404(db, post_id)

    existing = db.execute(
        select(Like.id).where(Like.user_id == user_id, Like.post_id == post_id)
    ).scalar_one_or_none()

    if existing is not None:
        db.execute(delete(Like).where(Like.user_id == user_id, Like.post_id == post_id))
        commit_or_raise(db, "remove like")
        return False

    db.add(Like(user_id=user_id, post_id=post_id))
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        if db.get(ForumPost, post_id) is None:
            raise NotFound("Post not found")
        logger.info("Like by user %s on post %s already recorded", user_id, post_id)
        return True
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Failed to add like by user %s on post %s", user_id, post_id)
        raise PersistenceError("Failed to add like") from exc
    return True


def list_comments(db: Session, post_id: int) -> list[Comment]:
    """Comments for a post, newest first.

    Returns an empty list on query failure so one broken subquery does not
    take down the whole forum view.
    """
    try:
        result = db.execute(
            select(Comment)
            .where(Comment.post_id == post_id)
            .order_by(desc(Comment.created_at), desc(Comment.id))
        )
        return list(result.scalars().all())
    except SQLAlchemyError:
        logger.exception("Error fetching comments for post %s", post_id)
        db.rollback()
        return []


def _like_counts(db: Session) -> dict[int, int]:
    rows = db.execute(select(Like.post_id, func.count(Like.id)).group_by(Like.post_id)).all()
    return {post_id: count for post_id, count in rows}


def _liked_post_ids(db: Session, user_id: int) -> set[int]:
    return set(db.execute(select(Like.post_id).where(Like.user_id == user_id)).scalars().all())


def _augment(post: ForumPost, counts: dict[int, int], liked: set[int]) -> PostWithLikes:
    return PostWithLikes(
        id=post.id,
        user_id=post.user_id,
        title=post.title,
        content=post.content,
        created_at=post.created_at,
        likes_count=counts.get(post.id, 0),
        user_liked=post.id in liked,
    )


def list_posts(db: Session, current_user_id: int | None = None) -> list[PostWithLikes]:
    """All posts newest first, each with its like count and the viewer's liked flag."""
    posts = db.execute(
        select(ForumPost).order_by(desc(ForumPost.created_at), desc(ForumPost.id))
    ).scalars().all()
    counts = _like_counts(db)
    liked = _liked_post_ids(db, current_user_id) if current_user_id is not None else set()
    return [_augment(post, counts, liked) for post in posts]


def get_post(db: Session, post_id: int, current_user_id: int | None = None) -> PostWithLikes | None:
    """Single post with like information, or None."""
    post = db.get(ForumPost, post_id)
    if not post:
        return None
    count = db.execute(select(func.count(Like.id)).where(Like.post_id == post_id)).scalar_one()
    liked = False
    if current_user_id is not None:
        liked = db.execute(
            select(Like.id).where(Like.post_id == post_id, Like.user_id == current_user_id)
        ).scalar_one_or_none() is not None
    return _augment(post, {post_id: count}, {post_id} if liked else set())


def delete_post(db: Session, post_id: int, user: User) -> None:
    """Delete a post with its comments and likes. Author or admin only."""
    post = _get_post_or_404(db, post_id)
    ensure_owner_or_admin(user, post.user_id)

    db.execute(delete(Like).where(Like.post_id == post_id))
    db.execute(delete(Comment).where(Comment.post_id == post_id))
    db.delete(post)
    commit_or_raise(db, "delete post")
    logger.info("Post %s deleted by user %s", post_id, user.id)
