"""Forum API: posts, comments, likes."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from mindhaven.core.deps import get_current_user, get_optional_user
from mindhaven.core.errors import NotFound
from mindhaven.db.session import get_db
from mindhaven.models.user import User
from mindhaven.schemas.forum import (
    CommentCreate,
    CommentResponse,
    ForumPostCreate,
    PostResponse,
    PostWithLikes,
)
from mindhaven.services.forum_service import (
    create_comment,
    create_post,
    delete_post,
    get_post,
    list_comments,
    list_posts,
    toggle_like,
)

router = APIRouter(prefix="/forum", tags=["forum"])


@router.get("/posts", response_model=list[PostWithLikes])
def get_posts(
    db: Session = Depends(get_db),
    current_user: User | None = Depends(get_optional_user),
):
    """All posts newest first with like counts. Anonymous readers never see a liked flag."""
    return list_posts(db, current_user.id if current_user else None)


@router.post("/posts", response_model=PostResponse)
def new_post(
    data: ForumPostCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return create_post(db, current_user.id, data.title, data.content)


@router.delete("/posts/{post_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_post(
    post_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Author or admin deletes a post along with its comments and likes."""
    delete_post(db, post_id, current_user)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/posts/{post_id}/comments", response_model=list[CommentResponse])
def get_comments(
    post_id: int,
    db: Session = Depends(get_db),
    _: User = Depends(get_current_user),
):
    return list_comments(db, post_id)


@router.post("/posts/{post_id}/comments", response_model=CommentResponse)
def new_comment(
    post_id: int,
    data: CommentCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return create_comment(db, current_user.id, post_id, data.content)


@router.post("/posts/{post_id}/like", response_model=PostWithLikes)
def like(
    post_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Toggle the caller's like and return the updated post."""
    toggle_like(db, current_user.id, post_id)
    post = get_post(db, post_id, current_user.id)
    if post is None:
        raise NotFound("Post not found")
    return post
