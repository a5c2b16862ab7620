"""Forum schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


class ForumPostCreate(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    content: str = Field(min_length=1)

    model_config = {"str_strip_whitespace": True}


class CommentCreate(BaseModel):
    content: str = Field(min_length=1)

    model_config = {"str_strip_whitespace": True}


class PostResponse(BaseModel):
    id: int
    user_id: int
    title: str
    content: str
    created_at: datetime

    model_config = {"from_attributes": True}


class PostWithLikes(PostResponse):
    """Post augmented with its like count and whether the viewer liked it."""

    likes_count: int = 0
    user_liked: bool = False


class CommentResponse(BaseModel):
    id: int
    user_id: int
    post_id: int
    content: str
    created_at: datetime

    model_config = {"from_attributes": True}
