"""Resource schemas."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import AnyHttpUrl, BaseModel, Field, field_validator

ResourceType = Literal["pdf", "zip", "video", "article"]


class ResourceCreate(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    description: str = Field(min_length=1)
    type: ResourceType
    url: AnyHttpUrl

    model_config = {"str_strip_whitespace": True}

    @field_validator("type", mode="before")
    @classmethod
    def _lower_type(cls, value):
        return value.strip().lower() if isinstance(value, str) else value


class ResourceResponse(BaseModel):
    id: int
    title: str
    description: str
    type: str
    url: str
    created_at: datetime

    model_config = {"from_attributes": True}
