"""Daily quote schema."""

from pydantic import BaseModel, Field


class QuoteResponse(BaseModel):
    content: str
    author: str
    tags: list[str] = Field(default_factory=list)
    fallback: bool = False
