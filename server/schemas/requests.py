"""Pydantic request models for FastAPI endpoints."""

from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator

MAX_TEXT_CHARS = 4096
MAX_EXTRA_QUERIES = 4


class SearchRequest(BaseModel):
    # Blank text is a pipeline outcome (400 with a message), not a validation error
    text: Optional[str] = None
    source_type: Optional[Literal["official", "news", "blogs", "research"]] = None
    extra_queries: Optional[list[str]] = Field(None, max_length=MAX_EXTRA_QUERIES)

    @field_validator("text")
    @classmethod
    def truncate_text(cls, value):
        # Same cap as a Telegram message
        if value is None:
            return None
        return value[:MAX_TEXT_CHARS]

    @field_validator("extra_queries")
    @classmethod
    def drop_blank_queries(cls, value):
        if value is None:
            return None
        return [q.strip() for q in value if q and q.strip()]
