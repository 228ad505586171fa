"""Pydantic result models for extracted articles."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator


class ArticleMetadata(BaseModel):
    """Link-preview level data for a page: title, thumbnail, date, author."""

    model_config = ConfigDict(frozen=True)

    title: str
    thumbnail_url: str | None = None
    description: str | None = None
    published_date: datetime | None = None
    author: str | None = None
    word_count: int | None = None

    @field_validator("title", mode="before")
    @classmethod
    def strip_title(cls, v: Any) -> Any:
        if isinstance(v, str):
            v = v.strip()
            if not v:
                raise ValueError("title must not be empty")
        return v

    @field_validator("thumbnail_url", "description", "author", mode="before")
    @classmethod
    def blank_to_none(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip() or None
        return v


class ArticleContent(ArticleMetadata):
    """Metadata plus the article body rendered as Markdown."""

    content: str
