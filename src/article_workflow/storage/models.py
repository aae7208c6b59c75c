"""Storage models shared by the workflow and persistence backends."""

from __future__ import annotations

from datetime import datetime
from enum import IntEnum
from typing import Any

from pydantic import BaseModel, Field


class ArticleStatus(IntEnum):
    """Lifecycle status stored with every article."""

    PENDING = 1
    COMPLETE = 2
    FAILED = 3

    @property
    def is_terminal(self) -> bool:
        return self is not ArticleStatus.PENDING


class Source(BaseModel):
    """A reference supporting generated content."""

    url: str
    title: str | None = None

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)


class ArticleRecord(BaseModel):
    """Persisted article generation task."""

    article_id: str
    topic: str
    owner: str
    status: ArticleStatus = ArticleStatus.PENDING
    content: str | None = None
    sources: list[Source] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime


def sources_to_payload(sources: list[Source]) -> list[dict[str, Any]]:
    return [source.to_payload() for source in sources]
