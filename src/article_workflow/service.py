"""Request-side helpers: submitting articles and reporting their progress."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from article_workflow.storage.base import ArticleStorage
from article_workflow.storage.models import ArticleRecord, ArticleStatus


class CreateArticleRequest(BaseModel):
    """Validated topic submitted by a user."""

    model_config = ConfigDict(str_strip_whitespace=True)

    topic: str = Field(min_length=10, max_length=500)


class ArticleStatusView(BaseModel):
    """What a poller needs to decide between running, done, and errored."""

    article_id: str
    status: ArticleStatus
    completed: bool
    has_content: bool


def submit_article(
    storage: ArticleStorage,
    request: CreateArticleRequest,
    owner: str,
) -> ArticleRecord:
    return storage.create_article(topic=request.topic, owner=owner)


def status_view(record: ArticleRecord) -> ArticleStatusView:
    return ArticleStatusView(
        article_id=record.article_id,
        status=record.status,
        completed=record.status.is_terminal,
        has_content=bool(record.content and record.content.strip()),
    )


def poll_status(storage: ArticleStorage, article_id: str) -> ArticleStatusView | None:
    record = storage.get_article(article_id)
    if record is None:
        return None
    return status_view(record)
