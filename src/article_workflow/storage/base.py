"""Storage interfaces for the article task lifecycle."""

from __future__ import annotations

from typing import Any, Protocol

from article_workflow.storage.models import ArticleRecord, ArticleStatus, Source


class ArticleStorage(Protocol):
    def migrate(self) -> None: ...

    def create_article(
        self,
        topic: str,
        owner: str,
        *,
        article_id: str | None = None,
    ) -> ArticleRecord: ...

    def get_article(self, article_id: str) -> ArticleRecord | None: ...

    def update_article(
        self,
        article_id: str,
        *,
        status: ArticleStatus | None = None,
        content: str | None = None,
        sources: list[Source] | None = None,
        topic: str | None = None,
    ) -> ArticleRecord: ...


class StepCheckpointStore(Protocol):
    def get_step_checkpoint(self, article_id: str, step_name: str) -> Any | None: ...

    def save_step_checkpoint(self, article_id: str, step_name: str, payload: Any) -> None: ...
