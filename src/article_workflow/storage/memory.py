"""In-memory storage backend for tests and database-less CLI runs."""

from __future__ import annotations

import copy
import threading
from datetime import UTC, datetime
from typing import Any
from uuid import uuid4

from article_workflow.errors import ArticleNotFoundError
from article_workflow.storage.models import ArticleRecord, ArticleStatus, Source


class InMemoryArticleStorage:
    """Dictionary-backed implementation of the article and checkpoint stores."""

    def __init__(self) -> None:
        self._articles: dict[str, ArticleRecord] = {}
        self._checkpoints: dict[tuple[str, str], Any] = {}
        self._lock = threading.Lock()

    def migrate(self) -> None:
        return None

    def create_article(
        self,
        topic: str,
        owner: str,
        *,
        article_id: str | None = None,
    ) -> ArticleRecord:
        now = datetime.now(UTC)
        record = ArticleRecord(
            article_id=article_id or str(uuid4()),
            topic=topic,
            owner=owner,
            status=ArticleStatus.PENDING,
            content=None,
            sources=[],
            created_at=now,
            updated_at=now,
        )
        with self._lock:
            if record.article_id in self._articles:
                raise ValueError(f"Article {record.article_id} already exists")
            self._articles[record.article_id] = record
        return record.model_copy(deep=True)

    def get_article(self, article_id: str) -> ArticleRecord | None:
        with self._lock:
            record = self._articles.get(article_id)
        return record.model_copy(deep=True) if record else None

    def update_article(
        self,
        article_id: str,
        *,
        status: ArticleStatus | None = None,
        content: str | None = None,
        sources: list[Source] | None = None,
        topic: str | None = None,
    ) -> ArticleRecord:
        with self._lock:
            current = self._articles.get(article_id)
            if current is None:
                raise ArticleNotFoundError(article_id)
            changes: dict[str, Any] = {"updated_at": datetime.now(UTC)}
            if status is not None:
                changes["status"] = ArticleStatus(status)
            if content is not None:
                changes["content"] = content
            if sources is not None:
                changes["sources"] = [source.model_copy() for source in sources]
            if topic is not None:
                changes["topic"] = topic
            updated = current.model_copy(update=changes, deep=True)
            self._articles[article_id] = updated
        return updated.model_copy(deep=True)

    def get_step_checkpoint(self, article_id: str, step_name: str) -> Any | None:
        with self._lock:
            payload = self._checkpoints.get((article_id, step_name))
        return copy.deepcopy(payload)

    def save_step_checkpoint(self, article_id: str, step_name: str, payload: Any) -> None:
        with self._lock:
            self._checkpoints[(article_id, step_name)] = copy.deepcopy(payload)
