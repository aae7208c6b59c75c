"""PostgreSQL-backed storage with automatic table migration."""

from __future__ import annotations

import json
import logging
import threading
import uuid
from datetime import UTC, datetime
from typing import Any

from pydantic import ValidationError

from article_workflow.errors import ArticleNotFoundError
from article_workflow.storage.models import (
    ArticleRecord,
    ArticleStatus,
    Source,
    sources_to_payload,
)

logger = logging.getLogger(__name__)


class PostgresArticleStorage:
    """Persist articles and step checkpoints in PostgreSQL."""

    def __init__(self, database_url: str) -> None:
        if not database_url:
            raise ValueError("ARTICLE_WORKFLOW_DATABASE_URL is required")
        self.database_url = database_url
        self._lock = threading.Lock()
        self._psycopg, self._dict_row, self._json_wrapper = self._load_psycopg()

    def migrate(self) -> None:
        with self._lock, self._connect() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS articles (
                    article_id TEXT PRIMARY KEY,
                    topic TEXT NOT NULL,
                    owner TEXT NOT NULL,
                    status SMALLINT NOT NULL DEFAULT 1,
                    content TEXT,
                    sources TEXT,
                    created_at TIMESTAMPTZ NOT NULL,
                    updated_at TIMESTAMPTZ NOT NULL
                )
                """)
            conn.execute("""
                CREATE INDEX IF NOT EXISTS idx_articles_owner_created_at
                ON articles(owner, created_at DESC)
                """)
            conn.execute("""
                CREATE TABLE IF NOT EXISTS article_steps (
                    article_id TEXT NOT NULL REFERENCES articles(article_id) ON DELETE CASCADE,
                    step_name TEXT NOT NULL,
                    payload_json JSONB NOT NULL,
                    created_at TIMESTAMPTZ NOT NULL,
                    PRIMARY KEY (article_id, step_name)
                )
                """)
            conn.commit()

    def create_article(
        self,
        topic: str,
        owner: str,
        *,
        article_id: str | None = None,
    ) -> ArticleRecord:
        new_id = article_id or str(uuid.uuid4())
        now = datetime.now(tz=UTC)
        with self._lock, self._connect() as conn:
            conn.execute(
                """
                INSERT INTO articles (
                    article_id,
                    topic,
                    owner,
                    status,
                    content,
                    sources,
                    created_at,
                    updated_at
                ) VALUES (%s, %s, %s, %s, %s, %s, %s, %s)
                """,
                (new_id, topic, owner, int(ArticleStatus.PENDING), None, None, now, now),
            )
            conn.commit()
        created = self.get_article(new_id)
        if created is None:
            raise RuntimeError("Failed to load created article")
        return created

    def get_article(self, article_id: str) -> ArticleRecord | None:
        with self._lock, self._connect() as conn:
            row = conn.execute(
                "SELECT * FROM articles WHERE article_id = %s",
                (article_id,),
            ).fetchone()
        if row is None:
            return None
        return self._row_to_article(row)

    def update_article(
        self,
        article_id: str,
        *,
        status: ArticleStatus | None = None,
        content: str | None = None,
        sources: list[Source] | None = None,
        topic: str | None = None,
    ) -> ArticleRecord:
        assignments: list[str] = []
        params: list[Any] = []
        if status is not None:
            assignments.append("status = %s")
            params.append(int(status))
        if content is not None:
            assignments.append("content = %s")
            params.append(content)
        if sources is not None:
            assignments.append("sources = %s")
            params.append(json.dumps(sources_to_payload(sources)))
        if topic is not None:
            assignments.append("topic = %s")
            params.append(topic)
        assignments.append("updated_at = %s")
        params.append(datetime.now(tz=UTC))
        params.append(article_id)

        with self._lock, self._connect() as conn:
            cursor = conn.execute(
                f"UPDATE articles SET {', '.join(assignments)} WHERE article_id = %s",
                tuple(params),
            )
            conn.commit()
        if cursor.rowcount == 0:
            raise ArticleNotFoundError(article_id)
        refreshed = self.get_article(article_id)
        if refreshed is None:
            raise ArticleNotFoundError(article_id)
        return refreshed

    def get_step_checkpoint(self, article_id: str, step_name: str) -> Any | None:
        with self._lock, self._connect() as conn:
            row = conn.execute(
                """
                SELECT payload_json
                FROM article_steps
                WHERE article_id = %s AND step_name = %s
                """,
                (article_id, step_name),
            ).fetchone()
        if row is None:
            return None
        raw = row["payload_json"]
        return json.loads(raw) if isinstance(raw, str) else raw

    def save_step_checkpoint(self, article_id: str, step_name: str, payload: Any) -> None:
        with self._lock, self._connect() as conn:
            conn.execute(
                """
                INSERT INTO article_steps (article_id, step_name, payload_json, created_at)
                VALUES (%s, %s, %s, %s)
                ON CONFLICT (article_id, step_name)
                DO UPDATE SET payload_json = EXCLUDED.payload_json
                """,
                (article_id, step_name, self._json_wrapper(payload), datetime.now(tz=UTC)),
            )
            conn.commit()

    def _connect(self) -> Any:
        return self._psycopg.connect(self.database_url, row_factory=self._dict_row)

    @staticmethod
    def _load_psycopg() -> tuple[Any, Any, Any]:
        try:
            import psycopg
            from psycopg.rows import dict_row
            from psycopg.types.json import Json
        except ImportError as exc:  # pragma: no cover
            raise RuntimeError(
                "PostgreSQL storage requires psycopg. "
                'Install with: python -m pip install "psycopg[binary]>=3.2,<4.0"'
            ) from exc
        return psycopg, dict_row, Json

    @staticmethod
    def _parse_sources(raw: Any) -> list[Source]:
        if raw is None:
            return []
        if isinstance(raw, str):
            try:
                parsed = json.loads(raw)
            except json.JSONDecodeError:
                logger.warning("Stored sources are not valid JSON, resetting to empty")
                return []
        else:
            parsed = raw
        if not isinstance(parsed, list):
            logger.warning("Stored sources are not a list, resetting to empty")
            return []
        output: list[Source] = []
        for item in parsed:
            if not isinstance(item, dict):
                continue
            try:
                output.append(Source.model_validate(item))
            except ValidationError:
                continue
        return output

    @staticmethod
    def _parse_datetime(raw: Any) -> datetime:
        if isinstance(raw, datetime):
            return raw
        if isinstance(raw, str):
            return datetime.fromisoformat(raw)
        raise TypeError(f"Unsupported datetime value: {type(raw)!r}")

    @classmethod
    def _row_to_article(cls, row: Any) -> ArticleRecord:
        return ArticleRecord(
            article_id=str(row["article_id"]),
            topic=row["topic"],
            owner=row["owner"],
            status=ArticleStatus(int(row["status"])),
            content=row["content"],
            sources=cls._parse_sources(row.get("sources")),
            created_at=cls._parse_datetime(row["created_at"]),
            updated_at=cls._parse_datetime(row["updated_at"]),
        )
