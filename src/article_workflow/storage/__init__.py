"""Storage backends and models."""

from article_workflow.storage.base import ArticleStorage, StepCheckpointStore
from article_workflow.storage.memory import InMemoryArticleStorage
from article_workflow.storage.models import ArticleRecord, ArticleStatus, Source
from article_workflow.storage.postgres import PostgresArticleStorage

__all__ = [
    "ArticleRecord",
    "ArticleStatus",
    "ArticleStorage",
    "InMemoryArticleStorage",
    "PostgresArticleStorage",
    "Source",
    "StepCheckpointStore",
]
