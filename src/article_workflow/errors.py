"""Exception types raised by the article workflow."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from article_workflow.storage.models import Source


class ArticleWorkflowError(RuntimeError):
    """Base class for failures that terminate an article run."""


class ExtractionError(ArticleWorkflowError):
    """No usable learnings could be extracted from the research output.

    ``sources`` keeps whatever was reconciled before extraction gave up.
    """

    def __init__(self, message: str, *, sources: list[Source] | None = None) -> None:
        super().__init__(message)
        self.sources = list(sources or [])


class GenerationError(ArticleWorkflowError):
    """A generation provider call failed or returned an unusable response."""

    def __init__(self, message: str, *, model: str | None = None) -> None:
        super().__init__(message)
        self.model = model


class ConfigurationError(ArticleWorkflowError):
    """Required provider configuration is missing."""


class ArticleNotFoundError(KeyError):
    """Raised by storage backends when updating an unknown article id."""

    def __init__(self, article_id: str) -> None:
        super().__init__(article_id)
        self.article_id = article_id

    def __str__(self) -> str:
        return f"Article {self.article_id} does not exist"
