from __future__ import annotations

from collections.abc import Awaitable, Callable
from datetime import date
from typing import Any, TypeVar

import pytest

from article_workflow.graph.steps import InlineStepRunner
from article_workflow.orchestrator import ArticleJob, ArticleWorkflow
from article_workflow.storage.memory import InMemoryArticleStorage
from article_workflow.storage.models import ArticleRecord, ArticleStatus
from article_workflow.tools.base import GenerationResult

T = TypeVar("T")

TOPIC = "Project-based learning in middle school science"
FIXED_DATE = date(2026, 10, 16)

RESEARCH_TEXT = """Here is what I found.
SOURCE_TITLE: Edutopia - Project-Based Learning
SOURCE_URL: https://www.edutopia.org/pbl
LEARNING: Projects anchored in real community problems raise student engagement.
LEARNING: Teachers should plan checkpoints so groups get feedback before the final product.
SOURCE_TITLE: ASCD - Leading PBL
SOURCE_URL: https://www.ascd.org/pbl-leadership
LEARNING: Principals support PBL by protecting common planning time for teacher teams.
"""

RESEARCH_METADATA = {
    "google": {
        "groundingMetadata": {
            "webSearchQueries": ["project based learning middle school"],
            "groundingChunks": [
                {"web": {"uri": "https://www.ascd.org/pbl-leadership", "title": "Duplicate"}},
                {"web": {"uri": "https://www.pblworks.org/", "title": "PBLWorks"}},
            ],
        }
    }
}

DRAFT_TEXT = """# Making Projects Work in Middle School Science

Project-based learning turns students into investigators.

## Getting Started
Start with a driving question.
"""


class ScriptedGenerator:
    """Generator double returning canned results and recording prompts."""

    def __init__(
        self,
        text: str = "",
        *,
        metadata: dict[str, Any] | None = None,
        error: Exception | None = None,
    ) -> None:
        self.text = text
        self.metadata = metadata
        self.error = error
        self.prompts: list[str] = []

    @property
    def calls(self) -> int:
        return len(self.prompts)

    async def generate(self, prompt: str) -> GenerationResult:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return GenerationResult(text=self.text, metadata=self.metadata)


class StepInjectedError(RuntimeError):
    pass


class RecordingStepRunner:
    """Runs steps inline, remembers their names, and can fail at one boundary."""

    def __init__(self, fail_at: str | None = None) -> None:
        self.fail_at = fail_at
        self.executed: list[str] = []
        self._inner = InlineStepRunner()

    async def run_step(self, name: str, fn: Callable[[], Awaitable[T]]) -> T:
        if name == self.fail_at:
            raise StepInjectedError(f"injected failure at {name}")
        result = await self._inner.run_step(name, fn)
        self.executed.append(name)
        return result


class FlakyStorage(InMemoryArticleStorage):
    """In-memory storage whose updates fail for selected statuses."""

    def __init__(self, fail_statuses: set[ArticleStatus] | None = None) -> None:
        super().__init__()
        self.fail_statuses = fail_statuses or set()
        self.update_attempts: list[ArticleStatus | None] = []

    def update_article(self, article_id: str, **kwargs: Any) -> ArticleRecord:
        status = kwargs.get("status")
        self.update_attempts.append(status)
        if status in self.fail_statuses:
            raise ConnectionError(f"database unavailable while writing status {status}")
        return super().update_article(article_id, **kwargs)


@pytest.fixture
def storage() -> InMemoryArticleStorage:
    return InMemoryArticleStorage()


def make_workflow(
    storage: InMemoryArticleStorage,
    *,
    search: ScriptedGenerator | None = None,
    writer: ScriptedGenerator | None = None,
) -> ArticleWorkflow:
    return ArticleWorkflow(
        storage=storage,
        search_generator=search or ScriptedGenerator(RESEARCH_TEXT, metadata=RESEARCH_METADATA),
        writer_generator=writer or ScriptedGenerator(DRAFT_TEXT),
        clock=lambda: FIXED_DATE,
    )


def create_job(storage: InMemoryArticleStorage, topic: str = TOPIC) -> ArticleJob:
    record = storage.create_article(topic, "user-1")
    return ArticleJob.from_record(record)
