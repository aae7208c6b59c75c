"""Article workflow: runs the step graph and owns the task's terminal write.

A run moves the stored article from Pending to exactly one of Complete or
Failed. On success the persist step writes the body, sources and derived title.
On any failure the best-effort error record below is written (keeping the
original topic) and the triggering exception is re-raised to the caller, whose
retry policy decides what happens next.

Complete is final: the error path never overwrites it. Failed is final only for
a single run. When the host reruns a failed task and the run succeeds, the
persist step moves the record from Failed to Complete.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from datetime import UTC, date, datetime
from typing import Any

from pydantic import BaseModel, ValidationError

from article_workflow.errors import ExtractionError
from article_workflow.graph.deps import WorkflowDeps
from article_workflow.graph.state import ArticleState, initial_state
from article_workflow.graph.steps import InlineStepRunner, StepRunner
from article_workflow.graph.workflow import build_graph
from article_workflow.pipeline.prompts import format_current_date
from article_workflow.storage.base import ArticleStorage
from article_workflow.storage.models import ArticleRecord, ArticleStatus, Source
from article_workflow.tools.base import TextGenerator

logger = logging.getLogger(__name__)

ERROR_CONTENT_TEMPLATE = (
    "## Error Generating Article\n\n"
    'An error occurred while generating the article for topic: "{topic}".\n\n'
    "Error details: {details}"
)


class ArticleJob(BaseModel):
    """Immutable input of one workflow run."""

    article_id: str
    topic: str
    owner: str

    @classmethod
    def from_record(cls, record: ArticleRecord) -> ArticleJob:
        return cls(article_id=record.article_id, topic=record.topic, owner=record.owner)


class WorkflowResult(BaseModel):
    article_id: str
    status: ArticleStatus
    title: str


def error_content(topic: str, exc: BaseException) -> str:
    details = str(exc) or type(exc).__name__
    return ERROR_CONTENT_TEMPLATE.format(topic=topic, details=details)


class ArticleWorkflow:
    def __init__(
        self,
        *,
        storage: ArticleStorage,
        search_generator: TextGenerator,
        writer_generator: TextGenerator,
        clock: Callable[[], date] | None = None,
    ) -> None:
        self.storage = storage
        self.search_generator = search_generator
        self.writer_generator = writer_generator
        self._clock = clock or (lambda: datetime.now(UTC).date())

    async def run(
        self,
        job: ArticleJob,
        *,
        step_runner: StepRunner | None = None,
    ) -> WorkflowResult:
        deps = WorkflowDeps(
            storage=self.storage,
            search_generator=self.search_generator,
            writer_generator=self.writer_generator,
            step_runner=step_runner or InlineStepRunner(),
        )
        graph = build_graph(deps)
        start = initial_state(
            job.article_id,
            job.topic,
            job.owner,
            format_current_date(self._clock()),
        )
        logger.info(
            "Article workflow started article_id=%s topic=%r",
            job.article_id,
            job.topic,
        )

        latest: ArticleState = start
        try:
            async for latest in graph.astream(start, stream_mode="values"):
                pass
        except Exception as exc:
            await self._record_failure(job, latest, exc)
            raise

        title = latest.get("title") or job.topic
        logger.info(
            "Article workflow finished article_id=%s title=%r",
            job.article_id,
            title,
        )
        return WorkflowResult(
            article_id=job.article_id,
            status=ArticleStatus.COMPLETE,
            title=title,
        )

    async def _record_failure(
        self,
        job: ArticleJob,
        state: ArticleState,
        exc: Exception,
    ) -> None:
        learnings = state.get("learnings") or []
        sources = _sources_from_state(state)
        if not sources and isinstance(exc, ExtractionError):
            sources = list(exc.sources)
        logger.error(
            "Article workflow failed article_id=%s learnings=%d sources=%d "
            "has_body=%s reason=%s",
            job.article_id,
            len(learnings),
            len(sources),
            state.get("body") is not None,
            exc,
            exc_info=exc,
        )

        body = state.get("body")
        content = body if body is not None else error_content(job.topic, exc)
        try:
            current = await asyncio.to_thread(self.storage.get_article, job.article_id)
            if current is not None and current.status == ArticleStatus.COMPLETE:
                logger.warning(
                    "Article already complete, leaving record unchanged article_id=%s",
                    job.article_id,
                )
                return
            await asyncio.to_thread(
                self.storage.update_article,
                job.article_id,
                status=ArticleStatus.FAILED,
                content=content,
                sources=sources,
                topic=job.topic,
            )
            logger.info("Recorded failed status article_id=%s", job.article_id)
        except Exception:
            logger.exception(
                "Failed to persist error status article_id=%s content_snippet=%r sources=%d",
                job.article_id,
                content[:100],
                len(sources),
            )


def _sources_from_state(state: ArticleState) -> list[Source]:
    output: list[Source] = []
    raw_items: Any = state.get("sources") or []
    for item in raw_items:
        try:
            output.append(Source.model_validate(item))
        except ValidationError:
            continue
    return output
