"""Persist node: the single terminal write of a successful run."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from article_workflow.graph.deps import WorkflowDeps
from article_workflow.graph.state import ArticleState
from article_workflow.graph.steps import PERSIST_STEP
from article_workflow.storage.models import ArticleStatus, Source

logger = logging.getLogger(__name__)


async def run(state: ArticleState, deps: WorkflowDeps) -> ArticleState:
    article_id = state["article_id"]
    title = state.get("title") or state["topic"]
    body = state.get("body", "")
    sources = [Source.model_validate(item) for item in state.get("sources", [])]

    async def _persist() -> dict[str, Any]:
        logger.info(
            "Persisting article article_id=%s title=%r content_length=%d sources=%d",
            article_id,
            title,
            len(body),
            len(sources),
        )
        record = await asyncio.to_thread(
            deps.storage.update_article,
            article_id,
            status=ArticleStatus.COMPLETE,
            content=body,
            sources=sources,
            topic=title,
        )
        return {"status": int(record.status)}

    persisted = await deps.step_runner.run_step(PERSIST_STEP, _persist)
    return {"status": int(persisted["status"])}
