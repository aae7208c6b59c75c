"""Split node: separate the article title from its body."""

from __future__ import annotations

import logging

from article_workflow.graph.deps import WorkflowDeps
from article_workflow.graph.state import ArticleState
from article_workflow.graph.steps import SPLIT_STEP
from article_workflow.pipeline.splitter import has_title_heading, split_title_and_body

logger = logging.getLogger(__name__)


async def run(state: ArticleState, deps: WorkflowDeps) -> ArticleState:
    article_id = state["article_id"]
    topic = state["topic"]
    draft = state.get("draft", "")

    async def _split() -> dict[str, str]:
        title, body = split_title_and_body(draft, fallback_title=topic)
        if not has_title_heading(draft):
            logger.warning(
                "No title heading in draft, using original topic article_id=%s",
                article_id,
            )
        return {"title": title, "body": body}

    parts = await deps.step_runner.run_step(SPLIT_STEP, _split)
    return {"title": parts["title"], "body": parts["body"]}
