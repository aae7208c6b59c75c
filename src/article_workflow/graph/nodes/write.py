"""Write node: draft the long-form article from the learnings."""

from __future__ import annotations

import logging

from article_workflow.errors import ExtractionError
from article_workflow.graph.deps import WorkflowDeps
from article_workflow.graph.state import ArticleState
from article_workflow.graph.steps import WRITE_STEP
from article_workflow.pipeline.prompts import write_article_prompt

logger = logging.getLogger(__name__)


async def run(state: ArticleState, deps: WorkflowDeps) -> ArticleState:
    article_id = state["article_id"]
    learnings = list(state.get("learnings", []))

    async def _write() -> str:
        if not learnings:
            raise ExtractionError("Cannot write article: no learnings were gathered.")
        prompt = write_article_prompt(state["topic"], learnings, state["current_date"])
        result = await deps.writer_generator.generate(prompt)
        logger.info(
            "Generated article draft article_id=%s markdown_length=%d",
            article_id,
            len(result.text),
        )
        return result.text

    draft = await deps.step_runner.run_step(WRITE_STEP, _write)
    return {"draft": draft}
