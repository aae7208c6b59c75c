"""Gather node: grounded-search research on the topic."""

from __future__ import annotations

import logging
from typing import Any

from article_workflow.graph.deps import WorkflowDeps
from article_workflow.graph.state import ArticleState
from article_workflow.graph.steps import GATHER_STEP
from article_workflow.pipeline.prompts import gather_info_prompt

logger = logging.getLogger(__name__)


async def run(state: ArticleState, deps: WorkflowDeps) -> ArticleState:
    article_id = state["article_id"]
    prompt = gather_info_prompt(state["topic"], state["current_date"])

    async def _gather() -> dict[str, Any]:
        result = await deps.search_generator.generate(prompt)
        logger.info(
            "Gathered research article_id=%s text_length=%d",
            article_id,
            len(result.text),
        )
        return {"text": result.text, "metadata": result.metadata}

    gathered = await deps.step_runner.run_step(GATHER_STEP, _gather)
    return {
        "research_text": gathered.get("text") or "",
        "research_metadata": gathered.get("metadata"),
    }
