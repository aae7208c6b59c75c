"""Extract node: learnings and reconciled sources from the research text."""

from __future__ import annotations

import logging
from typing import Any

from article_workflow.errors import ExtractionError
from article_workflow.graph.deps import WorkflowDeps
from article_workflow.graph.state import ArticleState
from article_workflow.graph.steps import EXTRACT_STEP
from article_workflow.pipeline.metadata import extract_search_metadata
from article_workflow.pipeline.parsing import fallback_learnings, parse_learnings_and_sources
from article_workflow.pipeline.sources import merge_sources
from article_workflow.storage.models import sources_to_payload

logger = logging.getLogger(__name__)


async def run(state: ArticleState, deps: WorkflowDeps) -> ArticleState:
    article_id = state["article_id"]
    text = state.get("research_text", "")
    metadata = state.get("research_metadata")

    async def _extract() -> dict[str, Any]:
        return extract_research(article_id, text, metadata)

    extracted = await deps.step_runner.run_step(EXTRACT_STEP, _extract)
    return {
        "learnings": list(extracted["learnings"]),
        "sources": list(extracted["sources"]),
        "search_queries": list(extracted.get("search_queries", [])),
    }


def extract_research(article_id: str, text: str, metadata: Any) -> dict[str, Any]:
    parsed = parse_learnings_and_sources(text)
    search_metadata = extract_search_metadata(metadata)
    sources = merge_sources(parsed.sources, search_metadata.sources)

    learnings = parsed.learnings
    if not learnings:
        logger.warning(
            "No learning markers found, using raw lines fallback article_id=%s",
            article_id,
        )
        learnings = fallback_learnings(text)
    if not learnings:
        raise ExtractionError(
            "Failed to extract any meaningful learnings from the gathered information.",
            sources=sources,
        )

    logger.info(
        "Parsed research article_id=%s learnings=%d sources=%d queries=%d",
        article_id,
        len(learnings),
        len(sources),
        len(search_metadata.search_queries),
    )
    return {
        "learnings": learnings,
        "sources": sources_to_payload(sources),
        "search_queries": search_metadata.search_queries,
    }
