"""Typed state contract for the article workflow graph."""

from typing import Any, TypedDict


class ArticleState(TypedDict, total=False):
    article_id: str
    topic: str
    owner: str
    current_date: str
    research_text: str
    research_metadata: dict[str, Any] | None
    learnings: list[str]
    sources: list[dict[str, Any]]
    search_queries: list[str]
    draft: str
    title: str
    body: str
    status: int


def initial_state(article_id: str, topic: str, owner: str, current_date: str) -> ArticleState:
    return {
        "article_id": article_id,
        "topic": topic,
        "owner": owner,
        "current_date": current_date,
        "learnings": [],
        "sources": [],
        "search_queries": [],
    }
