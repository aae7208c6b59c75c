"""Adapter for grounding metadata attached to search-grounded responses."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from article_workflow.storage.models import Source

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SearchMetadata:
    sources: list[Source] = field(default_factory=list)
    search_queries: list[str] = field(default_factory=list)
    safety_ratings: Any = None


def extract_search_metadata(provider_metadata: Any) -> SearchMetadata:
    """Pull sources and search queries out of provider metadata.

    The payload shape is provider-defined and frequently partial; anything that
    does not look like the expected structure is skipped rather than raised.
    """
    if not isinstance(provider_metadata, dict):
        return SearchMetadata()
    google = provider_metadata.get("google")
    if not isinstance(google, dict):
        return SearchMetadata()

    collector = _SourceCollector()
    search_queries: list[str] = []

    grounding = google.get("groundingMetadata")
    if isinstance(grounding, dict):
        search_queries = _string_list(grounding.get("webSearchQueries"))
        for item in _dict_list(grounding.get("sources")):
            collector.add(item.get("uri"), item.get("title"))
        for chunk in _dict_list(grounding.get("groundingChunks")):
            web = chunk.get("web")
            if isinstance(web, dict):
                collector.add(web.get("uri"), web.get("title"))

    for item in _dict_list(google.get("sources")):
        collector.add(item.get("url"), item.get("title"))

    logger.debug(
        "Extracted grounding metadata sources=%d queries=%d",
        len(collector.sources),
        len(search_queries),
    )
    return SearchMetadata(
        sources=collector.sources,
        search_queries=search_queries,
        safety_ratings=google.get("safetyRatings"),
    )


class _SourceCollector:
    def __init__(self) -> None:
        self.sources: list[Source] = []
        self._seen: set[str] = set()

    def add(self, url: Any, title: Any) -> None:
        if not isinstance(url, str):
            return
        url = url.strip()
        if not url or url in self._seen:
            return
        self._seen.add(url)
        clean_title = title.strip() if isinstance(title, str) and title.strip() else None
        self.sources.append(Source(url=url, title=clean_title))


def _dict_list(value: Any) -> list[dict[str, Any]]:
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, dict)]


def _string_list(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    output: list[str] = []
    for item in value:
        if not isinstance(item, str):
            continue
        text = item.strip()
        if text:
            output.append(text)
    return output
