"""Source list reconciliation."""

from __future__ import annotations

from collections.abc import Iterable

from article_workflow.storage.models import Source


def merge_sources(
    parsed_sources: Iterable[Source],
    metadata_sources: Iterable[Source],
) -> list[Source]:
    """Merge two source lists, keeping the first entry seen for each url.

    Parsed sources come first in their original order, followed by metadata
    sources whose url was not already present. Entries without a url are dropped.
    """
    merged: list[Source] = []
    seen_urls: set[str] = set()
    for source in [*parsed_sources, *metadata_sources]:
        url = (source.url or "").strip()
        if not url or url in seen_urls:
            continue
        seen_urls.add(url)
        merged.append(source if source.url == url else source.model_copy(update={"url": url}))
    return merged
