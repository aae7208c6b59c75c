"""Line-marker parser for research output.

The research prompt asks the model to emit one record per line:

    SOURCE_TITLE: Some page title
    SOURCE_URL: https://example.org/page
    LEARNING: One detailed insight.

Titles pair with the next URL only, so parsing is a single pass that carries the
pending title from line to line.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from article_workflow.storage.models import Source

LEARNING_MARKER = "LEARNING:"
SOURCE_TITLE_MARKER = "SOURCE_TITLE:"
SOURCE_URL_MARKER = "SOURCE_URL:"
SOURCE_MARKER_FAMILY = "SOURCE_"
FALLBACK_MIN_LINE_LENGTH = 10


@dataclass(frozen=True)
class ParsedResearch:
    learnings: list[str] = field(default_factory=list)
    sources: list[Source] = field(default_factory=list)


def parse_learnings_and_sources(text: str) -> ParsedResearch:
    learnings: list[str] = []
    sources: list[Source] = []
    seen_urls: set[str] = set()
    pending_title: str | None = None

    for line in text.split("\n"):
        stripped = line.strip()
        if stripped.startswith(LEARNING_MARKER):
            learning = stripped[len(LEARNING_MARKER) :].strip()
            if learning:
                learnings.append(learning)
        elif stripped.startswith(SOURCE_TITLE_MARKER):
            pending_title = stripped[len(SOURCE_TITLE_MARKER) :].strip()
        elif stripped.startswith(SOURCE_URL_MARKER):
            url = stripped[len(SOURCE_URL_MARKER) :].strip()
            if not url:
                continue
            if url not in seen_urls:
                seen_urls.add(url)
                sources.append(Source(url=url, title=pending_title))
            pending_title = None

    return ParsedResearch(learnings=learnings, sources=sources)


def fallback_learnings(text: str) -> list[str]:
    """Treat every substantial non-source line as a learning."""
    output: list[str] = []
    for line in text.split("\n"):
        stripped = line.strip()
        if len(stripped) <= FALLBACK_MIN_LINE_LENGTH:
            continue
        if stripped.startswith(SOURCE_MARKER_FAMILY):
            continue
        output.append(stripped)
    return output
