"""Split a generated markdown document into its title and body."""

from __future__ import annotations

HEADING_MARKER = "# "


def split_title_and_body(document: str, fallback_title: str) -> tuple[str, str]:
    """Return ``(title, body)`` for a markdown document.

    The title comes from the first line whose stripped form starts with ``"# "``;
    the body is everything after that line. Without such a line the fallback
    title is used and the whole document becomes the body.
    """
    lines = document.split("\n")
    index = _heading_index(lines)
    if index is None:
        return fallback_title, document.strip()
    title = lines[index].strip()[len(HEADING_MARKER) :].strip()
    body = "\n".join(lines[index + 1 :]).strip()
    return title, body


def has_title_heading(document: str) -> bool:
    return _heading_index(document.split("\n")) is not None


def _heading_index(lines: list[str]) -> int | None:
    for index, line in enumerate(lines):
        if line.strip().startswith(HEADING_MARKER):
            return index
    return None
