"""Generation provider contracts consumed by the workflow."""

from __future__ import annotations

from typing import Any, Protocol

from pydantic import BaseModel


class GenerationResult(BaseModel):
    text: str
    metadata: dict[str, Any] | None = None


class TextGenerator(Protocol):
    """Anything that turns a prompt into generated text."""

    async def generate(self, prompt: str) -> GenerationResult: ...
