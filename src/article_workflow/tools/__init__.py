"""Generation providers."""

from article_workflow.tools.base import GenerationResult, TextGenerator
from article_workflow.tools.gemini import (
    GeminiTextGenerator,
    build_search_generator,
    build_writer_generator,
)

__all__ = [
    "GeminiTextGenerator",
    "GenerationResult",
    "TextGenerator",
    "build_search_generator",
    "build_writer_generator",
]
