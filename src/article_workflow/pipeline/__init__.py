"""Pure text-processing stages of the article pipeline."""

from article_workflow.pipeline.metadata import SearchMetadata, extract_search_metadata
from article_workflow.pipeline.parsing import (
    ParsedResearch,
    fallback_learnings,
    parse_learnings_and_sources,
)
from article_workflow.pipeline.sources import merge_sources
from article_workflow.pipeline.splitter import split_title_and_body

__all__ = [
    "ParsedResearch",
    "SearchMetadata",
    "extract_search_metadata",
    "fallback_learnings",
    "merge_sources",
    "parse_learnings_and_sources",
    "split_title_and_body",
]
