"""Prompt builders for the research and drafting steps."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date

from article_workflow.pipeline.parsing import (
    LEARNING_MARKER,
    SOURCE_TITLE_MARKER,
    SOURCE_URL_MARKER,
)


def format_current_date(value: date) -> str:
    """Render a date the way prompts show it, e.g. ``October 16, 2026``."""
    return f"{value.strftime('%B')} {value.day}, {value.year}"


def gather_info_prompt(topic: str, current_date: str) -> str:
    return f"""[GOOGLE SEARCH REQUEST] {topic} in education comprehensive guide

Today's date is {current_date}.
You are a research assistant for K-12 teachers, principals, and school administrators.
Gather comprehensive, current information and reliable sources about "{topic}".

Focus on classroom practice, school leadership, pedagogy, student outcomes, and
implementation across grade levels and subject areas.

RESPONSE FORMAT (follow exactly, one record per line):
- Each learning is a detailed insight, strategy, statistic, or challenge with its
  solution, written in 3-5 specific sentences.
- Provide at least 20 distinct learnings covering different facets of the topic.
- Prefix every learning with "{LEARNING_MARKER} ".
- List every source you used. Prefix each URL with "{SOURCE_URL_MARKER} ".
- On the line immediately before each URL give a concise title prefixed with
  "{SOURCE_TITLE_MARKER} ".
- Prefer authoritative educational sites, academic journals, professional
  organizations, and government resources.

Example:
{SOURCE_TITLE_MARKER} Edutopia - Collaborative Learning in Practice
{SOURCE_URL_MARKER} https://www.edutopia.org/collaborative-learning-benefits
{LEARNING_MARKER} Collaborative learning builds communication and leadership skills when groups of 3-4 students work with clearly defined roles.

Cover core concepts, practical classroom strategies, leadership considerations,
research on impact, common challenges with solutions, trends as of {current_date},
grade-level and subject-area adaptations, equity considerations, professional
development, costs and resources, family engagement, and evaluation methods.
"""


def write_article_prompt(topic: str, learnings: Sequence[str], current_date: str) -> str:
    learnings_block = "\n".join(f"<learning>\n{learning}\n</learning>" for learning in learnings)
    return f"""You write comprehensive, practical articles for K-12 teachers, principals, and
school administrators. Today's date is {current_date}.

Write a thorough article (at least 2000 words) on the topic: "{topic}".

Base the article on these research learnings, expanding each one with context,
examples, and step-by-step implementation guidance:
<learnings>
{learnings_block}
</learnings>

STRUCTURE:
# [A specific, descriptive title derived from the learnings]

An engaging introduction, then 4-5 sections with "## " headings and "### "
subsections covering foundations, classroom implementation, leadership planning,
implementation challenges, and future directions, followed by "## Conclusion".

GUIDELINES:
- Output pure Markdown. Start directly with the "# " title line.
- Use tables, bullet points, numbered lists, and checklists to organize guidance.
- Do not include a "Sources" or "References" section.
- Do not add commentary before the title or after the conclusion.
- Keep the content relevant as of {current_date}.
"""
