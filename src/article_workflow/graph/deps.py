"""Collaborators shared by the workflow nodes of one run."""

from __future__ import annotations

from dataclasses import dataclass

from article_workflow.graph.steps import StepRunner
from article_workflow.storage.base import ArticleStorage
from article_workflow.tools.base import TextGenerator


@dataclass(frozen=True)
class WorkflowDeps:
    storage: ArticleStorage
    search_generator: TextGenerator
    writer_generator: TextGenerator
    step_runner: StepRunner
