"""Durable research-and-draft pipeline for long-form articles."""

from article_workflow.orchestrator import ArticleJob, ArticleWorkflow, WorkflowResult

__all__ = ["ArticleJob", "ArticleWorkflow", "WorkflowResult"]
