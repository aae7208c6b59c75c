"""Command-line host for running article workflows."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from collections.abc import Sequence

from pydantic import ValidationError

from article_workflow.config.settings import Settings, get_settings
from article_workflow.errors import ArticleWorkflowError
from article_workflow.graph.steps import CheckpointingStepRunner, InlineStepRunner, StepRunner
from article_workflow.orchestrator import ArticleJob, ArticleWorkflow
from article_workflow.service import CreateArticleRequest, poll_status, submit_article
from article_workflow.storage.base import ArticleStorage
from article_workflow.storage.memory import InMemoryArticleStorage
from article_workflow.storage.postgres import PostgresArticleStorage
from article_workflow.tools.gemini import build_search_generator, build_writer_generator

logger = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="article-workflow",
        description="Research a topic and generate a long-form article.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    generate = subparsers.add_parser("generate", help="Create an article and run the workflow.")
    generate.add_argument("topic", help="Article topic (10-500 characters).")
    generate.add_argument("--owner", default="cli", help="Owner identity stored on the record.")

    status = subparsers.add_parser("status", help="Show the status of a stored article.")
    status.add_argument("article_id")
    return parser.parse_args(argv)


def build_storage(settings: Settings) -> ArticleStorage:
    database_url = settings.resolved_database_url()
    if not database_url:
        logger.warning("No database URL configured, using in-memory storage")
        return InMemoryArticleStorage()
    storage = PostgresArticleStorage(database_url)
    storage.migrate()
    return storage


def build_workflow(settings: Settings, storage: ArticleStorage) -> ArticleWorkflow:
    config = settings.provider_config()
    return ArticleWorkflow(
        storage=storage,
        search_generator=build_search_generator(config, settings),
        writer_generator=build_writer_generator(config, settings),
    )


def _generate(settings: Settings, storage: ArticleStorage, topic: str, owner: str) -> int:
    try:
        request = CreateArticleRequest(topic=topic)
    except ValidationError as exc:
        print(f"Invalid topic: {exc.errors()[0]['msg']}", file=sys.stderr)
        return 2

    workflow = build_workflow(settings, storage)
    record = submit_article(storage, request, owner)
    runner: StepRunner = (
        CheckpointingStepRunner(storage, record.article_id)
        if settings.checkpoint_steps
        else InlineStepRunner()
    )

    exit_code = 0
    try:
        asyncio.run(workflow.run(ArticleJob.from_record(record), step_runner=runner))
    except ArticleWorkflowError as exc:
        print(f"Article generation failed: {exc}", file=sys.stderr)
        exit_code = 1
    except Exception as exc:
        logger.exception("Article generation crashed article_id=%s", record.article_id)
        print(f"Article generation failed: {exc}", file=sys.stderr)
        exit_code = 1

    final = storage.get_article(record.article_id)
    if final is not None:
        print(final.model_dump_json(indent=2))
    return exit_code


def _status(storage: ArticleStorage, article_id: str) -> int:
    view = poll_status(storage, article_id)
    if view is None:
        print(f"Article {article_id} not found", file=sys.stderr)
        return 2
    print(json.dumps(view.model_dump(mode="json"), indent=2))
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
    storage = build_storage(settings)

    if args.command == "generate":
        return _generate(settings, storage, args.topic, args.owner)
    return _status(storage, args.article_id)
