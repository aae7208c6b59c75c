"""Step runners: the seam between the workflow and its execution substrate.

Every unit of work in a run goes through ``run_step(name, fn)``. A runner may
execute the step directly, replay a result saved by an earlier execution, or (in
tests) inject failures at a given step boundary. Step results must be
JSON-compatible and never ``None`` so they can be checkpointed.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable
from typing import Any, Protocol, TypeVar

from article_workflow.storage.base import StepCheckpointStore

T = TypeVar("T")
logger = logging.getLogger(__name__)

GATHER_STEP = "gather information"
EXTRACT_STEP = "extract learnings"
WRITE_STEP = "write article"
SPLIT_STEP = "split title"
PERSIST_STEP = "persist article"
STEP_SEQUENCE = (GATHER_STEP, EXTRACT_STEP, WRITE_STEP, SPLIT_STEP, PERSIST_STEP)


class StepRunner(Protocol):
    async def run_step(self, name: str, fn: Callable[[], Awaitable[T]]) -> T: ...


class InlineStepRunner:
    """Run each step immediately in the current event loop."""

    async def run_step(self, name: str, fn: Callable[[], Awaitable[T]]) -> T:
        started = time.perf_counter()
        logger.info("Step started step=%s", name)
        try:
            result = await fn()
        except Exception as exc:
            logger.warning(
                "Step failed step=%s duration_ms=%d reason=%s",
                name,
                _elapsed_ms(started),
                exc,
            )
            raise
        logger.info("Step finished step=%s duration_ms=%d", name, _elapsed_ms(started))
        return result


class CheckpointingStepRunner:
    """Persist step results so a retried run resumes after the last completed step."""

    def __init__(
        self,
        store: StepCheckpointStore,
        article_id: str,
        *,
        inner: StepRunner | None = None,
    ) -> None:
        self.store = store
        self.article_id = article_id
        self.inner = inner or InlineStepRunner()

    async def run_step(self, name: str, fn: Callable[[], Awaitable[T]]) -> T:
        saved: Any = await asyncio.to_thread(self.store.get_step_checkpoint, self.article_id, name)
        if saved is not None:
            logger.info(
                "Step replayed from checkpoint article_id=%s step=%s",
                self.article_id,
                name,
            )
            return saved
        result = await self.inner.run_step(name, fn)
        await asyncio.to_thread(self.store.save_step_checkpoint, self.article_id, name, result)
        return result


def _elapsed_ms(started: float) -> int:
    return int((time.perf_counter() - started) * 1000)
