import pytest

from article_workflow.graph.steps import CheckpointingStepRunner, InlineStepRunner
from article_workflow.storage.memory import InMemoryArticleStorage


@pytest.mark.asyncio
async def test_inline_runner_returns_step_result() -> None:
    async def _step() -> dict[str, int]:
        return {"value": 3}

    assert await InlineStepRunner().run_step("compute", _step) == {"value": 3}


@pytest.mark.asyncio
async def test_inline_runner_propagates_step_errors() -> None:
    async def _step() -> str:
        raise TimeoutError("aborted by host")

    with pytest.raises(TimeoutError, match="aborted by host"):
        await InlineStepRunner().run_step("slow", _step)


@pytest.mark.asyncio
async def test_checkpointing_runner_replays_completed_steps() -> None:
    storage = InMemoryArticleStorage()
    calls: list[str] = []

    async def _step() -> dict[str, str]:
        calls.append("ran")
        return {"text": "gathered"}

    first = CheckpointingStepRunner(storage, "a1")
    second = CheckpointingStepRunner(storage, "a1")

    assert await first.run_step("gather information", _step) == {"text": "gathered"}
    assert await second.run_step("gather information", _step) == {"text": "gathered"}
    assert calls == ["ran"]


@pytest.mark.asyncio
async def test_checkpointing_runner_does_not_save_failed_steps() -> None:
    storage = InMemoryArticleStorage()

    async def _failing() -> str:
        raise RuntimeError("provider down")

    async def _succeeding() -> str:
        return "draft"

    runner = CheckpointingStepRunner(storage, "a1")
    with pytest.raises(RuntimeError):
        await runner.run_step("write article", _failing)

    assert storage.get_step_checkpoint("a1", "write article") is None
    assert await runner.run_step("write article", _succeeding) == "draft"
    assert storage.get_step_checkpoint("a1", "write article") == "draft"


@pytest.mark.asyncio
async def test_checkpoints_are_scoped_per_article() -> None:
    storage = InMemoryArticleStorage()

    async def _step_a() -> str:
        return "for a1"

    async def _step_b() -> str:
        return "for a2"

    assert await CheckpointingStepRunner(storage, "a1").run_step("split title", _step_a) == "for a1"
    assert await CheckpointingStepRunner(storage, "a2").run_step("split title", _step_b) == "for a2"
