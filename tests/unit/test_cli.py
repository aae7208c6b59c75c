import json

import pytest
from conftest import TOPIC, FlakyStorage, ScriptedGenerator, make_workflow

from article_workflow import cli
from article_workflow.config.settings import Settings
from article_workflow.errors import GenerationError
from article_workflow.storage.models import ArticleStatus


@pytest.fixture
def settings(monkeypatch: pytest.MonkeyPatch) -> Settings:
    monkeypatch.delenv("DATABASE_URL", raising=False)
    configured = Settings(_env_file=None, database_url="", checkpoint_steps=True)
    monkeypatch.setattr(cli, "get_settings", lambda: configured)
    return configured


def test_generate_prints_completed_record(
    settings: Settings,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    monkeypatch.setattr(cli, "build_workflow", lambda _settings, storage: make_workflow(storage))

    exit_code = cli.main(["generate", TOPIC, "--owner", "owner-7"])

    payload = json.loads(capsys.readouterr().out)
    assert exit_code == 0
    assert payload["status"] == 2
    assert payload["owner"] == "owner-7"
    assert payload["topic"] == "Making Projects Work in Middle School Science"


def test_generate_reports_failure(
    settings: Settings,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    writer = ScriptedGenerator(error=GenerationError("writer unavailable"))
    monkeypatch.setattr(
        cli,
        "build_workflow",
        lambda _settings, storage: make_workflow(storage, writer=writer),
    )

    exit_code = cli.main(["generate", TOPIC])

    captured = capsys.readouterr()
    payload = json.loads(captured.out)
    assert exit_code == 1
    assert payload["status"] == 3
    assert payload["topic"] == TOPIC
    assert "writer unavailable" in captured.err


def test_generate_rejects_short_topic(
    settings: Settings,
    capsys: pytest.CaptureFixture[str],
) -> None:
    exit_code = cli.main(["generate", "short"])

    assert exit_code == 2
    assert "Invalid topic" in capsys.readouterr().err


def test_status_of_unknown_article(
    settings: Settings,
    capsys: pytest.CaptureFixture[str],
) -> None:
    exit_code = cli.main(["status", "missing-id"])

    assert exit_code == 2
    assert "missing-id not found" in capsys.readouterr().err


def test_generate_reports_storage_failure_on_success_write(
    settings: Settings,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    storage = FlakyStorage(fail_statuses={ArticleStatus.COMPLETE})
    monkeypatch.setattr(cli, "build_storage", lambda _settings: storage)
    monkeypatch.setattr(cli, "build_workflow", lambda _settings, storage: make_workflow(storage))

    exit_code = cli.main(["generate", TOPIC])

    captured = capsys.readouterr()
    payload = json.loads(captured.out)
    assert exit_code == 1
    assert payload["status"] == 3
    assert payload["topic"] == TOPIC
    assert "database unavailable" in captured.err
