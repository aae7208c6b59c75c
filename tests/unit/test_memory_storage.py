import pytest

from article_workflow.errors import ArticleNotFoundError
from article_workflow.storage.memory import InMemoryArticleStorage
from article_workflow.storage.models import ArticleStatus, Source


def test_create_article_starts_pending() -> None:
    storage = InMemoryArticleStorage()
    record = storage.create_article("Restorative practices in schools", "owner-1")

    assert record.status == ArticleStatus.PENDING
    assert record.content is None
    assert record.sources == []
    assert storage.get_article(record.article_id) == record


def test_create_article_rejects_duplicate_ids() -> None:
    storage = InMemoryArticleStorage()
    storage.create_article("Topic number one", "owner", article_id="fixed")

    with pytest.raises(ValueError):
        storage.create_article("Topic number two", "owner", article_id="fixed")


def test_partial_update_leaves_other_fields_unchanged() -> None:
    storage = InMemoryArticleStorage()
    record = storage.create_article("Restorative practices in schools", "owner-1")

    updated = storage.update_article(record.article_id, content="draft")

    assert updated.content == "draft"
    assert updated.topic == record.topic
    assert updated.status == ArticleStatus.PENDING
    assert updated.created_at == record.created_at
    assert updated.updated_at >= record.updated_at


def test_update_unknown_article_raises() -> None:
    storage = InMemoryArticleStorage()

    with pytest.raises(ArticleNotFoundError, match="does not exist"):
        storage.update_article("missing", status=ArticleStatus.FAILED)


def test_returned_records_are_copies() -> None:
    storage = InMemoryArticleStorage()
    record = storage.create_article("Restorative practices in schools", "owner-1")
    storage.update_article(record.article_id, sources=[Source(url="https://a.example")])

    fetched = storage.get_article(record.article_id)
    fetched.sources.append(Source(url="https://b.example"))

    assert [s.url for s in storage.get_article(record.article_id).sources] == [
        "https://a.example"
    ]


def test_step_checkpoints_round_trip_and_overwrite() -> None:
    storage = InMemoryArticleStorage()

    assert storage.get_step_checkpoint("a1", "gather information") is None
    storage.save_step_checkpoint("a1", "gather information", {"text": "one"})
    storage.save_step_checkpoint("a1", "gather information", {"text": "two"})

    assert storage.get_step_checkpoint("a1", "gather information") == {"text": "two"}
    assert storage.get_step_checkpoint("a2", "gather information") is None
