import pytest

from article_workflow.pipeline.metadata import extract_search_metadata


@pytest.mark.parametrize(
    "payload",
    [
        None,
        "not a dict",
        [],
        {},
        {"google": None},
        {"google": "oops"},
        {"google": {"groundingMetadata": "broken", "sources": {"url": "x"}}},
    ],
)
def test_missing_or_malformed_metadata_degrades_to_empty(payload) -> None:
    metadata = extract_search_metadata(payload)

    assert metadata.sources == []
    assert metadata.search_queries == []


def test_extracts_queries_and_sources_from_all_known_locations() -> None:
    payload = {
        "google": {
            "safetyRatings": [{"category": "HARM_CATEGORY_HARASSMENT"}],
            "groundingMetadata": {
                "webSearchQueries": ["flipped classroom", "", 42],
                "sources": [
                    {"uri": "https://a.example", "title": "A"},
                    {"title": "missing uri"},
                    "junk",
                ],
                "groundingChunks": [
                    {"web": {"uri": "https://b.example", "title": "  "}},
                    {"web": {"uri": "https://a.example", "title": "A again"}},
                    {"retrievedContext": {"uri": "ignored"}},
                ],
            },
            "sources": [
                {"url": "https://c.example", "title": "C"},
                {"url": "https://b.example", "title": "B duplicate"},
                {"uri": "wrong key"},
            ],
        }
    }

    metadata = extract_search_metadata(payload)

    assert metadata.search_queries == ["flipped classroom"]
    assert [(s.url, s.title) for s in metadata.sources] == [
        ("https://a.example", "A"),
        ("https://b.example", None),
        ("https://c.example", "C"),
    ]
    assert metadata.safety_ratings == [{"category": "HARM_CATEGORY_HARASSMENT"}]
