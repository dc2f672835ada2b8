import pytest
from pydantic import ValidationError

from archive_proxy.app.domain.models import (
    RATING_IDS,
    ParsedQuery,
    RetryPolicy,
    SortColumn,
    SummaryRecord,
    TransportConfig,
    WorkRecord,
)


def test_sort_column_upstream_keys():
    assert SortColumn.relevance.upstream_key == "_score"
    assert SortColumn.kudos.upstream_key == "kudos_count"
    assert SortColumn.hits.upstream_key == "hits"
    assert SortColumn.date.upstream_key == "revised_at"


def test_rating_table_is_exact():
    assert RATING_IDS == {
        "Not Rated": 9,
        "General Audiences": 10,
        "Teen And Up Audiences": 11,
        "Mature": 12,
        "Explicit": 13,
    }


def test_effective_query_joins_tags():
    assert ParsedQuery(free_text="x", extra_tags=["A", "B"]).effective_query == "x A B"
    assert ParsedQuery(free_text="", extra_tags=["A"]).effective_query == "A"
    assert ParsedQuery().effective_query == ""


def test_summary_record_defaults_and_wire_keys():
    """
    SummaryRecord 기본값과 직렬화 키(기존 클라이언트 호환) 검증.
    """
    r = SummaryRecord(id="42", title="T")
    assert r.author == "Anonymous"
    assert r.word_count == 0
    assert r.chapter_count == 1

    dumped = r.model_dump(by_alias=True)
    assert set(dumped) == {
        "id", "title", "author", "fandom", "rating", "relationships",
        "tags", "summary", "words", "chapters", "updated",
    }


def test_summary_record_rejects_invalid_counts():
    with pytest.raises(ValidationError):
        SummaryRecord(id="1", word_count=-1)
    with pytest.raises(ValidationError):
        SummaryRecord(id="1", chapter_count=0)


def test_work_record_chapter_count_follows_content():
    w = WorkRecord(id="7", title="T", author="A", content=["<p>1</p>", "<p>2</p>"])

    dumped = w.model_dump(by_alias=True, exclude_none=True)
    assert dumped == {
        "id": "7",
        "title": "T",
        "author": "A",
        "content": ["<p>1</p>", "<p>2</p>"],
        "chapters": 2,
    }


def test_work_record_failed_shape():
    w = WorkRecord.failed("7", "Failed to fetch work")

    assert w.model_dump(by_alias=True, exclude_none=True) == {
        "id": "7",
        "content": [],
        "chapters": 0,
        "error": "Failed to fetch work",
    }


def test_transport_config_is_immutable():
    cfg = TransportConfig(base_url="https://upstream.test/", referer="https://upstream.test/")

    with pytest.raises(ValidationError):
        cfg.user_agent = "other"
    assert cfg.url("/works/1") == "https://upstream.test/works/1"
    assert cfg.default_headers()["Referer"] == "https://upstream.test/"


def test_retry_policy_delay():
    constant = RetryPolicy(base_delay=5.0)
    assert constant.delay_for(1) == 5.0
    assert constant.delay_for(3, jitter=1.5) == 6.5

    exponential = RetryPolicy(base_delay=1.0, backoff_factor=2.0)
    assert [exponential.delay_for(n) for n in (1, 2, 3)] == [1.0, 2.0, 4.0]
