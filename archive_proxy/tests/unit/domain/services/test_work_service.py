import asyncio

import httpx
import pytest

from archive_proxy.app.adapters.fetchers.http_fetcher import ResilientFetcher
from archive_proxy.app.adapters.parsers.work_parser import WorkParser
from archive_proxy.app.domain.services.work_service import FETCH_ERROR_MESSAGE, WorkService

WORK_PAGE = """
<h2 class="title heading">Title</h2>
<a rel="author" href="/users/a">a</a>
<div id="chapters"><div class="userstuff"><p>Hi</p></div></div>
"""


def run_get_work(transport, cfg, policy, sleep, work_id="123"):
    async def _run():
        async with httpx.AsyncClient(transport=transport) as client:
            fetcher = ResilientFetcher(client, cfg, policy, sleep=sleep, jitter=lambda a, b: 0.0)
            return await WorkService(fetcher, WorkParser(), cfg).get_work(work_id)
    return asyncio.run(_run())


def test_get_work_requests_full_adult_view(make_transport, transport_config, retry_policy, recording_sleep):
    transport = make_transport(httpx.Response(200, text=WORK_PAGE))

    work = run_get_work(transport, transport_config, retry_policy, recording_sleep)

    assert work.title == "Title"
    assert work.author == "a"
    assert work.content == ["<p>Hi</p>"]
    assert work.error is None
    request = transport.requests[0]
    assert request.url.path == "/works/123"
    assert request.url.params["view_full_work"] == "true"
    assert request.url.params["view_adult"] == "true"


@pytest.mark.parametrize("failure", [404, 500, 429, httpx.ConnectError("down"), httpx.ReadTimeout("slow")])
def test_failure_returns_error_record(make_transport, transport_config, retry_policy, recording_sleep, failure):
    transport = make_transport(failure)

    work = run_get_work(transport, transport_config, retry_policy, recording_sleep)

    assert work.id == "123"
    assert work.error == FETCH_ERROR_MESSAGE
    assert work.content == []
    assert work.chapter_count == 0
    assert work.model_dump(by_alias=True, exclude_none=True) == {
        "id": "123",
        "content": [],
        "chapters": 0,
        "error": FETCH_ERROR_MESSAGE,
    }


def test_rate_limited_then_ok(make_transport, transport_config, retry_policy, recording_sleep):
    transport = make_transport(429, httpx.Response(200, text=WORK_PAGE))

    work = run_get_work(transport, transport_config, retry_policy, recording_sleep)

    assert work.error is None
    assert transport.calls == 2
    assert recording_sleep.delays == [5.0]
