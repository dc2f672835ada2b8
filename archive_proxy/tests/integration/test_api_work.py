from fastapi.testclient import TestClient
import httpx
import pytest

from archive_proxy.app.main import app

WORK_PAGE = """
<div id="workskin">
  <h2 class="title heading">  A Long Road  </h2>
  <h3 class="byline heading"><a rel="author" href="/users/a">a</a>, <a rel="author" href="/users/b">b</a></h3>
  <div id="chapters">
    <div class="chapter"><div class="userstuff module"><p>One</p></div></div>
    <div class="chapter"><div class="userstuff module"><p>Two</p></div></div>
  </div>
</div>
"""


@pytest.fixture
def client():
    return TestClient(app, raise_server_exceptions=False)


def test_get_work(client, upstream):
    transport = upstream(httpx.Response(200, text=WORK_PAGE))

    resp = client.get("/work/123")

    assert resp.status_code == 200
    body = resp.json()
    assert body["id"] == "123"
    assert body["title"] == "A Long Road"
    assert body["author"] == "a, b"
    assert len(body["content"]) == 2
    assert "One" in body["content"][0]
    assert "Two" in body["content"][1]
    assert body["chapters"] == 2
    assert "error" not in body
    assert transport.requests[0].url.path == "/works/123"


@pytest.mark.parametrize("failure", [404, 500, httpx.ConnectError("down")])
def test_upstream_failure_returns_error_record(client, upstream, failure):
    """
    업스트림 실패는 200 + error 레코드로 흡수된다(title/author 키 없음).
    """
    upstream(failure)

    resp = client.get("/work/123")

    assert resp.status_code == 200
    assert resp.json() == {
        "id": "123",
        "content": [],
        "chapters": 0,
        "error": "Failed to fetch work",
    }


def test_rate_limit_exhausted_returns_error_record(client, upstream, recording_sleep):
    transport = upstream(429)

    resp = client.get("/work/123")

    assert resp.status_code == 200
    assert resp.json()["error"] == "Failed to fetch work"
    assert transport.calls == 4
    assert recording_sleep.delays == [5.0, 5.0, 5.0]


@pytest.mark.parametrize("work_id", ["abc", "12a", "\u0661\u0662", "\uff11\uff12", "\u00b2"])
def test_non_numeric_id_returns_400(client, upstream, work_id):
    """ASCII 숫자가 아닌 id(아랍/전각 숫자, 위첨자 포함)는 업스트림 호출 없이 400"""
    transport = upstream(httpx.Response(200, text=WORK_PAGE))

    resp = client.get(f"/work/{work_id}")

    assert resp.status_code == 400
    body = resp.json()
    assert body["success"] is False
    assert body["error"]["code"] == "INVALID_INPUT"
    assert body["error"]["details"] == {"field": "work_id"}
    assert transport.calls == 0
