import sys
from pathlib import Path

# 프로젝트 루트 경로를 sys.path에 추가 (…/<project-root>)
ROOT = Path(__file__).resolve().parents[2]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import httpx
import pytest
from fastapi.testclient import TestClient

from archive_proxy.app.main import app
from archive_proxy.app.domain.models import RetryPolicy, TransportConfig


class CountingTransport(httpx.MockTransport):
    """
    호출 횟수/요청을 기록하는 httpx 목 트랜스포트.
    responses 는 순서대로 소비하며, 마지막 항목은 이후 호출에도 계속 사용한다.
    항목이 Exception 이면 raise, int 면 해당 상태코드의 빈 응답, httpx.Response 면 그대로.
    """

    def __init__(self, *responses):
        self.requests = []
        self._responses = list(responses) or [200]
        super().__init__(self._handle)

    @property
    def calls(self) -> int:
        return len(self.requests)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        idx = min(len(self.requests), len(self._responses)) - 1
        item = self._responses[idx]
        if isinstance(item, Exception):
            raise item
        if isinstance(item, int):
            return httpx.Response(item, text="")
        return item


class RecordingSleep:
    """asyncio.sleep 대체: 대기 없이 요청된 지연만 기록."""

    def __init__(self):
        self.delays = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


@pytest.fixture
def make_transport():
    return CountingTransport


@pytest.fixture
def transport_config():
    return TransportConfig(
        base_url="https://upstream.test",
        user_agent="test-agent/1.0",
        referer="https://upstream.test/",
        timeout=5.0,
    )


@pytest.fixture
def retry_policy():
    return RetryPolicy(max_attempts=4, base_delay=5.0, max_jitter=2.0)


@pytest.fixture
def recording_sleep():
    return RecordingSleep()


@pytest.fixture(scope="session")
def client():
    return TestClient(app)


@pytest.fixture
def upstream(make_transport, transport_config, recording_sleep):
    """
    FastAPI DI의 fetcher 를 목 트랜스포트 기반 ResilientFetcher 로 교체한다.
    사용: transport = upstream(429, httpx.Response(200, text=...))
    """
    from archive_proxy.app.adapters.fetchers.http_fetcher import ResilientFetcher
    from archive_proxy.app.api.deps import get_fetcher

    def _use(*responses, policy: RetryPolicy | None = None):
        transport = make_transport(*responses)
        fetcher = ResilientFetcher(
            httpx.AsyncClient(transport=transport),
            transport_config,
            policy or RetryPolicy(),
            sleep=recording_sleep,
            jitter=lambda low, high: 0.0,
        )
        app.dependency_overrides[get_fetcher] = lambda: fetcher
        return transport

    yield _use
    app.dependency_overrides.clear()
