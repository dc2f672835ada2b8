"""
업스트림 HTTP GET 을 재시도와 함께 수행하는 FetchPort 구현체.

- 429(Too Many Requests) / 503(Service Unavailable) 만 재시도 대상(정책으로 변경 가능)
- 그 외 non-2xx, 타임아웃, 연결 실패는 즉시 실패(정책으로 트랜스포트 오류 재시도 허용 가능)
- 재시도 전 대기: base_delay * backoff_factor^(attempt-1) + jitter(0..max_jitter)
- 재시도를 모두 소진하면 마지막 오류(httpx.HTTPError)를 그대로 올린다.
"""

from __future__ import annotations

import asyncio
import logging
import random
from typing import Awaitable, Callable, Mapping

import httpx

from archive_proxy.app.domain.ports import FetchPort
from archive_proxy.app.domain.models import RetryPolicy, TransportConfig

logger = logging.getLogger(__name__)

SleepFunc = Callable[[float], Awaitable[None]]
JitterFunc = Callable[[float, float], float]


class ResilientFetcher(FetchPort):

    def __init__(
        self,
        client: httpx.AsyncClient,
        transport: TransportConfig,
        retry: RetryPolicy | None = None,
        *,
        sleep: SleepFunc = asyncio.sleep,
        jitter: JitterFunc = random.uniform,
    ) -> None:
        """
        Args:
            client: 공유 httpx.AsyncClient (커넥션 풀)
            transport: 기본 헤더(User-Agent/Referer) 등 불변 트랜스포트 설정
            retry: 재시도 정책
            sleep: 대기 함수(테스트에서 대기 없는 함수로 교체)
            jitter: (low, high) → 지터 값 함수
        """
        self._client = client
        self._transport = transport
        self._retry = retry or RetryPolicy()
        self._sleep = sleep
        self._jitter = jitter

    async def fetch(
        self,
        url: str,
        headers: Mapping[str, str] | None = None,
        params: Mapping[str, str] | None = None,
        max_attempts: int | None = None,
    ) -> str:
        """
        GET 요청을 보내고 성공 응답 본문을 돌려준다.

        Args:
            url: 요청 URL
            headers: 호출 단위 추가 헤더
            params: 쿼리 파라미터
            max_attempts: 총 시도 횟수(1 미만은 1로 취급)
        Returns:
            str: 응답 본문 텍스트
        Raises:
            httpx.HTTPStatusError: 재시도 불가 상태코드, 또는 재시도 소진 시 마지막 응답
            httpx.TransportError: 타임아웃/연결 실패
        """
        attempts = max(1, max_attempts if max_attempts is not None else self._retry.max_attempts)
        request_headers = {**self._transport.default_headers(), **(headers or {})}

        attempt = 0
        while True:
            attempt += 1
            status_code = None
            try:
                response = await self._client.get(url, params=params, headers=request_headers)
                response.raise_for_status()
                logger.debug(
                    "upstream ok: url=%s status=%s bytes=%d attempt=%d",
                    url, response.status_code, len(response.content), attempt,
                )
                return response.text
            except httpx.HTTPStatusError as e:
                status_code = e.response.status_code
                if status_code not in self._retry.retry_statuses:
                    raise
                if attempt >= attempts:
                    self._log_exhausted(url, attempts, e)
                    raise
            except httpx.TransportError as e:
                if not self._retry.retry_on_transport_errors:
                    raise
                if attempt >= attempts:
                    self._log_exhausted(url, attempts, e)
                    raise

            delay = self._retry.delay_for(attempt, self._jitter(0.0, self._retry.max_jitter))
            logger.warning(
                "upstream retry: url=%s attempt=%d/%d status=%s delay=%.2fs",
                url, attempt, attempts, status_code, delay,
                extra={
                    "upstream_url": url,
                    "attempt": attempt,
                    "max_attempts": attempts,
                    "status_code": status_code,
                    "delay_s": round(delay, 2),
                },
            )
            await self._sleep(delay)

    @staticmethod
    def _log_exhausted(url: str, attempts: int, err: httpx.HTTPError) -> None:
        logger.warning(
            "upstream retries exhausted: url=%s attempts=%d error=%s", url, attempts, err,
            extra={"upstream_url": url, "max_attempts": attempts},
        )
