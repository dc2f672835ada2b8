"""
TransportConfig 로부터 공유 httpx.AsyncClient 를 만든다.
앱 lifespan 에서 한 번 만들고 종료 시 닫는다.
"""

from __future__ import annotations

import httpx

from archive_proxy.app.domain.models import TransportConfig


def build_http_client(config: TransportConfig, transport: httpx.AsyncBaseTransport | None = None) -> httpx.AsyncClient:
    """
    Args:
        config: 불변 트랜스포트 설정
        transport: 테스트 등에서 주입할 트랜스포트(미지정 시 커넥션 풀 트랜스포트)
    Returns:
        httpx.AsyncClient: 커넥션 수 상한이 걸린 공유 클라이언트
    """
    limits = httpx.Limits(
        max_connections=config.max_connections,
        max_keepalive_connections=config.max_keepalive_connections,
        keepalive_expiry=config.keepalive_expiry,
    )
    if transport is None:
        # 0.0.0.0 에 바인딩하면 IPv4 주소로만 연결한다.
        transport = httpx.AsyncHTTPTransport(
            limits=limits,
            local_address="0.0.0.0" if config.prefer_ipv4 else None,
        )
    return httpx.AsyncClient(
        transport=transport,
        timeout=httpx.Timeout(config.timeout),
        headers=config.default_headers(),
        follow_redirects=config.follow_redirects,
    )
