# archive_proxy/app/domain/services/work_service.py
"""
WorkService
===========

작품 본문 조회 유스케이스.

Flow:
    Fetcher → WorkParser

업스트림 최종 실패 시 예외 대신 error 필드만 채운 WorkRecord 를 돌려줍니다.
(검색의 "빈 목록" 규약과는 다른 규약입니다.)
"""

from __future__ import annotations

import logging

import httpx

from archive_proxy.app.domain.ports import FetchPort, WorkParsePort
from archive_proxy.app.domain.models import TransportConfig, WorkRecord

logger = logging.getLogger(__name__)

WORK_PATH = "/works/{work_id}"
WORK_PARAMS = {"view_full_work": "true", "view_adult": "true"}
FETCH_ERROR_MESSAGE = "Failed to fetch work"


class WorkService:
    """작품 1건을 가져와 WorkRecord 로 정규화하는 서비스."""

    def __init__(
        self,
        fetcher: FetchPort,
        parser: WorkParsePort,
        transport: TransportConfig,
    ) -> None:
        self._fetcher = fetcher
        self._parser = parser
        self._transport = transport

    async def get_work(self, work_id: str) -> WorkRecord:
        """
        Args:
            work_id: 숫자 문자열 작품 id
        Returns:
            WorkRecord: 본문 레코드, 또는 error 가 채워진 레코드
        """
        url = self._transport.url(WORK_PATH.format(work_id=work_id))
        logger.info("service.work: id=%s", work_id)
        try:
            html = await self._fetcher.fetch(url, params=WORK_PARAMS)
        except httpx.HTTPError as e:
            logger.warning("service.work: upstream failed id=%s (%s: %s)", work_id, type(e).__name__, e)
            return WorkRecord.failed(work_id, FETCH_ERROR_MESSAGE)

        return self._parser.parse(work_id, html)
