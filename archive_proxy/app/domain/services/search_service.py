# archive_proxy/app/domain/services/search_service.py
"""
SearchService
==============

검색 유스케이스 오케스트레이터.

Flow:
    QueryTranslator → Fetcher → ListingParser

- 도메인은 **Port(인터페이스)** 에만 의존합니다. (DIP)
- 구현체는 adapters 레이어에서 주입(의존성 주입; DI)합니다.
- 업스트림 최종 실패는 빈 목록으로 흡수하고 원인을 로그로 남깁니다.

예시:
    svc = SearchService(translator, fetcher, parser, transport)
    records = await svc.search('harry potter sort:kudos tag:"Fluff"')
"""

from __future__ import annotations

import logging
from typing import List

import httpx

from archive_proxy.app.domain.ports import FetchPort, ListingParsePort
from archive_proxy.app.domain.models import SummaryRecord, TransportConfig
from archive_proxy.app.domain.query import SEARCH_PATH, QueryTranslator, build_search_params

logger = logging.getLogger(__name__)


class SearchService:

    def __init__(
        self,
        translator: QueryTranslator,
        fetcher: FetchPort,
        parser: ListingParsePort,
        transport: TransportConfig,
    ) -> None:
        self._translator = translator
        self._fetcher = fetcher
        self._parser = parser
        self._transport = transport

    # ================= public API =================
    async def search(self, raw_query: str | None) -> List[SummaryRecord]:
        """
        검색을 수행하는 메서드.
        Args:
            raw_query: 지시어가 섞인 원문 쿼리
        Returns:
            List[SummaryRecord]: 검색 결과(빈 쿼리/업스트림 실패 시 빈 목록)
        """
        if raw_query is None or not raw_query.strip():
            logger.info("service.search: empty query, skip upstream")
            return []

        parsed = self._translator.translate(raw_query)
        params = build_search_params(parsed)
        logger.info(
            "service.search: query=%r sort=%s rating_id=%s complete=%s tags=%s",
            parsed.free_text, parsed.sort_column.value, parsed.rating_id,
            parsed.is_complete, parsed.extra_tags,
        )
        try:
            html = await self._fetcher.fetch(self._transport.url(SEARCH_PATH), params=params)
        except httpx.HTTPError as e:
            logger.warning("service.search: upstream failed, returning [] (%s: %s)", type(e).__name__, e)
            return []

        return self._parser.parse(html)
