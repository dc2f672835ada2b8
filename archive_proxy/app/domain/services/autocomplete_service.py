# archive_proxy/app/domain/services/autocomplete_service.py
"""
AutocompleteService
===================

업스트림 태그 자동완성 엔드포인트를 그대로 중계한다.

- 검색어가 min_length 보다 짧으면 업스트림을 호출하지 않고 빈 목록
- 업스트림은 XMLHttpRequest 표식 + JSON Accept 헤더로 호출
- 업스트림 실패/JSON 이 아닌 응답은 빈 목록
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, List

import httpx

from archive_proxy.app.domain.ports import FetchPort
from archive_proxy.app.domain.models import TransportConfig

logger = logging.getLogger(__name__)

AUTOCOMPLETE_PATH = "/autocomplete/tag"
AUTOCOMPLETE_HEADERS = {
    "X-Requested-With": "XMLHttpRequest",
    "Accept": "application/json, text/javascript, */*; q=0.01",
}


class AutocompleteService:

    def __init__(self, fetcher: FetchPort, transport: TransportConfig, min_length: int = 2) -> None:
        self._fetcher = fetcher
        self._transport = transport
        self.min_length = min_length

    async def suggest(self, term: str | None) -> List[Dict[str, Any]]:
        """
        Args:
            term: 사용자가 입력 중인 태그 문자열
        Returns:
            List[Dict[str, Any]]: 업스트림 제안 객체 목록(예: {"id": ..., "name": ...})
        """
        term = (term or "").strip()
        if len(term) < self.min_length:
            return []

        try:
            body = await self._fetcher.fetch(
                self._transport.url(AUTOCOMPLETE_PATH),
                headers=AUTOCOMPLETE_HEADERS,
                params={"term": term},
            )
        except httpx.HTTPError as e:
            logger.warning("service.autocomplete: upstream failed term=%r (%s: %s)", term, type(e).__name__, e)
            return []

        try:
            suggestions = json.loads(body)
        except ValueError:
            logger.warning("service.autocomplete: non-JSON body term=%r", term)
            return []

        if not isinstance(suggestions, list):
            return []
        return [s for s in suggestions if isinstance(s, dict)]
