# archive_proxy/app/domain/services/tag_service.py
"""
TagService: 업스트림 태그 클라우드에서 인기 태그 이름을 가져온다.
실패 시 빈 목록.
"""

from __future__ import annotations

import logging
from typing import List

import httpx

from archive_proxy.app.domain.ports import FetchPort, TagParsePort
from archive_proxy.app.domain.models import TransportConfig

logger = logging.getLogger(__name__)

TAGS_PATH = "/tags"


class TagService:

    def __init__(self, fetcher: FetchPort, parser: TagParsePort, transport: TransportConfig) -> None:
        self._fetcher = fetcher
        self._parser = parser
        self._transport = transport

    async def popular_tags(self) -> List[str]:
        try:
            html = await self._fetcher.fetch(self._transport.url(TAGS_PATH))
        except httpx.HTTPError as e:
            logger.warning("service.tags: upstream failed, returning [] (%s: %s)", type(e).__name__, e)
            return []
        return self._parser.parse(html)
