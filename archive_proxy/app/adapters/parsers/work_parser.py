"""
작품 페이지 HTML 에서 제목/작가/챕터별 본문 HTML 조각을 추출하는 구현체.
"""

from __future__ import annotations

import logging
from typing import List

from bs4 import BeautifulSoup, Tag

from archive_proxy.app.domain.ports import WorkParsePort
from archive_proxy.app.domain.models import WorkRecord

logger = logging.getLogger(__name__)


class WorkParser(WorkParsePort):

    _SELECTOR_DICT = {
        "title": ".title.heading",
        "author": 'a[rel="author"]',
        "chapters": "#chapters",
        "chapter_content": "#chapters .userstuff",
        "single_content": ".userstuff",
    }

    def parse(self, work_id: str, html: str) -> WorkRecord:
        """
        작품 페이지를 WorkRecord 로 변환한다.
        - #chapters 컨테이너가 있으면 챕터마다 .userstuff 조각 1개
        - 없으면 첫 .userstuff 조각 1개
        - 비어 있는 조각은 버린다(본문이 없으면 content=[])

        Args:
            work_id: 작품 id
            html: 작품 페이지 HTML
        Returns:
            WorkRecord
        """
        soup = BeautifulSoup(html or "", "lxml")

        title_tag = soup.select_one(self._SELECTOR_DICT["title"])
        title = title_tag.get_text(" ", strip=True) if title_tag else ""
        authors = [a.get_text(" ", strip=True) for a in soup.select(self._SELECTOR_DICT["author"])]
        author = ", ".join(a for a in authors if a)

        content = [frag for frag in self._extract_fragments(soup) if frag.strip()]
        logger.info("work.parse: id=%s chapters=%d", work_id, len(content))
        return WorkRecord(id=work_id, title=title, author=author, content=content)

    def _extract_fragments(self, soup: BeautifulSoup) -> List[str]:
        if soup.select_one(self._SELECTOR_DICT["chapters"]) is not None:
            return [self._inner_html(el) for el in soup.select(self._SELECTOR_DICT["chapter_content"])]

        single = soup.select_one(self._SELECTOR_DICT["single_content"])
        return [self._inner_html(single)] if single is not None else []

    @staticmethod
    def _inner_html(el: Tag) -> str:
        return el.decode_contents()
