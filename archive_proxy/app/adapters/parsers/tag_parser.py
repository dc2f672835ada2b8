"""
태그 클라우드 페이지에서 인기 태그 이름을 추출하는 구현체.
"""

from __future__ import annotations

from typing import List

from bs4 import BeautifulSoup

from archive_proxy.app.domain.ports import TagParsePort


class TagCloudParser(TagParsePort):

    # 태그 클라우드 → 일반 태그 링크 순으로 시도
    _SELECTORS = ["ul.tags.cloud a", "a.tag"]

    def __init__(self, limit: int = 30) -> None:
        self.limit = limit

    def parse(self, html: str) -> List[str]:
        """
        Args:
            html: 태그 페이지 HTML
        Returns:
            List[str]: 페이지 순서대로 중복 없는 태그 이름(최대 limit 개)
        """
        soup = BeautifulSoup(html or "", "lxml")
        links = []
        for sel in self._SELECTORS:
            links = soup.select(sel)
            if links:
                break

        names: List[str] = []
        for a in links:
            if len(names) >= self.limit:
                break
            name = a.get_text(" ", strip=True)
            if name and name not in names:
                names.append(name)
        return names
