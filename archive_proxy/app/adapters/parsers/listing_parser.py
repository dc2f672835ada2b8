"""
검색 결과 목록 HTML 에서 작품 요약(SummaryRecord)을 추출하는 구현체.

각 필드는 _field_table() 의 FieldSpec(셀렉터, 파서, 기본값) 한 줄로 선언하고
모든 항목에 같은 방식으로 평가한다.
- 셀렉터에 맞는 요소가 없으면 기본값
- 파서가 ValueError/AttributeError/IndexError 를 내면 기본값
- 파서 결과가 None/빈 값이면 기본값
"""

from __future__ import annotations

import logging
import re
from typing import Any, Callable, List, NamedTuple

from bs4 import BeautifulSoup, Tag

from archive_proxy.app.domain.ports import ListingParsePort
from archive_proxy.app.domain.models import SummaryRecord

logger = logging.getLogger(__name__)

_WORK_ID_RE = re.compile(r"/works/(\d+)")


class FieldSpec(NamedTuple):
    name: str
    selector: str
    parse: Callable[[List[Tag]], Any]
    default: Any


# ---------- 필드 파서 ----------

def first_text(elements: List[Tag]) -> str:
    return elements[0].get_text(" ", strip=True)


def joined_text(elements: List[Tag], sep: str = ", ") -> str:
    return sep.join(all_texts(elements))


def all_texts(elements: List[Tag]) -> List[str]:
    texts = (el.get_text(" ", strip=True) for el in elements)
    return [t for t in texts if t]


def capped_texts(limit: int) -> Callable[[List[Tag]], List[str]]:
    def _parse(elements: List[Tag]) -> List[str]:
        return all_texts(elements)[:limit]
    return _parse


def word_count(elements: List[Tag]) -> int | None:
    value = int(first_text(elements).replace(",", ""))
    return value if value >= 0 else None


def chapter_count(elements: List[Tag]) -> int | None:
    # "3/10", "1/?" 형태: 앞쪽이 게시된 챕터 수
    value = int(first_text(elements).split("/")[0].replace(",", "").strip())
    return value if value >= 1 else None


def _field_table(freeform_tag_limit: int) -> List[FieldSpec]:
    return [
        FieldSpec("author", '.heading a[rel="author"]', joined_text, "Anonymous"),
        FieldSpec("fandom", ".fandoms a", first_text, ""),
        FieldSpec("rating", ".rating .text", first_text, ""),
        FieldSpec("relationships", ".relationships a", all_texts, []),
        FieldSpec("freeform_tags", ".freeforms a", capped_texts(freeform_tag_limit), []),
        FieldSpec("summary", "blockquote.summary, .summary blockquote", first_text, ""),
        FieldSpec("word_count", "dd.words", word_count, 0),
        FieldSpec("chapter_count", "dd.chapters", chapter_count, 1),
        FieldSpec("updated", "p.datetime", first_text, ""),
    ]


def extract_field(item: Tag, spec: FieldSpec) -> Any:
    """필드 1개를 추출한다. 어떤 경우에도 예외를 내지 않고 기본값으로 수렴한다."""
    elements = item.select(spec.selector)
    if not elements:
        return _copy_default(spec.default)
    try:
        value = spec.parse(elements)
    except (ValueError, AttributeError, IndexError):
        logger.debug("listing field fallback: field=%s selector=%s", spec.name, spec.selector)
        return _copy_default(spec.default)
    if value is None or value == "" or value == []:
        return _copy_default(spec.default)
    return value


def _copy_default(default: Any) -> Any:
    return list(default) if isinstance(default, list) else default


class ListingParser(ListingParsePort):
    """검색 결과 목록 → SummaryRecord 목록."""

    _ITEM_SELECTOR = ".work.blurb"
    _TITLE_LINK_SELECTOR = ".heading a"

    def __init__(self, freeform_tag_limit: int = 5) -> None:
        self.freeform_tag_limit = freeform_tag_limit
        self._fields = _field_table(freeform_tag_limit)

    def parse(self, html: str) -> List[SummaryRecord]:
        """
        목록 HTML 의 각 항목을 문서 순서대로 SummaryRecord 로 변환한다.
        제목 링크나 숫자 작품 id 가 없는 항목(광고/깨진 항목)은 건너뛴다.

        Args:
            html: 검색 결과 페이지 HTML
        Returns:
            List[SummaryRecord]
        """
        soup = BeautifulSoup(html or "", "lxml")
        records: List[SummaryRecord] = []
        items = soup.select(self._ITEM_SELECTOR)
        for item in items:
            record = self._parse_item(item)
            if record is not None:
                records.append(record)

        logger.info("listing.parse: items=%d records=%d", len(items), len(records))
        return records

    def _parse_item(self, item: Tag) -> SummaryRecord | None:
        title_link = item.select_one(self._TITLE_LINK_SELECTOR)
        if title_link is None:
            return None

        m = _WORK_ID_RE.search(title_link.get("href") or "")
        if m is None:
            return None

        values = {spec.name: extract_field(item, spec) for spec in self._fields}
        return SummaryRecord(
            id=m.group(1),
            title=title_link.get_text(" ", strip=True),
            **values,
        )
