"""
검색 DSL 번역기.

원문 쿼리에 섞여 있는 지시어를 찾아 ParsedQuery 로 바꾼다.

    harry potter sort:kudos rating:"Explicit" complete:true tag:"Angst"

지원 지시어
    - sort:<kudos|hits|date>           정렬 컬럼 (없으면 relevance)
    - rating:"<등급 이름>"             RATING_IDS 에 없는 이름은 조용히 제거
    - complete:<true|false>            완결 여부
    - tag:"<태그>"                     여러 번 사용 가능, 업스트림 query 에 다시 붙임

지시어는 토큰 경계(입력 시작 또는 공백 뒤)에서만 인식하고 공백/끝에서 끝나야 한다.
따옴표 값은 통째로 소비하므로 값 안의 `sort:kudos` 같은 문자열은 지시어가 아니다.
사용자가 일반 텍스트로 입력한 따옴표 구문("a sort:kudos b")도 한 토큰으로 보고 건드리지 않는다.
원문은 변경하지 않고 (kind, value, span) 목록을 만든 뒤 span 을 잘라내 free_text 를 만든다.
"""

from __future__ import annotations

import logging
import re
from typing import Dict, List

from archive_proxy.app.domain.models import (
    RATING_IDS,
    Directive,
    DirectiveKind,
    ParsedQuery,
    SortColumn,
)

logger = logging.getLogger(__name__)

SEARCH_PATH = "/works/search"

_DIRECTIVE_RE = re.compile(
    r"""
      (?P<key>sort|complete):(?P<word>[^\s"]+)(?=\s|$)
    | (?P<qkey>rating|tag):"(?P<quoted>[^"]*)"(?=\s|$)
    """,
    re.IGNORECASE | re.VERBOSE,
)

_SORT_VALUES = {"kudos", "hits", "date"}
_COMPLETE_VALUES = {"true", "false"}


def tokenize(raw: str) -> List[Directive]:
    """
    원문에서 지시어를 왼쪽부터 한 번만 훑어 찾는다.

    Args:
        raw: 원문 쿼리
    Returns:
        List[Directive]: 등장 순서대로 정렬된 지시어 목록
    """
    directives: List[Directive] = []
    pos, n = 0, len(raw)
    while pos < n:
        if raw[pos].isspace():
            pos += 1
            continue

        directive = _match_directive(raw, pos)
        if directive is not None:
            directives.append(directive)
            pos = directive.end
            continue

        pos = _skip_free_token(raw, pos)
    return directives


def _skip_free_token(raw: str, pos: int) -> int:
    """
    지시어가 아닌 토큰 하나를 건너뛴 위치.
    닫히는 따옴표 구간("...")은 공백이 있어도 토큰의 일부이므로 그 안은 지시어로 보지 않는다.
    짝이 없는 따옴표는 일반 문자로 취급한다.
    """
    n = len(raw)
    while pos < n and not raw[pos].isspace():
        if raw[pos] == '"':
            close = raw.find('"', pos + 1)
            if close != -1:
                pos = close + 1
                continue
        pos += 1
    return pos


def _match_directive(raw: str, pos: int) -> Directive | None:
    m = _DIRECTIVE_RE.match(raw, pos)
    if m is None:
        return None

    if m.group("key"):
        kind = DirectiveKind(m.group("key").lower())
        value = m.group("word").lower()
        allowed = _SORT_VALUES if kind is DirectiveKind.sort else _COMPLETE_VALUES
        if value not in allowed:
            return None
    else:
        kind = DirectiveKind(m.group("qkey").lower())
        value = m.group("quoted")

    return Directive(kind=kind, value=value, start=m.start(), end=m.end())


def strip_directives(raw: str, directives: List[Directive]) -> str:
    """
    지시어 span 을 잘라낸 나머지 텍스트.
    연속 공백(탭/개행 포함)은 공백 하나로 합치고 앞뒤 공백은 제거한다.
    """
    pieces: List[str] = []
    cursor = 0
    for d in sorted(directives, key=lambda d: d.start):
        pieces.append(raw[cursor:d.start])
        cursor = d.end
    pieces.append(raw[cursor:])
    return " ".join(" ".join(pieces).split())


class QueryTranslator:
    """원문 쿼리 → ParsedQuery. I/O 없음, 예외 없음."""

    def translate(self, raw: str | None) -> ParsedQuery:
        if raw is None or not raw.strip():
            return ParsedQuery()

        directives = tokenize(raw)
        by_kind: Dict[DirectiveKind, List[Directive]] = {kind: [] for kind in DirectiveKind}
        for d in directives:
            by_kind[d.kind].append(d)

        # 우선순위: sort → rating → complete → tag
        sort_column = SortColumn.relevance
        if by_kind[DirectiveKind.sort]:
            sort_column = SortColumn(by_kind[DirectiveKind.sort][0].value)

        rating_id = None
        if by_kind[DirectiveKind.rating]:
            rating_id = RATING_IDS.get(by_kind[DirectiveKind.rating][0].value)

        is_complete = None
        if by_kind[DirectiveKind.complete]:
            is_complete = by_kind[DirectiveKind.complete][0].value == "true"

        extra_tags = [d.value.strip() for d in by_kind[DirectiveKind.tag] if d.value.strip()]

        parsed = ParsedQuery(
            free_text=strip_directives(raw, directives),
            sort_column=sort_column,
            rating_id=rating_id,
            is_complete=is_complete,
            extra_tags=extra_tags,
        )
        logger.debug("query.translate: raw=%r directives=%d parsed=%s", raw, len(directives), parsed)
        return parsed


def build_search_params(parsed: ParsedQuery) -> Dict[str, str]:
    """
    ParsedQuery 를 업스트림 검색 파라미터로 변환한다.

    Args:
        parsed: 번역된 쿼리
    Returns:
        Dict[str, str]: work_search[...] 쿼리 파라미터
    """
    params = {
        "utf8": "✓",
        "work_search[query]": parsed.effective_query,
        "work_search[sort_column]": parsed.sort_column.upstream_key,
        "work_search[sort_direction]": parsed.sort_direction.value,
    }
    if parsed.rating_id is not None:
        params["work_search[rating_ids]"] = str(parsed.rating_id)
    if parsed.is_complete is not None:
        params["work_search[complete]"] = "T" if parsed.is_complete else "F"
    return params
