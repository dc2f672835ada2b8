"""
도메인 모델 정의.

- ParsedQuery/Directive: 검색 DSL 번역 결과
- SummaryRecord: 목록(검색 결과) 페이지의 작품 1건 요약
- WorkRecord: 작품 본문(챕터별 HTML 조각)
- TransportConfig/RetryPolicy: 업스트림 호출 설정 (불변, 생성 시 주입)

모든 엔티티는 요청 단위로 생성/직렬화 후 버려집니다.
직렬화 키는 기존 클라이언트가 쓰는 이름(alias)을 따릅니다.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, computed_field


class SortColumn(str, Enum):
    relevance = "relevance"
    kudos = "kudos"
    hits = "hits"
    date = "date"

    @property
    def upstream_key(self) -> str:
        return _SORT_COLUMN_KEYS[self]


_SORT_COLUMN_KEYS = {
    SortColumn.relevance: "_score",
    SortColumn.kudos: "kudos_count",
    SortColumn.hits: "hits",
    SortColumn.date: "revised_at",
}


class SortDirection(str, Enum):
    ascending = "asc"
    descending = "desc"


# 등급 이름 → 업스트림 rating id (대소문자 구분)
RATING_IDS: dict[str, int] = {
    "Not Rated": 9,
    "General Audiences": 10,
    "Teen And Up Audiences": 11,
    "Mature": 12,
    "Explicit": 13,
}


class DirectiveKind(str, Enum):
    sort = "sort"
    rating = "rating"
    complete = "complete"
    tag = "tag"


class Directive(BaseModel):
    """원문 쿼리에서 찾은 지시어 1개와 그 위치(span)."""
    model_config = ConfigDict(frozen=True)

    kind: DirectiveKind
    value: str
    start: int = Field(..., ge=0)
    end: int = Field(..., ge=0)


class ParsedQuery(BaseModel):
    """검색 DSL 번역 결과."""
    model_config = ConfigDict(frozen=True)

    free_text: str = ""
    sort_column: SortColumn = SortColumn.relevance
    sort_direction: SortDirection = SortDirection.descending
    rating_id: int | None = None
    is_complete: bool | None = None
    extra_tags: list[str] = Field(default_factory=list)

    @property
    def effective_query(self) -> str:
        """업스트림 query 필드로 보낼 문자열(태그를 본문에 다시 붙인 형태)."""
        return " ".join(part for part in [self.free_text, *self.extra_tags] if part)


class SummaryRecord(BaseModel):
    """검색 결과 목록의 작품 1건."""
    model_config = ConfigDict(populate_by_name=True)

    id: str
    title: str = ""
    author: str = "Anonymous"
    fandom: str = ""
    rating: str = ""
    relationships: list[str] = Field(default_factory=list)
    freeform_tags: list[str] = Field(default_factory=list, alias="tags")
    summary: str = ""
    word_count: int = Field(0, ge=0, alias="words")
    chapter_count: int = Field(1, ge=1, alias="chapters")
    updated: str = ""


class WorkRecord(BaseModel):
    """
    작품 본문.
    content 는 챕터별 HTML 조각이며, 비어 있어도 정상 응답이다.
    업스트림 호출 실패 시에는 error 만 채운 레코드를 돌려준다.
    """

    id: str
    # 파서는 요소가 없으면 "" 를 채운다. None 은 error 레코드 전용.
    title: str | None = None
    author: str | None = None
    content: list[str] = Field(default_factory=list)
    error: str | None = None

    @computed_field(alias="chapters")
    @property
    def chapter_count(self) -> int:
        return len(self.content)

    @classmethod
    def failed(cls, work_id: str, message: str) -> "WorkRecord":
        return cls(id=work_id, content=[], error=message)


class TransportConfig(BaseModel):
    """업스트림 HTTP 트랜스포트 설정. 앱 시작 시 한 번 만들어 주입한다."""
    model_config = ConfigDict(frozen=True)

    base_url: str = "https://archiveofourown.org"
    user_agent: str = "Mozilla/5.0"
    referer: str | None = None
    timeout: float = Field(30.0, gt=0)
    max_connections: int = Field(10, ge=1)
    max_keepalive_connections: int = Field(10, ge=0)
    keepalive_expiry: float = Field(30.0, ge=0)
    prefer_ipv4: bool = True
    follow_redirects: bool = True

    def default_headers(self) -> dict[str, str]:
        headers = {"User-Agent": self.user_agent}
        if self.referer:
            headers["Referer"] = self.referer
        return headers

    def url(self, path: str) -> str:
        return f"{self.base_url.rstrip('/')}/{path.lstrip('/')}"


class RetryPolicy(BaseModel):
    """
    재시도 정책.
    max_attempts 는 첫 시도를 포함한 총 시도 횟수(기본 4 = 1 + 재시도 3).
    """
    model_config = ConfigDict(frozen=True)

    max_attempts: int = Field(4, ge=1)
    base_delay: float = Field(5.0, ge=0)
    max_jitter: float = Field(2.0, ge=0)
    backoff_factor: float = Field(1.0, ge=1.0)
    retry_statuses: frozenset[int] = frozenset({429, 503})
    retry_on_transport_errors: bool = False

    def delay_for(self, attempt: int, jitter: float = 0.0) -> float:
        """attempt(1부터)번째 실패 뒤 다음 시도 전 대기 시간(초)."""
        return self.base_delay * (self.backoff_factor ** (attempt - 1)) + jitter
