"""
도메인 포트(추상 인터페이스).

애플리케이션 서비스(유스케이스)는 아래 포트들(추상)에만 의존합니다.
구체 구현은 adapters 레이어에서 제공하고, FastAPI DI로 주입합니다.
"""

from __future__ import annotations

from typing import Mapping, Protocol, List

from .models import SummaryRecord, WorkRecord


class FetchPort(Protocol):
    """업스트림에서 원문(HTML/JSON 텍스트)을 가져온다."""

    async def fetch(
        self,
        url: str,
        headers: Mapping[str, str] | None = None,
        params: Mapping[str, str] | None = None,
        max_attempts: int | None = None,
    ) -> str:
        """
        Args:
            url: 'https://...' 절대 URL
            headers: 호출 단위 추가 헤더(기본 헤더에 덮어씀)
            params: 쿼리 파라미터
            max_attempts: 총 시도 횟수(미지정 시 정책 기본값)
        Returns:
            str: 응답 본문 텍스트
        Raises:
            httpx.HTTPError: 재시도 후에도 실패한 최종 오류
        """
        ...


class ListingParsePort(Protocol):
    """검색 결과 목록 HTML → SummaryRecord 목록."""

    def parse(self, html: str) -> List[SummaryRecord]:
        ...


class WorkParsePort(Protocol):
    """작품 페이지 HTML → WorkRecord."""

    def parse(self, work_id: str, html: str) -> WorkRecord:
        ...


class TagParsePort(Protocol):
    """태그 클라우드 HTML → 태그 이름 목록."""

    def parse(self, html: str) -> List[str]:
        ...
