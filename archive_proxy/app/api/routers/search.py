from typing import List

from fastapi import APIRouter, Depends, Query
from archive_proxy.app.api.deps import get_search_service, SearchService
from archive_proxy.app.domain.models import SummaryRecord
import logging
logger = logging.getLogger(__name__)

router = APIRouter(prefix="/search", tags=["search"])

@router.get(
    "",
    summary="작품 검색",
    description=(
        "지시어가 섞인 쿼리로 업스트림을 검색합니다. "
        "`sort:kudos|hits|date`, `rating:\"Explicit\"`, `complete:true|false`, `tag:\"Fluff\"` 를 지원합니다. "
        "쿼리가 비었거나 업스트림 호출이 실패하면 빈 배열을 반환합니다."
    ),
    operation_id="searchWorks",
    status_code=200,
    response_model=List[SummaryRecord],
    responses={
        200: {
            "description": "검색 결과(없으면 빈 배열)",
            "content": {
                "application/json": {
                    "examples": {
                        "basic": {
                            "summary": "기본 검색 예시",
                            "value": [
                                {
                                    "id": "123456",
                                    "title": "Example Work",
                                    "author": "someone",
                                    "fandom": "Harry Potter - J. K. Rowling",
                                    "rating": "General Audiences",
                                    "relationships": [],
                                    "tags": ["Fluff"],
                                    "summary": "A short summary.",
                                    "words": 1200,
                                    "chapters": 1,
                                    "updated": "01 Jan 2024",
                                }
                            ],
                        }
                    }
                }
            },
        },
    },
)
async def search(
    q: str | None = Query(None, description="검색 쿼리(지시어 포함 가능)"),
    svc: SearchService = Depends(get_search_service),
):
    logger.info("SearchRequest: q=%r", q)
    return await svc.search(q)
