"""
작품 본문 조회 API 라우터.
"""

from fastapi import APIRouter, Depends, Path
from archive_proxy.app.api.deps import get_work_service, WorkService
from archive_proxy.app.domain.models import WorkRecord
from archive_proxy.app.platform.exceptions import InvalidInput
import logging
logger = logging.getLogger(__name__)

router = APIRouter(prefix="/work", tags=["work"])

@router.get(
    "/{work_id}",
    summary="작품 본문 조회",
    description=(
        "작품 전체 본문을 챕터별 HTML 조각 배열(`content`)로 반환합니다. "
        "업스트림 호출이 실패하면 200 과 함께 `error` 필드가 채워진 레코드를 반환합니다."
    ),
    operation_id="getWork",
    status_code=200,
    response_model=WorkRecord,
    response_model_exclude_none=True,
    responses={
        200: {
            "description": "작품 본문 또는 error 레코드",
            "content": {
                "application/json": {
                    "examples": {
                        "ok": {
                            "summary": "성공",
                            "value": {
                                "id": "123456",
                                "title": "Example Work",
                                "author": "someone",
                                "content": ["<p>Chapter one</p>", "<p>Chapter two</p>"],
                                "chapters": 2,
                            },
                        },
                        "upstream_failed": {
                            "summary": "업스트림 실패",
                            "value": {
                                "id": "123456",
                                "content": [],
                                "chapters": 0,
                                "error": "Failed to fetch work",
                            },
                        },
                    }
                }
            },
        },
        400: {"description": "숫자가 아닌 작품 id"},
    },
)
async def get_work(
    work_id: str = Path(..., description="숫자 작품 id"),
    svc: WorkService = Depends(get_work_service),
):
    if not (work_id.isascii() and work_id.isdigit()):
        raise InvalidInput(f"work id must be numeric: {work_id!r}", field="work_id")
    logger.info("WorkRequest: id=%s", work_id)
    return await svc.get_work(work_id)
