from typing import List

from fastapi import APIRouter, Depends
from archive_proxy.app.api.deps import get_tag_service, TagService

router = APIRouter(prefix="/tags", tags=["tags"])

@router.get(
    "",
    summary="인기 태그",
    description="업스트림 태그 클라우드의 태그 이름을 반환합니다. 실패 시 빈 배열.",
    operation_id="popularTags",
    response_model=List[str],
)
async def popular_tags(svc: TagService = Depends(get_tag_service)):
    return await svc.popular_tags()
