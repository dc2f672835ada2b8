from typing import Any, Dict, List

from fastapi import APIRouter, Depends, Query
from archive_proxy.app.api.deps import get_autocomplete_service, AutocompleteService

router = APIRouter(prefix="/autocomplete", tags=["autocomplete"])

@router.get(
    "",
    summary="태그 자동완성",
    description="2글자 이상 입력 시 업스트림 태그 제안 목록을 반환합니다. 짧거나 실패하면 빈 배열.",
    operation_id="autocompleteTags",
    response_model=List[Dict[str, Any]],
)
async def autocomplete(
    q: str | None = Query(None, description="입력 중인 태그 문자열"),
    svc: AutocompleteService = Depends(get_autocomplete_service),
):
    return await svc.suggest(q)
