"""
전역 예외 핸들러.

모든 오류 응답은 같은 봉투 형태를 쓴다.

    {"success": false, "error": {"code", "message", "details"}, "trace_id": <X-Request-ID>}

아카이브(업스트림) 장애는 서비스가 빈 목록/error 레코드로 흡수하므로 여기까지 오지 않는다.
여기 도달하는 것은 라우팅 오류(없는 경로), 파라미터 검증 오류, 도메인 입력 오류, 예기치 못한 버그뿐이다.
"""

import logging

from fastapi import Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from archive_proxy.app.platform.logging import request_id_ctx
from archive_proxy.app.platform import exceptions as domainex

logger = logging.getLogger(__name__)


def error_envelope(message, code="BAD_REQUEST", details=None, trace_id=None):
    return {
        "success": False,
        "error": {
            "code": code, "message": message, "details": details
        },
        "trace_id": trace_id
    }


def _error_response(http_status: int, message, code: str, details=None) -> JSONResponse:
    return JSONResponse(status_code=http_status,
                        content=error_envelope(
                            message,
                            code=code,
                            details=details,
                            trace_id=request_id_ctx.get()))


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    # 없는 경로(404), 허용되지 않은 메서드(405) 등 라우팅 단계 오류
    return _error_response(exc.status_code, exc.detail, f"HTTP_{exc.status_code}")


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    # 422 Unprocessable Entity (쿼리/경로 파라미터 타입 오류)
    return _error_response(422, "Unprocessable Entity", "VALIDATION_ERROR",
                           details=jsonable_encoder(exc.errors()))


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled exception path=%s", request.url.path)
    return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error", "INTERNAL_ERROR")


async def domain_exception_handler(request: Request, exc: domainex.DomainError):
    """
    도메인 예외를 HTTP 로 매핑.
    상태코드/에러코드/details 는 예외 클래스가 정한다(NOT_FOUND 404, INVALID_INPUT 400, 그 외 400).
    """
    logger.warning("Domain error: %s (%s) path=%s", exc, exc.code, request.url.path)
    return _error_response(exc.http_status, str(exc), exc.code, details=exc.details())
