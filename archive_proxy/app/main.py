from __future__ import annotations

from contextlib import asynccontextmanager
from fastapi import FastAPI
from starlette.exceptions import HTTPException as StarletteHTTPException
from fastapi.exceptions import RequestValidationError

from archive_proxy.app.api.routers import (
    health,
    search,
    work,
    tags,
    autocomplete,
)
from archive_proxy.app.adapters.fetchers.http_client import build_http_client
from archive_proxy.app.platform.config import settings
from archive_proxy.app.platform.logging import setup_logging
from archive_proxy.app.platform.errors import (
    http_exception_handler,
    validation_exception_handler,
    unhandled_exception_handler,
    domain_exception_handler
)
from archive_proxy.app.platform import exceptions as domainex
from archive_proxy.app.middlewares.request_context import RequestContextMiddleware


@asynccontextmanager
async def lifespan(app: FastAPI):
    # 로깅 등 공통 준비
    setup_logging(
        log_to_file=settings.LOG_TO_FILE,
        log_dir=settings.LOG_DIR,
        as_json=settings.LOG_AS_JSON,
        level=settings.LOG_LEVEL,
    )

    # 업스트림 httpx 클라이언트(커넥션 풀)를 한 번만 생성해서 공유
    app.state.http_client = build_http_client(settings.transport_config())
    try:
        yield
    finally:
        await app.state.http_client.aclose()
        app.state.http_client = None

app = FastAPI(title="Archive Proxy API", lifespan=lifespan)
app.include_router(health.router)
app.include_router(search.router)
app.include_router(work.router)
app.include_router(tags.router)
app.include_router(autocomplete.router)

# Global Exception Filter
app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(domainex.DomainError, domain_exception_handler)
app.add_exception_handler(Exception, unhandled_exception_handler)

# 요청 컨텍스트/액세스 로그 미들웨어
app.add_middleware(RequestContextMiddleware)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=settings.PORT)
