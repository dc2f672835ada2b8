# archive_proxy/app/platform/logging.py
import os
import json
import logging
import logging.config
from contextvars import ContextVar
from datetime import datetime, timezone

# ===== Request ID =====
request_id_ctx = ContextVar("request_id", default="-")

class RequestIDFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_ctx.get()
        return True

# ===== JSON Formatter =====
class JsonFormatter(logging.Formatter):
    """
    JSON 라인 출력.
    업스트림 호출 로그(extra=...)와 uvicorn.access 레코드의 필드도 있으면 포함.
    """

    _EXTRA_FIELDS = (
        # 업스트림 호출
        "upstream_url", "attempt", "max_attempts", "status_code", "delay_s",
        # uvicorn.access / 미들웨어
        "http_method", "path", "query_string", "client_ip", "duration_ms",
    )

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "request_id": getattr(record, "request_id", "-"),
        }

        # 예외 스택
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)

        for k in self._EXTRA_FIELDS:
            v = getattr(record, k, None)
            if v is not None:
                payload[k] = v

        return json.dumps(payload, ensure_ascii=False)

# ===== Text Formatter (로컬 확인용) =====
TEXT_DEFAULT = "%(asctime)s %(levelname)s [%(name)s] [%(request_id)s] %(message)s"
TEXT_ACCESS = "%(asctime)s %(levelname)s [access] [%(request_id)s] %(message)s"

def setup_logging(
    *,
    log_to_file: bool = False,
    log_dir: str = "/var/log/app",
    as_json: bool = True,
    level: str = "INFO",
) -> None:
    """
    - app 로그: root, uvicorn.error
    - access 로그: uvicorn.access
    - 중복 방지: uvicorn.* 는 propagate=False
    """
    formatters = {
        "json": {"()": JsonFormatter},
        "text_default": {"format": TEXT_DEFAULT},
        "text_access": {"format": TEXT_ACCESS},
    }

    handlers = {
        "console_app": {
            "class": "logging.StreamHandler",
            "level": level,
            "formatter": "json" if as_json else "text_default",
            "filters": ["request_id"],
        },
        "console_access": {
            "class": "logging.StreamHandler",
            "level": level,
            "formatter": "json" if as_json else "text_access",
            "filters": ["request_id"],
        },
    }

    # 파일 핸들러(선택)
    if log_to_file:
        os.makedirs(log_dir, exist_ok=True)
        for name, filename, text_fmt in (
            ("file_app", "app.log", "text_default"),
            ("file_access", "access.log", "text_access"),
        ):
            handlers[name] = {
                "class": "logging.handlers.TimedRotatingFileHandler",
                "level": level,
                "formatter": "json" if as_json else text_fmt,
                "filename": os.path.join(log_dir, filename),
                "when": "midnight",
                "backupCount": 14,
                "encoding": "utf-8",
                "filters": ["request_id"],
            }

    app_handlers = ["console_app"] + (["file_app"] if log_to_file else [])
    access_handlers = ["console_access"] + (["file_access"] if log_to_file else [])

    logging.config.dictConfig({
        "version": 1,
        "disable_existing_loggers": False,
        "filters": {
            "request_id": {"()": RequestIDFilter}
        },
        "formatters": formatters,
        "handlers": handlers,
        "loggers": {
            "": {"handlers": app_handlers, "level": level, "propagate": False},
            "uvicorn.error": {"handlers": app_handlers, "level": level, "propagate": False},
            # 접근 로그는 별도 핸들러로
            "uvicorn.access": {"handlers": access_handlers, "level": level, "propagate": False},
            # httpx 요청 로그는 업스트림 재시도 로그와 중복되므로 WARNING 이상만
            "httpx": {"handlers": app_handlers, "level": "WARNING", "propagate": False},
        },
    })
