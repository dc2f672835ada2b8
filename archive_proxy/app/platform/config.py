from pydantic_settings import BaseSettings, SettingsConfigDict

from archive_proxy.app.domain.models import RetryPolicy, TransportConfig

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    APP_NAME: str = "archive-proxy"
    DEBUG: bool = False
    PORT: int = 3000

    # 업스트림 / 트랜스포트
    UPSTREAM_BASE_URL: str = "https://archiveofourown.org"
    USER_AGENT: str = DEFAULT_USER_AGENT
    REFERER: str = "https://archiveofourown.org/"
    REQUEST_TIMEOUT: float = 30.0
    MAX_CONNECTIONS: int = 10
    MAX_KEEPALIVE_CONNECTIONS: int = 10
    KEEPALIVE_EXPIRY: float = 30.0
    PREFER_IPV4: bool = True

    # 재시도
    RETRY_MAX_ATTEMPTS: int = 4
    RETRY_BASE_DELAY: float = 5.0
    RETRY_MAX_JITTER: float = 2.0
    RETRY_BACKOFF_FACTOR: float = 1.0

    # 응답 크기 정책
    FREEFORM_TAG_LIMIT: int = 5
    POPULAR_TAG_LIMIT: int = 30
    AUTOCOMPLETE_MIN_LENGTH: int = 2

    # 로깅
    LOG_LEVEL: str = "INFO"
    LOG_AS_JSON: bool = True
    LOG_TO_FILE: bool = False
    LOG_DIR: str = "/var/log/app"

    def transport_config(self) -> TransportConfig:
        return TransportConfig(
            base_url=self.UPSTREAM_BASE_URL,
            user_agent=self.USER_AGENT,
            referer=self.REFERER,
            timeout=self.REQUEST_TIMEOUT,
            max_connections=self.MAX_CONNECTIONS,
            max_keepalive_connections=self.MAX_KEEPALIVE_CONNECTIONS,
            keepalive_expiry=self.KEEPALIVE_EXPIRY,
            prefer_ipv4=self.PREFER_IPV4,
        )

    def retry_policy(self) -> RetryPolicy:
        return RetryPolicy(
            max_attempts=self.RETRY_MAX_ATTEMPTS,
            base_delay=self.RETRY_BASE_DELAY,
            max_jitter=self.RETRY_MAX_JITTER,
            backoff_factor=self.RETRY_BACKOFF_FACTOR,
        )


settings = Settings()
