import textwrap

from archive_proxy.app.platform.config import Settings


def test_default_settings(monkeypatch, tmp_path):
    """기본값이 올바르게 설정되는지 검증"""
    monkeypatch.chdir(tmp_path)  # 작업 디렉터리의 .env 영향 제거
    s = Settings()
    assert s.APP_NAME == "archive-proxy"
    assert s.DEBUG is False
    assert s.UPSTREAM_BASE_URL.startswith("https://")
    assert s.RETRY_MAX_ATTEMPTS == 4
    assert s.RETRY_BASE_DELAY == 5.0
    assert s.RETRY_MAX_JITTER == 2.0
    assert s.FREEFORM_TAG_LIMIT == 5


def test_override_with_env(monkeypatch):
    """환경변수로 설정값이 덮어써지는지 검증"""
    monkeypatch.setenv("APP_NAME", "custom-app")
    monkeypatch.setenv("DEBUG", "true")
    monkeypatch.setenv("UPSTREAM_BASE_URL", "http://mirror.test")
    monkeypatch.setenv("MAX_CONNECTIONS", "3")

    s = Settings()
    assert s.APP_NAME == "custom-app"
    assert s.DEBUG is True
    assert s.UPSTREAM_BASE_URL == "http://mirror.test"
    assert s.MAX_CONNECTIONS == 3


def test_env_file_loading(tmp_path):
    """env 파일에서 로딩되는지 검증"""
    env_file = tmp_path / ".env"
    env_file.write_text(textwrap.dedent("""
        APP_NAME=env-app
        RETRY_BASE_DELAY=0.5
        REQUEST_TIMEOUT=15
    """))

    s = Settings(_env_file=env_file)
    assert s.APP_NAME == "env-app"
    assert s.RETRY_BASE_DELAY == 0.5
    assert s.REQUEST_TIMEOUT == 15.0


def test_builds_immutable_transport_and_retry(monkeypatch):
    """Settings 에서 트랜스포트/재시도 설정 값 객체를 만드는지 검증"""
    monkeypatch.setenv("USER_AGENT", "ua-test")
    monkeypatch.setenv("PREFER_IPV4", "false")
    monkeypatch.setenv("RETRY_MAX_ATTEMPTS", "2")
    monkeypatch.setenv("RETRY_BACKOFF_FACTOR", "2")

    s = Settings()
    transport = s.transport_config()
    retry = s.retry_policy()

    assert transport.user_agent == "ua-test"
    assert transport.prefer_ipv4 is False
    assert transport.default_headers()["User-Agent"] == "ua-test"
    assert retry.max_attempts == 2
    assert retry.backoff_factor == 2.0
    assert retry.retry_statuses == frozenset({429, 503})
