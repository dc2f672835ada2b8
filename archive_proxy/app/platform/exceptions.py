"""
도메인/유스케이스 예외.

업스트림 호출 실패(httpx.HTTPError)는 여기에 포함하지 않는다.
서비스가 빈 목록/error 레코드로 응답 본문에 흡수하기 때문이다.
각 예외는 오류 봉투에 들어갈 code / HTTP 상태 / details 를 스스로 가진다.
"""


class DomainError(Exception):
    """도메인/유즈케이스 공통 베이스 예외"""
    code = "SERVICE_ERROR"
    http_status = 400

    def details(self) -> dict | None:
        return None


class ResourceNotFound(DomainError):
    """프록시가 제공하지 않는 리소스(예: 지원하지 않는 작품 경로)."""
    code = "NOT_FOUND"
    http_status = 404

    def __init__(self, resource: str, detail: str | None = None):
        super().__init__(detail or f"{resource} not found")
        self.resource = resource

    def details(self) -> dict | None:
        return {"resource": self.resource}


class InvalidInput(DomainError):
    """잘못된 경로/쿼리 파라미터(예: 숫자가 아닌 작품 id)."""
    code = "INVALID_INPUT"
    http_status = 400

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.field = field

    def details(self) -> dict | None:
        return {"field": self.field} if self.field else None
