"""
보안 헤더 미들웨어

JSON만 응답하는 API이므로 브라우저가 응답을 문서로 해석하지 않도록 막는다.
Swagger/ReDoc 페이지는 CDN 스크립트를 쓰므로 CSP에서 제외한다.
"""

from typing import Callable, Dict, Optional

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from ..config import settings

BASE_HEADERS: Dict[str, str] = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "no-referrer",
}

API_CSP = "default-src 'none'; frame-ancestors 'none'"

DOCS_PATHS = ("/docs", "/redoc")


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """응답마다 보안 헤더 추가 (production 환경은 HSTS 포함)"""

    def __init__(self, app, hsts_max_age: Optional[int] = None):
        super().__init__(app)
        if hsts_max_age is None and settings.ENVIRONMENT == "production":
            hsts_max_age = 31536000  # 1년
        self.hsts_max_age = hsts_max_age

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        response = await call_next(request)
        if request.method == "OPTIONS":
            return response

        response.headers.update(BASE_HEADERS)
        if not request.url.path.startswith(DOCS_PATHS):
            response.headers["Content-Security-Policy"] = API_CSP
        if self.hsts_max_age:
            response.headers["Strict-Transport-Security"] = f"max-age={self.hsts_max_age}; includeSubDomains"
        return response
