"""
미들웨어 모듈

보안 헤더, 메트릭
"""

from .security_headers import SecurityHeadersMiddleware
from .metrics import (
    setup_metrics,
    record_auth_attempt,
    record_project_mutation,
)

__all__ = [
    "SecurityHeadersMiddleware",
    "setup_metrics",
    "record_auth_attempt",
    "record_project_mutation",
]
