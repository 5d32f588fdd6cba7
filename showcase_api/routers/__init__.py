"""
API 라우터 모듈
"""

from .projects import router as projects_router
from .user import router as user_router

__all__ = [
    "projects_router",
    "user_router",
]
