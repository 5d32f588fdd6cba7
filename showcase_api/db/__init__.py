"""
데이터베이스 모듈
데이터베이스 연결 및 모델 관리
"""

from .connection import Base, dispose_db, get_db, init_db
from .models import (
    UserModel,
    LaunchModel,
    RoleModel,
    ProjectModel,
    UserProjectModel,
)

__all__ = [
    "Base",
    "get_db",
    "init_db",
    "dispose_db",
    "UserModel",
    "LaunchModel",
    "RoleModel",
    "ProjectModel",
    "UserProjectModel",
]
