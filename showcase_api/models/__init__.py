"""
Pydantic 스키마 정의 (API 요청/응답)
"""

from .base import ErrorResponse
from .project import (
    CreateProjectRequest,
    UpdateProjectRequest,
    DeleteProjectRequest,
    ProjectCollaboratorResponse,
    ProjectResponse,
)
from .user import (
    CreateUserRequest,
    UpdateUserRequest,
    UserResponse,
)

__all__ = [
    # Common
    "ErrorResponse",
    # Projects
    "CreateProjectRequest",
    "UpdateProjectRequest",
    "DeleteProjectRequest",
    "ProjectCollaboratorResponse",
    "ProjectResponse",
    # User
    "CreateUserRequest",
    "UpdateUserRequest",
    "UserResponse",
]
