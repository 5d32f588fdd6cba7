"""
서비스 레이어
비즈니스 로직 분리 및 재사용 가능한 서비스
"""

from .name_matcher import NameCandidate, edit_distance, suggest_similar_name
from .discord_service import (
    DiscordClient,
    DiscordError,
    DiscordAuthError,
    get_discord_client,
    close_discord_client,
)
from .project_service import ProjectServiceError
from .user_service import UserServiceError

__all__ = [
    "NameCandidate",
    "edit_distance",
    "suggest_similar_name",
    "DiscordClient",
    "DiscordError",
    "DiscordAuthError",
    "get_discord_client",
    "close_discord_client",
    "ProjectServiceError",
    "UserServiceError",
]
