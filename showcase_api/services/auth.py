"""
인증 의존성

Authorization: Bearer <Discord OAuth 액세스 토큰>
토큰 발급은 하지 않고, Discord API로 소유자 ID만 확인한다.
"""

import logging
from typing import Optional

from fastapi import Depends, Header, HTTPException, status

from ..middleware.metrics import record_auth_attempt
from .discord_service import DiscordAuthError, DiscordClient, DiscordError, get_discord_client

logger = logging.getLogger(__name__)


def parse_authorization_header(authorization: Optional[str]) -> str:
    """
    Authorization 헤더에서 액세스 토큰 추출

    Raises:
        HTTPException(422): 헤더 누락 또는 형식 오류
    """
    if not authorization:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail={"error": "Missing authorization header", "code": "MALFORMED_REQUEST"},
        )

    parts = authorization.split(" ")
    if len(parts) != 2 or parts[0].lower() != "bearer" or not parts[1]:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail={"error": "Invalid authorization format", "code": "MALFORMED_REQUEST"},
        )
    return parts[1]


async def get_access_token(authorization: Optional[str] = Header(default=None)) -> str:
    return parse_authorization_header(authorization)


async def get_current_discord_id(
    access_token: str = Depends(get_access_token),
    discord: DiscordClient = Depends(get_discord_client),
) -> str:
    """
    현재 인증된 사용자의 Discord ID

    Raises:
        HTTPException(401): Discord가 토큰을 거부
        HTTPException(502): Discord 연결 실패
    """
    try:
        discord_id = await discord.get_user_id(access_token)
    except DiscordAuthError as e:
        record_auth_attempt(success=False)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={"error": e.message, "code": e.code},
        )
    except DiscordError as e:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail={"error": e.message, "code": e.code},
        )

    record_auth_attempt(success=True)
    return discord_id


async def get_optional_discord_id(
    authorization: Optional[str] = Header(default=None),
    discord: DiscordClient = Depends(get_discord_client),
) -> Optional[str]:
    """
    현재 인증된 사용자의 Discord ID (선택적)

    헤더가 없거나 토큰이 유효하지 않으면 None
    """
    if not authorization:
        return None

    try:
        access_token = parse_authorization_header(authorization)
        return await discord.get_user_id(access_token)
    except HTTPException:
        return None
    except DiscordError as e:
        logger.info(f"Optional auth ignored: {e.code}")
        return None
