"""
Discord API 클라이언트

- OAuth 액세스 토큰 → Discord 사용자 ID
- 길드 멤버 역할 조회 (모더레이터 판정)

⚠️ 액세스 토큰/봇 토큰은 로그에 남기지 않는다.
"""

import logging
from typing import List, Optional

import httpx

from ..config import settings

logger = logging.getLogger(__name__)


class DiscordError(Exception):
    """Discord 연동 오류"""
    def __init__(self, message: str, code: str = "DISCORD_ERROR"):
        self.message = message
        self.code = code
        super().__init__(self.message)


class DiscordAuthError(DiscordError):
    """유효하지 않은 액세스 토큰"""
    def __init__(self, message: str = "Invalid accessToken"):
        super().__init__(message, code="INVALID_ACCESS_TOKEN")


class DiscordClient:
    """Discord REST API 클라이언트"""

    def __init__(
        self,
        base_url: Optional[str] = None,
        bot_token: Optional[str] = None,
        guild_id: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Args:
            base_url: Discord API URL (기본값: settings.DISCORD_API_BASE_URL)
            bot_token: 길드 조회용 봇 토큰
            guild_id: 모더레이터 역할을 확인할 길드
            timeout: 요청 타임아웃 (초)
            transport: 테스트용 httpx transport
        """
        self.base_url = base_url or settings.DISCORD_API_BASE_URL
        self.bot_token = bot_token if bot_token is not None else settings.DISCORD_BOT_TOKEN
        self.guild_id = guild_id if guild_id is not None else settings.DISCORD_GUILD_ID
        self.mod_role_names = settings.mod_role_names_set

        self.client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout or settings.DISCORD_TIMEOUT_SECONDS,
            transport=transport,
        )

    async def get_user_id(self, access_token: str) -> str:
        """
        액세스 토큰의 소유자 Discord ID 조회

        Raises:
            DiscordAuthError: 토큰이 거부된 경우
            DiscordError: Discord 연결 실패
        """
        try:
            response = await self.client.get(
                "/users/@me",
                headers={"Authorization": f"Bearer {access_token}"},
            )
        except httpx.HTTPError as e:
            logger.error(f"Discord user lookup failed: {type(e).__name__}")
            raise DiscordError("Discord API unavailable", code="DISCORD_UNAVAILABLE") from e

        if response.status_code in (401, 403):
            raise DiscordAuthError()
        if not response.is_success:
            logger.warning(f"Discord /users/@me response: {response.status_code}")
            raise DiscordError("Discord API error", code="DISCORD_UNAVAILABLE")

        discord_id = response.json().get("id")
        if not discord_id:
            raise DiscordAuthError()
        return str(discord_id)

    async def get_guild_role_names(self, discord_id: str) -> List[str]:
        """
        길드 멤버의 역할 이름 목록

        봇 토큰/길드가 설정되지 않았거나 멤버가 아니면 빈 목록.
        """
        if not self.bot_token or not self.guild_id:
            return []

        headers = {"Authorization": f"Bot {self.bot_token}"}
        try:
            member_resp = await self.client.get(
                f"/guilds/{self.guild_id}/members/{discord_id}",
                headers=headers,
            )
            if member_resp.status_code == 404:
                return []
            member_resp.raise_for_status()

            roles_resp = await self.client.get(f"/guilds/{self.guild_id}/roles", headers=headers)
            roles_resp.raise_for_status()
        except httpx.HTTPError as e:
            logger.error(f"Discord guild lookup failed for {discord_id}: {type(e).__name__}")
            raise DiscordError("Discord API unavailable", code="DISCORD_UNAVAILABLE") from e

        member_role_ids = set(member_resp.json().get("roles", []))
        return [role["name"] for role in roles_resp.json() if role.get("id") in member_role_ids]

    async def is_moderator(self, discord_id: str) -> bool:
        """mod/admin 역할 보유 여부"""
        role_names = await self.get_guild_role_names(discord_id)
        return any(name.lower() in self.mod_role_names for name in role_names)

    async def close(self):
        await self.client.aclose()


_discord_client: Optional[DiscordClient] = None


def get_discord_client() -> DiscordClient:
    """DiscordClient 싱글톤 (FastAPI 의존성)"""
    global _discord_client
    if _discord_client is None:
        _discord_client = DiscordClient()
    return _discord_client


async def close_discord_client():
    global _discord_client
    if _discord_client is not None:
        await _discord_client.close()
        _discord_client = None
