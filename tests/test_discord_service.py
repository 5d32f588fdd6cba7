"""
Discord API 클라이언트 테스트

httpx.MockTransport로 Discord 응답을 흉내낸다.
"""

import httpx
import pytest

from showcase_api.services.discord_service import DiscordAuthError, DiscordClient, DiscordError

GUILD_ID = "900"
MEMBER_ID = "42"

GUILD_ROLES = [
    {"id": "1", "name": "Mod"},
    {"id": "2", "name": "Developer"},
    {"id": "3", "name": "admin"},
]


def _client(handler, bot_token: str = "bot-token", guild_id: str = GUILD_ID) -> DiscordClient:
    return DiscordClient(
        base_url="https://discord.test/api",
        bot_token=bot_token,
        guild_id=guild_id,
        transport=httpx.MockTransport(handler),
    )


def _guild_handler(member_roles, member_status: int = 200):
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.headers["Authorization"] == "Bot bot-token"
        if request.url.path.endswith(f"/guilds/{GUILD_ID}/members/{MEMBER_ID}"):
            if member_status != 200:
                return httpx.Response(member_status, json={"message": "Unknown Member"})
            return httpx.Response(200, json={"roles": member_roles})
        if request.url.path.endswith(f"/guilds/{GUILD_ID}/roles"):
            return httpx.Response(200, json=GUILD_ROLES)
        return httpx.Response(404)
    return handler


class TestGetUserId:
    """액세스 토큰 → Discord ID"""

    @pytest.mark.asyncio
    async def test_valid_token(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["path"] = request.url.path
            seen["auth"] = request.headers["Authorization"]
            return httpx.Response(200, json={"id": "12345", "username": "jo"})

        discord = _client(handler)
        try:
            assert await discord.get_user_id("token-abc") == "12345"
        finally:
            await discord.close()

        assert seen["path"].endswith("/users/@me")
        assert seen["auth"] == "Bearer token-abc"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status_code", [401, 403])
    async def test_rejected_token(self, status_code):
        discord = _client(lambda request: httpx.Response(status_code, json={"message": "401: Unauthorized"}))
        try:
            with pytest.raises(DiscordAuthError) as exc_info:
                await discord.get_user_id("bad")
        finally:
            await discord.close()

        assert exc_info.value.code == "INVALID_ACCESS_TOKEN"
        assert exc_info.value.message == "Invalid accessToken"

    @pytest.mark.asyncio
    async def test_missing_id_is_rejected(self):
        discord = _client(lambda request: httpx.Response(200, json={}))
        try:
            with pytest.raises(DiscordAuthError):
                await discord.get_user_id("token")
        finally:
            await discord.close()

    @pytest.mark.asyncio
    async def test_server_error(self):
        discord = _client(lambda request: httpx.Response(503))
        try:
            with pytest.raises(DiscordError) as exc_info:
                await discord.get_user_id("token")
        finally:
            await discord.close()

        assert not isinstance(exc_info.value, DiscordAuthError)
        assert exc_info.value.code == "DISCORD_UNAVAILABLE"

    @pytest.mark.asyncio
    async def test_connection_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        discord = _client(handler)
        try:
            with pytest.raises(DiscordError) as exc_info:
                await discord.get_user_id("token")
        finally:
            await discord.close()

        assert exc_info.value.code == "DISCORD_UNAVAILABLE"


class TestModerator:
    """길드 역할 기반 모더레이터 판정"""

    @pytest.mark.asyncio
    async def test_role_names(self):
        discord = _client(_guild_handler(["2", "3"]))
        try:
            assert await discord.get_guild_role_names(MEMBER_ID) == ["Developer", "admin"]
        finally:
            await discord.close()

    @pytest.mark.asyncio
    async def test_mod_role_case_insensitive(self):
        discord = _client(_guild_handler(["1"]))
        try:
            assert await discord.is_moderator(MEMBER_ID) is True
        finally:
            await discord.close()

    @pytest.mark.asyncio
    async def test_regular_member(self):
        discord = _client(_guild_handler(["2"]))
        try:
            assert await discord.is_moderator(MEMBER_ID) is False
        finally:
            await discord.close()

    @pytest.mark.asyncio
    async def test_not_a_member(self):
        discord = _client(_guild_handler([], member_status=404))
        try:
            assert await discord.is_moderator(MEMBER_ID) is False
        finally:
            await discord.close()

    @pytest.mark.asyncio
    async def test_guild_not_configured(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise AssertionError("Discord should not be called")

        discord = _client(handler, bot_token="", guild_id="")
        try:
            assert await discord.get_guild_role_names(MEMBER_ID) == []
        finally:
            await discord.close()

    @pytest.mark.asyncio
    async def test_guild_error(self):
        discord = _client(_guild_handler([], member_status=500))
        try:
            with pytest.raises(DiscordError):
                await discord.is_moderator(MEMBER_ID)
        finally:
            await discord.close()
