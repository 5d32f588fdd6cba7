"""
인증 의존성 테스트
"""

import pytest
from fastapi import HTTPException

from showcase_api.services.auth import get_optional_discord_id, parse_authorization_header
from showcase_api.services.discord_service import DiscordAuthError, DiscordError


class TestParseAuthorizationHeader:
    """Authorization 헤더 파싱"""

    @pytest.mark.parametrize("header", ["Bearer abc", "bearer abc", "BEARER abc"])
    def test_bearer_token(self, header):
        assert parse_authorization_header(header) == "abc"

    @pytest.mark.parametrize("header", [None, ""])
    def test_missing(self, header):
        with pytest.raises(HTTPException) as exc_info:
            parse_authorization_header(header)

        assert exc_info.value.status_code == 422
        assert exc_info.value.detail["error"] == "Missing authorization header"

    @pytest.mark.parametrize("header", ["abc", "Basic abc", "Bearer", "Bearer a b", "Bearer "])
    def test_malformed(self, header):
        with pytest.raises(HTTPException) as exc_info:
            parse_authorization_header(header)

        assert exc_info.value.status_code == 422
        assert exc_info.value.detail == {"error": "Invalid authorization format", "code": "MALFORMED_REQUEST"}


class TestOptionalDiscordId:
    """선택적 인증"""

    @pytest.mark.asyncio
    async def test_no_header(self, mock_discord):
        assert await get_optional_discord_id(None, mock_discord) is None
        mock_discord.get_user_id.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_valid_token(self, mock_discord):
        assert await get_optional_discord_id("Bearer abc", mock_discord) == "100000000000000001"
        mock_discord.get_user_id.assert_awaited_once_with("abc")

    @pytest.mark.asyncio
    async def test_malformed_header(self, mock_discord):
        assert await get_optional_discord_id("abc", mock_discord) is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "error",
        [DiscordAuthError(), DiscordError("Discord API unavailable", code="DISCORD_UNAVAILABLE")],
    )
    async def test_discord_failure(self, mock_discord, error):
        mock_discord.get_user_id.side_effect = error
        assert await get_optional_discord_id("Bearer abc", mock_discord) is None
