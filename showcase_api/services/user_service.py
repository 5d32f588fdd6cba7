"""
사용자 서비스
"""

import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..db.models import UserModel
from ..models import CreateUserRequest, UpdateUserRequest, UserResponse

logger = logging.getLogger(__name__)


class UserServiceError(Exception):
    """사용자 서비스 에러"""
    def __init__(self, message: str, code: str = "USER_ERROR"):
        self.message = message
        self.code = code
        super().__init__(self.message)


def user_to_response(user: UserModel) -> UserResponse:
    return UserResponse(name=user.name, discordId=user.discord_id, email=user.email)


async def get_user_by_discord_id(db: AsyncSession, discord_id: str) -> Optional[UserModel]:
    res = await db.execute(select(UserModel).where(UserModel.discord_id == discord_id))
    return res.scalar_one_or_none()


async def create_user(db: AsyncSession, request: CreateUserRequest, discord_id: str) -> UserModel:
    if await get_user_by_discord_id(db, discord_id):
        raise UserServiceError("User already exists", code="USER_EXISTS")

    user = UserModel(discord_id=discord_id, name=request.name, email=request.email)
    db.add(user)
    await db.commit()
    await db.refresh(user)

    logger.info(f"User registered: discord_id={discord_id}")
    return user


async def update_user(db: AsyncSession, request: UpdateUserRequest, discord_id: str) -> UserModel:
    user = await get_user_by_discord_id(db, discord_id)
    if not user:
        raise UserServiceError("User not found", code="USER_NOT_FOUND")

    user.name = request.name
    if "email" in request.model_fields_set:
        user.email = request.email
    await db.commit()
    await db.refresh(user)
    return user
