"""
사용자 API 스키마
"""

from typing import Optional

from pydantic import BaseModel, Field, field_validator

from .base import EMAIL_PATTERN


class UserFieldsBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    email: Optional[str] = Field(default=None, max_length=255)

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        if not EMAIL_PATTERN.match(v):
            raise ValueError("Invalid email")
        return v.lower()

    class Config:
        populate_by_name = True


class CreateUserRequest(UserFieldsBase):
    """사용자 등록 요청 (Discord ID는 토큰에서 결정)"""


class UpdateUserRequest(UserFieldsBase):
    """사용자 정보 수정 요청"""


class UserResponse(BaseModel):
    """공개 사용자 정보"""
    name: str
    discord_id: str = Field(..., alias="discordId")
    email: Optional[str] = None

    class Config:
        populate_by_name = True
