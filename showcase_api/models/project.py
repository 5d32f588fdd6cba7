"""
프로젝트 API 스키마

JSON 필드는 camelCase(alias), 파이썬 속성은 snake_case.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, ValidationInfo, field_validator

from .base import is_valid_image_url, is_valid_url


class ProjectFieldsBase(BaseModel):
    """생성/수정 요청이 공유하는 선택 필드와 형식 검증"""
    download_link: Optional[str] = Field(default=None, alias="downloadLink", max_length=500)
    github_link: Optional[str] = Field(default=None, alias="githubLink", max_length=500)
    external_link: Optional[str] = Field(default=None, alias="externalLink", max_length=500)
    hero_image: Optional[str] = Field(default=None, alias="heroImage", max_length=500)
    app_icon: Optional[str] = Field(default=None, alias="appIcon", max_length=500)
    awaiting_launch_approval: Optional[bool] = Field(default=None, alias="awaitingLaunchApproval")
    needs_manual_review: Optional[bool] = Field(default=None, alias="needsManualReview")
    looking_for_roles: Optional[List[str]] = Field(default=None, alias="lookingForRoles")

    @field_validator("download_link", "github_link", "external_link")
    @classmethod
    def validate_link(cls, v: Optional[str], info: ValidationInfo) -> Optional[str]:
        if v and not is_valid_url(v):
            raise ValueError(f"Invalid {cls.model_fields[info.field_name].alias}")
        return v

    @field_validator("hero_image", "app_icon")
    @classmethod
    def validate_image(cls, v: Optional[str], info: ValidationInfo) -> Optional[str]:
        if v and not is_valid_image_url(v):
            raise ValueError(f"Invalid {cls.model_fields[info.field_name].alias}")
        return v

    class Config:
        populate_by_name = True


class CreateProjectRequest(ProjectFieldsBase):
    """프로젝트 등록 요청 (등록자는 항상 소유자)"""
    app_name: str = Field(..., alias="appName", min_length=1, max_length=255)
    description: str = Field(..., min_length=1)
    role: str = Field(..., min_length=1, max_length=100)
    category: str = Field(..., min_length=1, max_length=100)
    hero_image: str = Field(..., alias="heroImage", min_length=1, max_length=500)
    is_private: bool = Field(..., alias="isPrivate")
    launch_year: Optional[int] = Field(default=None, alias="launchYear")

    @field_validator("launch_year")
    @classmethod
    def reject_launch_year(cls, v: Optional[int]) -> Optional[int]:
        # 런치 상태는 모더레이터만 지정 가능
        if v:
            raise ValueError("launchYear cannot be set when registering")
        return None


class UpdateProjectRequest(ProjectFieldsBase):
    """프로젝트 수정 요청 (지정한 필드만 반영)"""
    app_name: Optional[str] = Field(default=None, alias="appName", min_length=1, max_length=255)
    description: Optional[str] = Field(default=None, min_length=1)
    category: Optional[str] = Field(default=None, min_length=1, max_length=100)
    is_private: Optional[bool] = Field(default=None, alias="isPrivate")
    launch_year: Optional[int] = Field(default=None, alias="launchYear")


class DeleteProjectRequest(BaseModel):
    """프로젝트 삭제 요청"""
    app_name: str = Field(..., alias="appName", min_length=1)

    class Config:
        populate_by_name = True


class ProjectCollaboratorResponse(BaseModel):
    """프로젝트 협업자"""
    name: str
    discord_id: str = Field(..., alias="discordId")
    email: Optional[str] = None
    is_owner: bool = Field(..., alias="isOwner")
    role: Optional[str] = None

    class Config:
        populate_by_name = True


class ProjectResponse(BaseModel):
    """프로젝트 응답"""
    id: int
    app_name: str = Field(..., alias="appName")
    description: str
    is_private: bool = Field(..., alias="isPrivate")
    download_link: Optional[str] = Field(default=None, alias="downloadLink")
    github_link: Optional[str] = Field(default=None, alias="githubLink")
    external_link: Optional[str] = Field(default=None, alias="externalLink")
    collaborators: List[ProjectCollaboratorResponse] = Field(default_factory=list)
    launch_year: Optional[int] = Field(default=None, alias="launchYear")
    category: Optional[str] = None
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")
    updated_at: Optional[datetime] = Field(default=None, alias="updatedAt")
    awaiting_launch_approval: bool = Field(default=False, alias="awaitingLaunchApproval")
    needs_manual_review: bool = Field(default=False, alias="needsManualReview")
    hero_image: Optional[str] = Field(default=None, alias="heroImage")
    app_icon: Optional[str] = Field(default=None, alias="appIcon")
    looking_for_roles: List[str] = Field(default_factory=list, alias="lookingForRoles")

    class Config:
        populate_by_name = True
