"""
Projects 라우터
- GET /projects
- GET /projects/id/{project_id}
- POST /projects
- PUT /projects?appName=
- DELETE /projects
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..db.connection import get_db
from ..middleware.metrics import record_project_mutation
from ..models import (
    CreateProjectRequest,
    DeleteProjectRequest,
    ErrorResponse,
    ProjectResponse,
    UpdateProjectRequest,
)
from ..services import project_service
from ..services.auth import get_current_discord_id, get_optional_discord_id
from ..services.discord_service import DiscordClient, DiscordError, get_discord_client
from ..services.project_service import ProjectServiceError

router = APIRouter(prefix="/projects", tags=["projects"])
logger = logging.getLogger(__name__)

ERROR_STATUS = {
    "PROJECT_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "USER_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "PROJECT_EXISTS": status.HTTP_409_CONFLICT,
    "INVALID_ROLE": status.HTTP_422_UNPROCESSABLE_ENTITY,
    "INVALID_LAUNCH_YEAR": status.HTTP_422_UNPROCESSABLE_ENTITY,
    "PROJECT_LIMIT_REACHED": status.HTTP_403_FORBIDDEN,
    "FORBIDDEN": status.HTTP_403_FORBIDDEN,
    "PROJECT_DUPLICATED": status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def _http_error(e: Exception) -> HTTPException:
    if isinstance(e, DiscordError):
        return HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail={"error": e.message, "code": e.code},
        )
    return HTTPException(
        status_code=ERROR_STATUS.get(e.code, status.HTTP_500_INTERNAL_SERVER_ERROR),
        detail={"error": e.message, "code": e.code},
    )


@router.get(
    "",
    response_model=List[ProjectResponse],
    summary="프로젝트 목록 조회",
)
async def list_projects(
    launch_year: Optional[int] = Query(default=None, alias="launchYear"),
    discord_id: Optional[str] = Query(default=None, alias="discordId"),
    viewer_discord_id: Optional[str] = Depends(get_optional_discord_id),
    db: AsyncSession = Depends(get_db),
):
    return await project_service.list_projects(
        db,
        launch_year=launch_year,
        discord_id=discord_id,
        viewer_discord_id=viewer_discord_id,
    )


@router.get(
    "/id/{project_id}",
    response_model=Optional[ProjectResponse],
    responses={401: {"model": ErrorResponse}, 422: {"model": ErrorResponse}},
    summary="프로젝트 조회 (없거나 비공개면 null)",
)
async def get_project(
    project_id: int,
    discord_id: str = Depends(get_current_discord_id),
    db: AsyncSession = Depends(get_db),
):
    return await project_service.get_project_by_id(db, project_id, viewer_discord_id=discord_id)


@router.post(
    "",
    response_model=ProjectResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        401: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
        422: {"model": ErrorResponse},
    },
    summary="프로젝트 등록",
)
async def create_project(
    request: CreateProjectRequest,
    discord_id: str = Depends(get_current_discord_id),
    db: AsyncSession = Depends(get_db),
):
    try:
        project = await project_service.create_project(db, request, discord_id)
    except ProjectServiceError as e:
        record_project_mutation("create", success=False)
        raise _http_error(e)

    record_project_mutation("create", success=True)
    return project


@router.put(
    "",
    response_model=ProjectResponse,
    responses={
        401: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
    },
    summary="프로젝트 수정",
)
async def update_project(
    request: UpdateProjectRequest,
    app_name: str = Query(..., alias="appName", min_length=1),
    discord_id: str = Depends(get_current_discord_id),
    discord: DiscordClient = Depends(get_discord_client),
    db: AsyncSession = Depends(get_db),
):
    try:
        project = await project_service.update_project(db, discord, app_name, request, discord_id)
    except (ProjectServiceError, DiscordError) as e:
        record_project_mutation("update", success=False)
        raise _http_error(e)

    record_project_mutation("update", success=True)
    return project


@router.delete(
    "",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={
        401: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
    summary="프로젝트 삭제",
)
async def delete_project(
    request: DeleteProjectRequest,
    discord_id: str = Depends(get_current_discord_id),
    discord: DiscordClient = Depends(get_discord_client),
    db: AsyncSession = Depends(get_db),
):
    try:
        await project_service.delete_project(db, discord, request.app_name, discord_id)
    except (ProjectServiceError, DiscordError) as e:
        record_project_mutation("delete", success=False)
        raise _http_error(e)

    record_project_mutation("delete", success=True)
    return None
