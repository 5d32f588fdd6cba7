"""
User 라우터
- GET /user?discordId=
- POST /user
- PUT /user
"""

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..db.connection import get_db
from ..models import CreateUserRequest, ErrorResponse, UpdateUserRequest, UserResponse
from ..services import user_service
from ..services.auth import get_current_discord_id
from ..services.user_service import UserServiceError

router = APIRouter(prefix="/user", tags=["user"])

ERROR_STATUS = {
    "USER_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "USER_EXISTS": status.HTTP_409_CONFLICT,
}


def _http_error(e: UserServiceError) -> HTTPException:
    return HTTPException(
        status_code=ERROR_STATUS.get(e.code, status.HTTP_500_INTERNAL_SERVER_ERROR),
        detail={"error": e.message, "code": e.code},
    )


@router.get(
    "",
    response_model=UserResponse,
    responses={404: {"model": ErrorResponse}},
    summary="사용자 공개 정보 조회",
)
async def get_user(
    discord_id: str = Query(..., alias="discordId", min_length=1),
    db: AsyncSession = Depends(get_db),
):
    user = await user_service.get_user_by_discord_id(db, discord_id)
    if not user:
        raise HTTPException(status_code=404, detail={"error": "User not found", "code": "USER_NOT_FOUND"})
    return user_service.user_to_response(user)


@router.post(
    "",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    responses={401: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
    summary="사용자 등록",
)
async def create_user(
    request: CreateUserRequest,
    discord_id: str = Depends(get_current_discord_id),
    db: AsyncSession = Depends(get_db),
):
    try:
        user = await user_service.create_user(db, request, discord_id)
    except UserServiceError as e:
        raise _http_error(e)
    return user_service.user_to_response(user)


@router.put(
    "",
    response_model=UserResponse,
    responses={401: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
    summary="사용자 정보 수정",
)
async def update_user(
    request: UpdateUserRequest,
    discord_id: str = Depends(get_current_discord_id),
    db: AsyncSession = Depends(get_db),
):
    try:
        user = await user_service.update_user(db, request, discord_id)
    except UserServiceError as e:
        raise _http_error(e)
    return user_service.user_to_response(user)
