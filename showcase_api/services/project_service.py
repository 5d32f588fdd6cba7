"""
프로젝트 서비스
프로젝트 등록/조회/수정/삭제 비즈니스 로직

권한 규칙:
- 수정/삭제: 프로젝트 소유자 또는 길드 모더레이터
- 런치 상태(launchYear, awaitingLaunchApproval, needsManualReview) 변경: 모더레이터만
"""

import logging
from collections import defaultdict
from typing import Dict, Iterable, List, Optional

from sqlalchemy import delete, func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ..config import settings
from ..db.models import LaunchModel, ProjectModel, RoleModel, UserModel, UserProjectModel
from ..models import (
    CreateProjectRequest,
    ProjectCollaboratorResponse,
    ProjectResponse,
    UpdateProjectRequest,
)
from .discord_service import DiscordClient
from .lookup_service import get_launch_id_from_year, get_role_by_name
from .name_matcher import suggest_similar_name
from .user_service import get_user_by_discord_id

logger = logging.getLogger(__name__)

# 모더레이터만 변경 가능한 필드
MODERATOR_ONLY_FIELDS = {"launch_year", "awaiting_launch_approval", "needs_manual_review"}

# null로 지울 수 없는 필드
NON_NULLABLE_FIELDS = {"app_name", "description", "is_private", "awaiting_launch_approval", "needs_manual_review"}


class ProjectServiceError(Exception):
    """프로젝트 서비스 에러"""
    def __init__(self, message: str, code: str = "PROJECT_ERROR"):
        self.message = message
        self.code = code
        super().__init__(self.message)


# ============================================================
# 변환
# ============================================================

def project_to_response(
    project: ProjectModel,
    collaborators: List[ProjectCollaboratorResponse],
    launch_year: Optional[int] = None,
) -> ProjectResponse:
    """DB 모델 → API 응답 모델"""
    return ProjectResponse(
        id=project.id,
        appName=project.app_name,
        description=project.description,
        isPrivate=bool(project.is_private),
        downloadLink=project.download_link,
        githubLink=project.github_link,
        externalLink=project.external_link,
        collaborators=collaborators,
        launchYear=launch_year,
        category=project.category,
        createdAt=project.created_at,
        updatedAt=project.updated_at,
        awaitingLaunchApproval=bool(project.awaiting_launch_approval),
        needsManualReview=bool(project.needs_manual_review),
        heroImage=project.hero_image,
        appIcon=project.app_icon,
        lookingForRoles=project.looking_for_roles or [],
    )


def can_view_project(project: ProjectResponse, viewer_discord_id: Optional[str]) -> bool:
    """비공개 프로젝트는 협업자에게만 보인다"""
    if not project.is_private:
        return True
    if viewer_discord_id is None:
        return False
    return any(c.discord_id == viewer_discord_id for c in project.collaborators)


def is_project_owner(collaborators: Iterable[ProjectCollaboratorResponse], discord_id: str) -> bool:
    return any(c.is_owner and c.discord_id == discord_id for c in collaborators)


# ============================================================
# 조회
# ============================================================

async def load_collaborators(
    db: AsyncSession,
    project_ids: List[int],
) -> Dict[int, List[ProjectCollaboratorResponse]]:
    """프로젝트별 협업자 목록"""
    result: Dict[int, List[ProjectCollaboratorResponse]] = defaultdict(list)
    if not project_ids:
        return result

    res = await db.execute(
        select(UserProjectModel.project_id, UserProjectModel.is_owner, UserModel, RoleModel.name)
        .join(UserModel, UserModel.id == UserProjectModel.user_id)
        .outerjoin(RoleModel, RoleModel.id == UserProjectModel.role_id)
        .where(UserProjectModel.project_id.in_(project_ids))
        .order_by(UserProjectModel.id)
    )
    for project_id, is_owner, user, role_name in res.all():
        result[project_id].append(
            ProjectCollaboratorResponse(
                name=user.name,
                discordId=user.discord_id,
                email=user.email,
                isOwner=bool(is_owner),
                role=role_name,
            )
        )
    return result


async def _to_responses(db: AsyncSession, rows) -> List[ProjectResponse]:
    """(ProjectModel, launch_year) 행 목록 → 응답 목록"""
    rows = list(rows)
    collaborators = await load_collaborators(db, [p.id for p, _ in rows])
    return [project_to_response(p, collaborators.get(p.id, []), year) for p, year in rows]


def _project_with_year_query():
    return (
        select(ProjectModel, LaunchModel.year)
        .outerjoin(LaunchModel, LaunchModel.id == ProjectModel.launch_id)
    )


async def list_projects(
    db: AsyncSession,
    launch_year: Optional[int] = None,
    discord_id: Optional[str] = None,
    viewer_discord_id: Optional[str] = None,
) -> List[ProjectResponse]:
    """
    프로젝트 목록

    Args:
        launch_year: 해당 런치 연도의 프로젝트만
        discord_id: 해당 사용자가 참여한 프로젝트만
        viewer_discord_id: 요청자 (비공개 프로젝트 노출 판단)
    """
    q = _project_with_year_query()
    if launch_year is not None:
        q = q.where(LaunchModel.year == launch_year)
    if discord_id is not None:
        member_of = (
            select(UserProjectModel.project_id)
            .join(UserModel, UserModel.id == UserProjectModel.user_id)
            .where(UserModel.discord_id == discord_id)
        )
        q = q.where(ProjectModel.id.in_(member_of))

    res = await db.execute(q.order_by(ProjectModel.id))
    projects = await _to_responses(db, res.all())
    return [p for p in projects if can_view_project(p, viewer_discord_id)]


async def get_project_by_id(
    db: AsyncSession,
    project_id: int,
    viewer_discord_id: Optional[str],
) -> Optional[ProjectResponse]:
    """ID로 프로젝트 조회 (없거나 볼 수 없으면 None)"""
    res = await db.execute(_project_with_year_query().where(ProjectModel.id == project_id))
    row = res.first()
    if row is None:
        return None

    project = (await _to_responses(db, [row]))[0]
    if not can_view_project(project, viewer_discord_id):
        return None
    return project


async def find_projects_by_name(db: AsyncSession, app_name: str) -> List[ProjectModel]:
    res = await db.execute(select(ProjectModel).where(ProjectModel.app_name == app_name).order_by(ProjectModel.id))
    return list(res.scalars().all())


async def get_visible_app_names(db: AsyncSession, discord_id: str) -> List[str]:
    """이름 제안 후보: 공개 프로젝트 + 요청자가 참여한 비공개 프로젝트"""
    member_of = (
        select(UserProjectModel.project_id)
        .join(UserModel, UserModel.id == UserProjectModel.user_id)
        .where(UserModel.discord_id == discord_id)
    )
    res = await db.execute(
        select(ProjectModel.app_name)
        .where(or_(ProjectModel.is_private.is_(False), ProjectModel.id.in_(member_of)))
        .order_by(ProjectModel.id)
    )
    return list(res.scalars().all())


def _name_taken() -> ProjectServiceError:
    return ProjectServiceError("A project with that name already exists", code="PROJECT_EXISTS")


def not_found_message(app_name: str, similar_name: Optional[str]) -> str:
    message = f'Project with name "{app_name}" could not be found.'
    if similar_name is not None:
        message += f" Did you mean {similar_name}?"
    return message


async def get_single_project_by_name(db: AsyncSession, app_name: str, discord_id: str) -> ProjectModel:
    """
    이름으로 프로젝트 하나 조회

    Raises:
        ProjectServiceError(PROJECT_NOT_FOUND): 없음 (유사 이름 제안 포함)
        ProjectServiceError(PROJECT_DUPLICATED): 같은 이름이 둘 이상
    """
    projects = await find_projects_by_name(db, app_name)

    if not projects:
        similar = suggest_similar_name(await get_visible_app_names(db, discord_id), app_name)
        raise ProjectServiceError(not_found_message(app_name, similar), code="PROJECT_NOT_FOUND")

    if len(projects) > 1:
        logger.error(f"Duplicate projects for app_name={app_name!r}: ids={[p.id for p in projects]}")
        raise ProjectServiceError(
            "More than one project with that name found. Contact a system administrator to fix the data duplication",
            code="PROJECT_DUPLICATED",
        )

    return projects[0]


async def count_user_projects(db: AsyncSession, user_id: int) -> int:
    res = await db.execute(
        select(func.count()).select_from(UserProjectModel).where(UserProjectModel.user_id == user_id)
    )
    return res.scalar_one()


async def _reload(db: AsyncSession, project: ProjectModel) -> ProjectResponse:
    # server_default/onupdate 컬럼 갱신
    await db.refresh(project)
    res = await db.execute(_project_with_year_query().where(ProjectModel.id == project.id))
    return (await _to_responses(db, [res.one()]))[0]


# ============================================================
# 변경
# ============================================================

async def create_project(db: AsyncSession, request: CreateProjectRequest, discord_id: str) -> ProjectResponse:
    """
    프로젝트 등록 (요청자가 소유자)

    Raises:
        ProjectServiceError: PROJECT_EXISTS, USER_NOT_FOUND, INVALID_ROLE, PROJECT_LIMIT_REACHED
    """
    if await find_projects_by_name(db, request.app_name):
        raise _name_taken()

    user = await get_user_by_discord_id(db, discord_id)
    if not user:
        raise ProjectServiceError("User not found", code="USER_NOT_FOUND")

    role = await get_role_by_name(db, request.role)
    if not role:
        raise ProjectServiceError("Invalid role", code="INVALID_ROLE")

    limit = settings.MAX_PROJECTS_PER_USER
    if await count_user_projects(db, user.id) >= limit:
        raise ProjectServiceError(
            f"User has reached or exceeded {limit} project limit",
            code="PROJECT_LIMIT_REACHED",
        )

    project = ProjectModel(
        app_name=request.app_name,
        description=request.description,
        is_private=request.is_private,
        category=request.category,
        download_link=request.download_link,
        github_link=request.github_link,
        external_link=request.external_link,
        hero_image=request.hero_image,
        app_icon=request.app_icon,
        looking_for_roles=request.looking_for_roles or [],
        awaiting_launch_approval=bool(request.awaiting_launch_approval),
        # 검토 여부 미지정 시 기본값은 true
        needs_manual_review=True if request.needs_manual_review is None else request.needs_manual_review,
        launch_id=None,
    )
    db.add(project)
    try:
        await db.flush()
    except IntegrityError:
        # 동시 등록: 앞선 조회 이후 같은 이름이 먼저 저장됨
        await db.rollback()
        raise _name_taken()

    db.add(UserProjectModel(user_id=user.id, project_id=project.id, role_id=role.id, is_owner=True))
    await db.commit()

    logger.info(f"Project created: id={project.id}, owner={discord_id}")
    return await _reload(db, project)


async def _require_owner_or_moderator(
    db: AsyncSession,
    discord: DiscordClient,
    project: ProjectModel,
    discord_id: str,
    moderator_required: bool = False,
):
    collaborators = (await load_collaborators(db, [project.id])).get(project.id, [])
    is_owner = is_project_owner(collaborators, discord_id)

    if is_owner and not moderator_required:
        return

    if not await discord.is_moderator(discord_id):
        logger.warning(f"Project {project.id} modification denied for {discord_id}")
        if is_owner:
            raise ProjectServiceError("Only moderators can change launch status", code="FORBIDDEN")
        raise ProjectServiceError("Unauthorized user", code="FORBIDDEN")


async def update_project(
    db: AsyncSession,
    discord: DiscordClient,
    app_name: str,
    request: UpdateProjectRequest,
    discord_id: str,
) -> ProjectResponse:
    """
    프로젝트 수정 (요청에 포함된 필드만 반영)

    Raises:
        ProjectServiceError: PROJECT_NOT_FOUND, PROJECT_DUPLICATED, FORBIDDEN,
            PROJECT_EXISTS, INVALID_LAUNCH_YEAR
    """
    project = await get_single_project_by_name(db, app_name, discord_id)

    changes = request.model_dump(exclude_unset=True)
    changes = {k: v for k, v in changes.items() if not (v is None and k in NON_NULLABLE_FIELDS)}

    await _require_owner_or_moderator(
        db, discord, project, discord_id,
        moderator_required=bool(MODERATOR_ONLY_FIELDS & changes.keys()),
    )

    new_name = changes.get("app_name")
    if new_name is not None and new_name != project.app_name and await find_projects_by_name(db, new_name):
        raise _name_taken()

    if "launch_year" in changes:
        year = changes.pop("launch_year")
        launch_id = None
        if year:
            launch_id = await get_launch_id_from_year(db, year)
            if launch_id is None:
                raise ProjectServiceError(f"Launch year {year} does not exist", code="INVALID_LAUNCH_YEAR")
        project.launch_id = launch_id

    for field_name, value in changes.items():
        setattr(project, field_name, value)

    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise _name_taken()

    logger.info(f"Project updated: id={project.id}, by={discord_id}, fields={sorted(changes)}")
    return await _reload(db, project)


async def delete_project(db: AsyncSession, discord: DiscordClient, app_name: str, discord_id: str) -> None:
    """
    프로젝트 삭제

    Raises:
        ProjectServiceError: PROJECT_NOT_FOUND, PROJECT_DUPLICATED, FORBIDDEN
    """
    project = await get_single_project_by_name(db, app_name, discord_id)
    await _require_owner_or_moderator(db, discord, project, discord_id)

    project_id = project.id
    await db.execute(delete(UserProjectModel).where(UserProjectModel.project_id == project_id))
    await db.execute(delete(ProjectModel).where(ProjectModel.id == project_id))
    await db.commit()

    logger.info(f"Project deleted: id={project_id}, by={discord_id}")
