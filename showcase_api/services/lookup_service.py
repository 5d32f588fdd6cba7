"""
런치 연도 / 협업자 역할 조회
"""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..db.models import LaunchModel, RoleModel


async def get_launch_id_from_year(db: AsyncSession, year: int) -> Optional[int]:
    res = await db.execute(select(LaunchModel.id).where(LaunchModel.year == year))
    return res.scalar_one_or_none()


async def get_role_by_name(db: AsyncSession, name: str) -> Optional[RoleModel]:
    res = await db.execute(select(RoleModel).where(RoleModel.name == name))
    return res.scalar_one_or_none()
