"""
데이터베이스 모델 정의
사용자 / 프로젝트 / 런치 / 역할 스키마
"""

from sqlalchemy import (
    Column,
    String,
    Integer,
    Boolean,
    DateTime,
    ForeignKey,
    Index,
    Text,
    JSON,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from .connection import Base


class UserModel(Base):
    """사용자 테이블 (Discord 계정 기준)"""
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    discord_id = Column(String(50), unique=True, nullable=False, index=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255))  # 사용자가 공개한 연락처 이메일
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    # 관계
    user_projects = relationship("UserProjectModel", back_populates="user", cascade="all, delete-orphan", passive_deletes=True)


class LaunchModel(Base):
    """런치 연도 테이블"""
    __tablename__ = "launches"

    id = Column(Integer, primary_key=True, autoincrement=True)
    year = Column(Integer, unique=True, nullable=False, index=True)

    projects = relationship("ProjectModel", back_populates="launch")


class RoleModel(Base):
    """협업자 역할 테이블 (Developer, Beta Tester 등)"""
    __tablename__ = "roles"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), unique=True, nullable=False)


class ProjectModel(Base):
    """프로젝트 테이블"""
    __tablename__ = "projects"

    id = Column(Integer, primary_key=True, autoincrement=True)
    app_name = Column(String(255), nullable=False, unique=True, index=True)
    description = Column(Text, nullable=False)
    is_private = Column(Boolean, nullable=False, default=False)

    download_link = Column(String(500))
    github_link = Column(String(500))
    external_link = Column(String(500))
    hero_image = Column(String(500))
    app_icon = Column(String(500))

    category = Column(String(100))
    looking_for_roles = Column(JSON)  # 모집 중인 역할 이름 목록

    awaiting_launch_approval = Column(Boolean, nullable=False, default=False)
    needs_manual_review = Column(Boolean, nullable=False, default=True)

    launch_id = Column(Integer, ForeignKey("launches.id"), nullable=True, index=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    # 관계
    launch = relationship("LaunchModel", back_populates="projects")
    user_projects = relationship("UserProjectModel", back_populates="project", cascade="all, delete-orphan", passive_deletes=True)


class UserProjectModel(Base):
    """사용자-프로젝트 협업 관계"""
    __tablename__ = "user_projects"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    project_id = Column(Integer, ForeignKey("projects.id", ondelete="CASCADE"), nullable=False, index=True)
    role_id = Column(Integer, ForeignKey("roles.id"), nullable=True)
    is_owner = Column(Boolean, nullable=False, default=False)

    # 관계
    user = relationship("UserModel", back_populates="user_projects")
    project = relationship("ProjectModel", back_populates="user_projects")
    role = relationship("RoleModel")

    __table_args__ = (
        UniqueConstraint("user_id", "project_id", name="uq_user_project"),
        Index("idx_user_project_owner", "project_id", "is_owner"),
    )
