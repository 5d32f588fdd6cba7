"""Initial schema

Revision ID: 0001
Revises:
Create Date: 2026-10-19

테이블:
- users: Discord 사용자
- launches: 런치 연도
- roles: 협업자 역할
- projects: 프로젝트
- user_projects: 사용자-프로젝트 협업 관계
"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '0001'
down_revision = None
branch_labels = None
depends_on = None

DEFAULT_ROLES = ["Developer", "Beta Tester", "Translator", "Other"]


def upgrade() -> None:
    # ============================================================
    # 1. users 테이블
    # ============================================================
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('discord_id', sa.String(50), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('email', sa.String(255)),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()')),
        sa.Column('updated_at', sa.DateTime(timezone=True)),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_users_discord_id', 'users', ['discord_id'], unique=True)

    # ============================================================
    # 2. launches / roles 테이블
    # ============================================================
    op.create_table(
        'launches',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('year', sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_launches_year', 'launches', ['year'], unique=True)

    roles = op.create_table(
        'roles',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(100), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('name'),
    )
    op.bulk_insert(roles, [{"name": name} for name in DEFAULT_ROLES])

    # ============================================================
    # 3. projects 테이블
    # ============================================================
    op.create_table(
        'projects',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('app_name', sa.String(255), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('is_private', sa.Boolean(), nullable=False),
        sa.Column('download_link', sa.String(500)),
        sa.Column('github_link', sa.String(500)),
        sa.Column('external_link', sa.String(500)),
        sa.Column('hero_image', sa.String(500)),
        sa.Column('app_icon', sa.String(500)),
        sa.Column('category', sa.String(100)),
        sa.Column('looking_for_roles', sa.JSON()),
        sa.Column('awaiting_launch_approval', sa.Boolean(), nullable=False),
        sa.Column('needs_manual_review', sa.Boolean(), nullable=False),
        sa.Column('launch_id', sa.Integer(), sa.ForeignKey('launches.id')),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()')),
        sa.Column('updated_at', sa.DateTime(timezone=True)),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_projects_app_name', 'projects', ['app_name'], unique=True)
    op.create_index('ix_projects_launch_id', 'projects', ['launch_id'])

    # ============================================================
    # 4. user_projects 테이블
    # ============================================================
    op.create_table(
        'user_projects',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('project_id', sa.Integer(), sa.ForeignKey('projects.id', ondelete='CASCADE'), nullable=False),
        sa.Column('role_id', sa.Integer(), sa.ForeignKey('roles.id')),
        sa.Column('is_owner', sa.Boolean(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id', 'project_id', name='uq_user_project'),
    )
    op.create_index('ix_user_projects_user_id', 'user_projects', ['user_id'])
    op.create_index('ix_user_projects_project_id', 'user_projects', ['project_id'])
    op.create_index('idx_user_project_owner', 'user_projects', ['project_id', 'is_owner'])


def downgrade() -> None:
    op.drop_table('user_projects')
    op.drop_table('projects')
    op.drop_table('roles')
    op.drop_table('launches')
    op.drop_table('users')
