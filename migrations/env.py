"""
Alembic 마이그레이션 환경

DB URL은 앱과 같은 settings.DATABASE_URL을 쓴다.
앱은 asyncpg 드라이버를 쓰지만 alembic은 동기 드라이버(psycopg2)로 접속한다.

사용법:
    alembic upgrade head
    alembic revision --autogenerate -m "설명"
"""

from logging.config import fileConfig

from alembic import context
from sqlalchemy import engine_from_config, pool

from showcase_api.config import settings
from showcase_api.db import Base  # 모델 등록 포함

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def sync_database_url(url: str) -> str:
    """postgresql+asyncpg:// → postgresql://"""
    return url.replace("+asyncpg", "", 1)


config.set_main_option("sqlalchemy.url", sync_database_url(settings.DATABASE_URL))


def run_migrations_offline() -> None:
    """DB 접속 없이 SQL 스크립트만 출력"""
    context.configure(
        url=config.get_main_option("sqlalchemy.url"),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    engine = engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )
    with engine.connect() as connection:
        context.configure(connection=connection, target_metadata=target_metadata, compare_type=True)
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
