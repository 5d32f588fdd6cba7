"""
데이터베이스 연결 관리

- 엔진/세션 팩토리는 settings.DATABASE_URL 기준으로 모듈 로드 시 한 번 생성
- 요청 단위 세션은 get_db 의존성으로 주입
"""

import asyncio
import logging
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

from ..config import settings

logger = logging.getLogger(__name__)

# DB 재연결 대기 (초)
INIT_RETRY_BASE_DELAY = 2
INIT_RETRY_MAX_DELAY = 30

engine = create_async_engine(
    settings.DATABASE_URL,
    echo=settings.DEBUG,
    pool_pre_ping=True,
    pool_recycle=1800,
)

AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)

Base = declarative_base()


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    요청 단위 DB 세션

    핸들러가 정상 종료하면 commit, 예외가 나면 rollback 후 다시 던진다.
    서비스 함수가 직접 commit한 뒤라면 추가 commit은 no-op.
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def _create_tables():
    # 모델을 메타데이터에 등록
    from . import models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def init_db(max_retries: int = settings.DB_INIT_MAX_RETRIES):
    """
    테이블 생성 (DB_CREATE_TABLES=true 일 때 기동 시 호출)

    컨테이너 기동 순서상 DB가 늦게 뜰 수 있으므로 지수 백오프로 재시도한다.
    운영 스키마는 alembic으로 관리한다.
    """
    delay = INIT_RETRY_BASE_DELAY
    for attempt in range(1, max_retries + 1):
        try:
            await _create_tables()
        except Exception as e:
            if attempt == max_retries:
                logger.error(f"DB 초기화 실패 ({attempt}회 시도): {type(e).__name__}: {e}")
                raise
            logger.warning(f"DB 연결 실패 ({attempt}/{max_retries}), {delay}초 후 재시도: {type(e).__name__}")
            await asyncio.sleep(delay)
            delay = min(delay * 2, INIT_RETRY_MAX_DELAY)
        else:
            logger.info("DB 테이블 준비 완료")
            return


async def dispose_db():
    """커넥션 풀 정리 (앱 종료 시)"""
    await engine.dispose()
