from datetime import datetime, timezone
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import NullPool

from foodblog.core.config import settings

# Integer 기본키 컬럼이 표현할 수 있는 최대 ID
MAX_ID = 2**31 - 1


def build_engine(url: str) -> AsyncEngine:
    """
    DB URL 스킴에 맞는 비동기 엔진을 생성
    - MySQL(asyncmy): utf8mb4 설정과 커넥션 재활용 옵션 적용
    - SQLite(aiosqlite): 개발/테스트용, 이벤트 루프마다 새 커넥션을 쓰도록 NullPool 사용
    """
    if url.startswith("sqlite"):
        return create_async_engine(url, echo=False, poolclass=NullPool)

    return create_async_engine(
        url,
        echo=False,
        connect_args={
            "charset": "utf8mb4",
            "init_command": "SET NAMES utf8mb4 COLLATE utf8mb4_unicode_ci",
        },
        pool_recycle=1800,
        pool_pre_ping=True,
    )


# 비동기 엔진 및 세션 팩토리 생성
async_engine = build_engine(settings.SQLALCHEMY_DATABASE_URI)
async_session_factory = async_sessionmaker(
    bind=async_engine,
    class_=AsyncSession,
    expire_on_commit=False,
)

# ORM 베이스
Base = declarative_base()
# 모델의 `id: int = Column(...)` 형태 타입 힌트 허용
Base.__allow_unmapped__ = True


def import_models() -> None:
    """
    모델 모듈을 import 하여 Base.metadata에 테이블을 등록
    """
    from foodblog.models import (  # noqa: F401
        user, blog, comment, like, notification, token
    )


async def init_db() -> None:
    """
    애플리케이션 시작 시 호출하여 메타데이터 기반 테이블을 생성
    """
    import_models()

    async with async_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI 종속성: 요청마다 새로운 DB 세션을 생성 후 반환
    """
    async with async_session_factory() as session:
        yield session


def utcnow() -> datetime:
    """
    모델 타임스탬프 기본값 (UTC)
    """
    return datetime.now(timezone.utc)
