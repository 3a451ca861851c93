"""데이터베이스 엔진 및 세션 설정 모듈.

Async engine, session factory, and ORM base for the attendance engine.
PostgreSQL (asyncpg) in production; SQLite URLs get no pool sizing since
aiosqlite does not use a queue pool.
"""

from collections.abc import AsyncGenerator
from typing import Any

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from attendance_hub.config import settings


def _engine_options(url: str) -> dict[str, Any]:
    if url.startswith("sqlite"):
        return {}
    # pool_pre_ping: 풀에서 꺼낸 연결을 사용 전 검증 (Validate pooled connections)
    return {"pool_pre_ping": True, "pool_size": 5, "max_overflow": 10}


engine: AsyncEngine = create_async_engine(
    settings.DATABASE_URL,
    echo=settings.DEBUG,
    **_engine_options(settings.DATABASE_URL),
)

# expire_on_commit=False — 휴가 승인은 요청 중간에 커밋하므로 객체 속성을 계속 사용
# (Leave approval commits mid-request and keeps using loaded attributes)
async_session: async_sessionmaker[AsyncSession] = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


class Base(DeclarativeBase):
    """ORM 모델 선언적 베이스 (Declarative base for all models)."""


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """요청 단위 DB 세션 의존성.

    Request-scoped session. Routers commit; anything left uncommitted when
    the request ends is rolled back on close.

    Yields:
        AsyncSession: 비동기 세션 (Async session)
    """
    async with async_session() as session:
        yield session
