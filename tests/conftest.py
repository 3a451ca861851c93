"""테스트 인프라 — 임시 DB, 세션, httpx 클라이언트 픽스처.

Test infrastructure — Temporary database, session, and httpx client fixtures.
The database URL comes from ``TEST_DATABASE_URL`` (e.g. a PostgreSQL test
database); by default each test gets its own file-backed SQLite database.
Schema is created before and dropped after every test.

Fixtures commit instead of flushing: the leave workflow commits and rolls
back on the shared session, which would discard flushed-only rows.
"""

import os
from collections.abc import AsyncGenerator
from datetime import date, datetime, timezone

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from attendance_hub.database import Base, get_db
from attendance_hub.main import app
from attendance_hub.models import *  # noqa: F401,F403 — register all models with metadata
from attendance_hub.models.attendance import AttendanceRecord
from attendance_hub.models.user import ROLE_ADMIN, ROLE_EMPLOYEE, User
from attendance_hub.services.schedule_service import schedule_service
from attendance_hub.utils.jwt import create_access_token


# ---------------------------------------------------------------------------
# Function-scoped: 엔진, 세션, 클라이언트
# ---------------------------------------------------------------------------
@pytest_asyncio.fixture
async def engine(tmp_path) -> AsyncGenerator[AsyncEngine, None]:
    """테스트용 async 엔진 — 스키마 생성 후 종료 시 삭제합니다."""
    url: str = os.environ.get("TEST_DATABASE_URL") or f"sqlite+aiosqlite:///{tmp_path / 'test.db'}"
    eng = create_async_engine(url, echo=False)

    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)

    yield eng

    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await eng.dispose()


@pytest_asyncio.fixture
async def db(engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """각 테스트에 격리된 DB 세션을 제공합니다."""
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(db: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """FastAPI 테스트 클라이언트 — DB 세션을 오버라이드합니다."""
    async def _override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db

    app.dependency_overrides[get_db] = _override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# 헬퍼: 테스트용 데이터 생성
# ---------------------------------------------------------------------------
async def create_user(
    db: AsyncSession,
    full_name: str,
    role: str = ROLE_EMPLOYEE,
    is_active: bool = True,
    department: str = "Engineering",
) -> User:
    """사용자를 생성하고 커밋합니다."""
    user = User(full_name=full_name, role=role, is_active=is_active, department=department)
    db.add(user)
    await db.commit()
    await db.refresh(user)
    return user


async def create_attendance(
    db: AsyncSession,
    user_id,
    work_date: date,
    status: str,
    check_in: datetime | None = None,
    check_out: datetime | None = None,
) -> AttendanceRecord:
    """근태 기록을 직접 생성하고 커밋합니다."""
    record = AttendanceRecord(
        user_id=user_id,
        work_date=work_date,
        check_in=check_in or datetime(work_date.year, work_date.month, work_date.day, 9, 0, tzinfo=timezone.utc),
        check_out=check_out,
        status=status,
    )
    db.add(record)
    await db.commit()
    await db.refresh(record)
    return record


@pytest_asyncio.fixture
async def schedule(db: AsyncSession):
    """기본 주간 스케줄(월~금, 09:30 출근 마감)을 생성합니다."""
    await schedule_service.ensure_default_schedule(db)
    await db.commit()
    return await schedule_service.list_schedule(db)


@pytest_asyncio.fixture
async def admin_user(db: AsyncSession) -> User:
    return await create_user(db, "Test Admin", role=ROLE_ADMIN, department="Administration")


@pytest_asyncio.fixture
async def employee_user(db: AsyncSession) -> User:
    return await create_user(db, "Test Employee")


def make_token(user: User) -> str:
    """테스트용 JWT 액세스 토큰을 생성합니다."""
    return create_access_token({"sub": str(user.id), "role": user.role})


@pytest.fixture
def admin_token(admin_user) -> str:
    return make_token(admin_user)


@pytest.fixture
def employee_token(employee_user) -> str:
    return make_token(employee_user)


def auth_header(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}
