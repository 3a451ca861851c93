"""초기 데이터 시드 스크립트 — 주간 스케줄 및 관리자 계정 생성.

Seed script — Creates tables, the default weekly schedule, and a first
admin profile for local development.

Usage:
    python -m attendance_hub.seed

Creates:
    - 7개 요일 스케줄: 월~금 근무, 08:00-09:30 출근, 17:00-18:30 퇴근
      (Seven weekday rows, Monday to Friday working)
    - 1개 관리자 프로필: System Admin (1 admin profile)

Prints a locally signed access token for the admin, since sessions are
normally issued by the identity provider.
"""

import asyncio

from sqlalchemy import select

from attendance_hub.database import Base, async_session, engine
from attendance_hub.models import User
from attendance_hub.models.user import ROLE_ADMIN
from attendance_hub.services.schedule_service import schedule_service
from attendance_hub.utils.jwt import create_access_token


async def seed() -> None:
    """데이터베이스를 초기 데이터로 시드합니다.

    Idempotent: 이미 있는 스케줄/관리자는 건너뜁니다 (Existing rows are kept).
    """
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with async_session() as db:
        created_days: int = await schedule_service.ensure_default_schedule(db)

        result = await db.execute(select(User).where(User.role == ROLE_ADMIN).limit(1))
        admin: User | None = result.scalar_one_or_none()
        if admin is None:
            admin = User(
                full_name="System Admin",
                email="admin@example.com",
                department="Administration",
                title="Administrator",
                role=ROLE_ADMIN,
                is_active=True,
            )
            db.add(admin)

        await db.commit()
        token: str = create_access_token({"sub": str(admin.id), "role": admin.role})
        print(f"Seeded: {created_days} schedule day(s), admin={admin.id}")
        print(f"Admin access token: {token}")


if __name__ == "__main__":
    asyncio.run(seed())
