"""사용자 레포지토리 — 사용자 조회 쿼리 담당.

User Repository — Read-side user queries used by the attendance engine:
active headcount, admin recipients, and display-name lookups.
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession

from attendance_hub.models.user import ROLE_ADMIN, User
from attendance_hub.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """사용자 레포지토리.

    Extends:
        BaseRepository[User]
    """

    def __init__(self) -> None:
        super().__init__(User)

    async def count_active(self, db: AsyncSession) -> int:
        """활성 사용자 수를 조회합니다.

        Count active users — the "expected employee count" used by
        absence and weekly-rate calculations.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)

        Returns:
            int: 활성 사용자 수 (Active user count)
        """
        return await self.count(db, User.is_active.is_(True))

    async def get_active_ids(
        self,
        db: AsyncSession,
        role: str | None = None,
    ) -> Sequence[UUID]:
        """활성 사용자 ID 목록을 조회합니다 (역할 필터 선택).

        Retrieve active user ids, optionally restricted to one role.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            role: 역할 필터, 선택 (Optional role filter)

        Returns:
            Sequence[UUID]: 사용자 ID 목록 (User ids)
        """
        query: Select = select(User.id).where(User.is_active.is_(True))
        if role is not None:
            query = query.where(User.role == role)
        result = await db.execute(query)
        return result.scalars().all()

    async def get_admin_ids(self, db: AsyncSession) -> Sequence[UUID]:
        """활성 관리자 ID 목록 (Active admin ids)."""
        return await self.get_active_ids(db, role=ROLE_ADMIN)

    async def filter_active_ids(self, db: AsyncSession, user_ids: Sequence[UUID]) -> set[UUID]:
        """주어진 ID 중 존재하는 활성 사용자만 반환합니다.

        Subset of ``user_ids`` that belong to existing, active users.
        """
        if not user_ids:
            return set()
        result = await db.execute(
            select(User.id).where(User.id.in_(user_ids), User.is_active.is_(True))
        )
        return set(result.scalars().all())

    async def get_names(
        self,
        db: AsyncSession,
        user_ids: set[UUID],
    ) -> dict[UUID, tuple[str, str]]:
        """사용자 ID별 (이름, 부서)를 한 번에 조회합니다.

        Resolve ``(full_name, department)`` for many users in one query.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            user_ids: 사용자 ID 집합 (User ids)

        Returns:
            dict[UUID, tuple[str, str]]: {user_id: (full_name, department)}
        """
        if not user_ids:
            return {}
        result = await db.execute(
            select(User.id, User.full_name, User.department).where(User.id.in_(user_ids))
        )
        return {row.id: (row.full_name, row.department) for row in result.all()}


# 싱글턴 인스턴스 — Singleton instance
user_repository: UserRepository = UserRepository()
