"""공통 레포지토리 — 도메인 레포지토리의 부모 클래스.

Shared repository base. Each domain repository binds one ORM model and
inherits id lookup, ordered listing, counting, paging, and insert.

Usage:
    class LeaveRequestRepository(BaseRepository[LeaveRequest]):
        def __init__(self) -> None:
            super().__init__(LeaveRequest)
"""

from typing import Any, Generic, Sequence, TypeVar
from uuid import UUID

from sqlalchemy import ColumnElement, Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from attendance_hub.database import Base

# 레포지토리가 다루는 ORM 모델 — ORM model bound to a repository
ModelType = TypeVar("ModelType", bound=Base)

# 페이지 크기 상한 — Upper bound for per_page on list endpoints
MAX_PER_PAGE: int = 100


class BaseRepository(Generic[ModelType]):
    """모델 하나에 묶인 레포지토리.

    Attributes:
        model: ORM 모델 클래스 (Bound ORM model)
    """

    def __init__(self, model: type[ModelType]) -> None:
        self.model: type[ModelType] = model

    async def get_by_id(self, db: AsyncSession, record_id: UUID) -> ModelType | None:
        """기본키로 조회합니다 (Primary-key lookup; None when missing)."""
        result = await db.execute(select(self.model).where(self.model.id == record_id))
        return result.scalar_one_or_none()

    async def get_all(
        self,
        db: AsyncSession,
        order_by: Any | None = None,
    ) -> Sequence[ModelType]:
        query: Select = select(self.model)
        if order_by is not None:
            query = query.order_by(order_by)
        result = await db.execute(query)
        return result.scalars().all()

    async def count(self, db: AsyncSession, *criteria: ColumnElement[bool]) -> int:
        """조건에 맞는 행 수를 셉니다.

        Count rows of the bound model matching every criterion.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            *criteria: WHERE 조건들, AND 결합 (WHERE clauses, ANDed)

        Returns:
            int: 행 수 (Row count)
        """
        query: Select = select(func.count()).select_from(self.model)
        if criteria:
            query = query.where(*criteria)
        return (await db.execute(query)).scalar() or 0

    async def get_paginated(
        self,
        db: AsyncSession,
        query: Select,
        page: int = 1,
        per_page: int = 20,
    ) -> tuple[Sequence[ModelType], int]:
        """쿼리 결과의 한 페이지와 전체 개수를 반환합니다.

        Run ``query`` for one page. ``page`` is 1-based; out-of-range values
        are clamped instead of rejected, and ``per_page`` is capped at
        ``MAX_PER_PAGE``.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            query: 정렬까지 적용된 SELECT (Ordered SELECT)
            page: 페이지 번호 (Page number)
            per_page: 페이지당 항목 수 (Items per page)

        Returns:
            tuple[Sequence[ModelType], int]: (페이지 항목, 전체 개수)
        """
        page = max(page, 1)
        per_page = min(max(per_page, 1), MAX_PER_PAGE)

        total: int = (
            await db.execute(select(func.count()).select_from(query.order_by(None).subquery()))
        ).scalar() or 0
        result = await db.execute(query.offset((page - 1) * per_page).limit(per_page))
        return result.scalars().all(), total

    async def create(self, db: AsyncSession, obj_data: dict[str, Any]) -> ModelType:
        """행을 추가하고 flush합니다 — 커밋은 호출자 몫 (Insert and flush; caller commits)."""
        db_obj: ModelType = self.model(**obj_data)
        db.add(db_obj)
        await db.flush()
        await db.refresh(db_obj)
        return db_obj
