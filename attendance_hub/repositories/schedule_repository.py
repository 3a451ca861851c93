"""스케줄 레포지토리 — 요일별 스케줄 DB 쿼리 담당.

Schedule Repository — Handles weekly schedule database queries.
"""

from typing import Sequence

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession

from attendance_hub.models.schedule import ScheduleDay
from attendance_hub.repositories.base import BaseRepository


class ScheduleRepository(BaseRepository[ScheduleDay]):
    """요일별 스케줄 레포지토리.

    Extends:
        BaseRepository[ScheduleDay]
    """

    def __init__(self) -> None:
        super().__init__(ScheduleDay)

    async def get_by_day_of_week(
        self,
        db: AsyncSession,
        day_of_week: int,
    ) -> ScheduleDay | None:
        """요일 인덱스로 스케줄을 조회합니다.

        Retrieve the schedule row for a weekday index (0=Sunday).

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            day_of_week: 요일 인덱스 (Weekday index, 0=Sunday..6=Saturday)

        Returns:
            ScheduleDay | None: 스케줄 또는 None — 설정 누락 (Row or None on config gap)
        """
        query: Select = select(ScheduleDay).where(ScheduleDay.day_of_week == day_of_week)
        result = await db.execute(query)
        return result.scalar_one_or_none()

    async def get_week(self, db: AsyncSession) -> Sequence[ScheduleDay]:
        """전체 주간 스케줄을 요일 순으로 조회합니다 (Whole week, Sunday first)."""
        return await self.get_all(db, order_by=ScheduleDay.day_of_week)


# 싱글턴 인스턴스 — Singleton instance
schedule_repository: ScheduleRepository = ScheduleRepository()
