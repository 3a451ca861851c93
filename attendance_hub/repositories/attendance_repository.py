"""근태 레포지토리 — 근태 기록 관련 DB 쿼리 담당.

Attendance Repository — Handles attendance record database queries:
per-day lookups, filtered listing, and the aggregate counts used by
dashboards and leave read-repair.
"""

from datetime import date
from typing import Sequence
from uuid import UUID

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from attendance_hub.models.attendance import AttendanceRecord
from attendance_hub.repositories.base import BaseRepository


class AttendanceRepository(BaseRepository[AttendanceRecord]):
    """근태 기록 레포지토리.

    Extends:
        BaseRepository[AttendanceRecord]
    """

    def __init__(self) -> None:
        super().__init__(AttendanceRecord)

    def _filtered_query(
        self,
        user_id: UUID | None = None,
        date_from: date | None = None,
        date_to: date | None = None,
        status: str | None = None,
    ) -> Select:
        query: Select = select(AttendanceRecord)
        if user_id is not None:
            query = query.where(AttendanceRecord.user_id == user_id)
        if date_from is not None:
            query = query.where(AttendanceRecord.work_date >= date_from)
        if date_to is not None:
            query = query.where(AttendanceRecord.work_date <= date_to)
        if status is not None:
            query = query.where(AttendanceRecord.status == status)
        return query.order_by(AttendanceRecord.work_date.desc(), AttendanceRecord.check_in.desc())

    async def get_by_filters(
        self,
        db: AsyncSession,
        user_id: UUID | None = None,
        date_from: date | None = None,
        date_to: date | None = None,
        status: str | None = None,
        page: int = 1,
        per_page: int = 20,
    ) -> tuple[Sequence[AttendanceRecord], int]:
        """필터 조건에 맞는 근태 기록을 페이지네이션하여 조회합니다.

        Retrieve paginated attendance records matching the given filters,
        newest first.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            user_id: 직원 UUID 필터, 선택 (Optional employee filter)
            date_from: 시작일 필터, 선택 (Optional date range start)
            date_to: 종료일 필터, 선택 (Optional date range end)
            status: 상태 필터, 선택 (Optional status filter)
            page: 페이지 번호, 1부터 시작 (Page number, 1-based)
            per_page: 페이지당 항목 수 (Items per page)

        Returns:
            tuple[Sequence[AttendanceRecord], int]: (근태 목록, 전체 개수)
        """
        query: Select = self._filtered_query(user_id, date_from, date_to, status)
        return await self.get_paginated(db, query, page, per_page)

    async def list_by_filters(
        self,
        db: AsyncSession,
        user_id: UUID | None = None,
        date_from: date | None = None,
        date_to: date | None = None,
        status: str | None = None,
    ) -> Sequence[AttendanceRecord]:
        """페이지네이션 없이 필터링된 전체 목록 (Unpaginated, for export)."""
        result = await db.execute(self._filtered_query(user_id, date_from, date_to, status))
        return result.scalars().all()

    async def get_user_day(
        self,
        db: AsyncSession,
        user_id: UUID,
        work_date: date,
    ) -> AttendanceRecord | None:
        """특정 직원의 특정 날짜 근태 기록을 조회합니다.

        Retrieve one employee's record for a local calendar day.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            user_id: 직원 UUID (Employee UUID)
            work_date: 근무일 (Local work date)

        Returns:
            AttendanceRecord | None: 근태 기록 또는 None (Record or None)
        """
        query: Select = (
            select(AttendanceRecord)
            .where(AttendanceRecord.user_id == user_id)
            .where(AttendanceRecord.work_date == work_date)
        )
        result = await db.execute(query)
        return result.scalar_one_or_none()

    async def count_by_status_on(
        self,
        db: AsyncSession,
        work_date: date,
    ) -> dict[str, int]:
        """특정 날짜의 상태별 근태 기록 수를 집계합니다.

        Count one day's records grouped by status.

        Returns:
            dict[str, int]: {status: count} — 기록이 없는 상태는 생략 (Missing statuses omitted)
        """
        query: Select = (
            select(AttendanceRecord.status, func.count(AttendanceRecord.id))
            .where(AttendanceRecord.work_date == work_date)
            .group_by(AttendanceRecord.status)
        )
        result = await db.execute(query)
        return {status: count for status, count in result.all()}

    async def count_with_status_between(
        self,
        db: AsyncSession,
        date_from: date,
        date_to: date,
        statuses: tuple[str, ...],
    ) -> int:
        """기간 내 지정 상태의 근태 기록 수 (Count records in a closed date range)."""
        return await self.count(
            db,
            AttendanceRecord.work_date >= date_from,
            AttendanceRecord.work_date <= date_to,
            AttendanceRecord.status.in_(statuses),
        )

    async def get_user_day_statuses(
        self,
        db: AsyncSession,
        user_id: UUID,
        date_from: date,
        date_to: date,
    ) -> dict[date, str]:
        """직원의 기간 내 날짜별 근태 상태.

        Status of the employee's record on each day of ``[date_from, date_to]``
        that has one. Used by leave read-repair to tell missing days from days
        already taken by a check-in.
        """
        query: Select = select(AttendanceRecord.work_date, AttendanceRecord.status).where(
            AttendanceRecord.user_id == user_id,
            AttendanceRecord.work_date >= date_from,
            AttendanceRecord.work_date <= date_to,
        )
        result = await db.execute(query)
        return {work_date: status for work_date, status in result.all()}


# 싱글턴 인스턴스 — Singleton instance
attendance_repository: AttendanceRepository = AttendanceRepository()
