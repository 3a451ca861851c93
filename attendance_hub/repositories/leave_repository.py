"""휴가 신청 레포지토리 — 휴가 신청 DB 쿼리 담당.

Leave Request Repository — Handles leave request database queries,
including the conditional status transition that gates approval.
"""

from datetime import datetime
from typing import Sequence
from uuid import UUID

from sqlalchemy import Select, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from attendance_hub.models.leave import LEAVE_APPROVED, LEAVE_PENDING, LeaveRequest
from attendance_hub.repositories.base import BaseRepository


class LeaveRequestRepository(BaseRepository[LeaveRequest]):
    """휴가 신청 레포지토리.

    Extends:
        BaseRepository[LeaveRequest]
    """

    def __init__(self) -> None:
        super().__init__(LeaveRequest)

    async def get_by_filters(
        self,
        db: AsyncSession,
        user_id: UUID | None = None,
        status: str | None = None,
        page: int = 1,
        per_page: int = 20,
    ) -> tuple[Sequence[LeaveRequest], int]:
        """필터 조건에 맞는 휴가 신청을 최신순으로 페이지네이션 조회합니다.

        Retrieve paginated leave requests, newest first.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            user_id: 신청자 UUID 필터, 선택 (Optional requester filter)
            status: 상태 필터, 선택 (Optional status filter)
            page: 페이지 번호 (Page number)
            per_page: 페이지당 항목 수 (Items per page)

        Returns:
            tuple[Sequence[LeaveRequest], int]: (휴가 신청 목록, 전체 개수)
        """
        query: Select = select(LeaveRequest)
        if user_id is not None:
            query = query.where(LeaveRequest.user_id == user_id)
        if status is not None:
            query = query.where(LeaveRequest.status == status)
        query = query.order_by(LeaveRequest.created_at.desc())
        return await self.get_paginated(db, query, page, per_page)

    async def transition_from_pending(
        self,
        db: AsyncSession,
        leave_request_id: UUID,
        new_status: str,
        decided_by: UUID,
        decided_at: datetime,
    ) -> bool:
        """대기 중인 신청만 상태를 전이합니다.

        Move a request out of ``pending`` with a single conditional UPDATE.
        Two concurrent decisions cannot both succeed: the loser matches zero
        rows because the status is no longer ``pending``.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            leave_request_id: 휴가 신청 UUID (Leave request UUID)
            new_status: 새 상태 — approved | declined (Target status)
            decided_by: 결정한 관리자 UUID (Deciding admin)
            decided_at: 결정 일시 (Decision timestamp)

        Returns:
            bool: 전이 성공 여부 (True when exactly this call moved the request)
        """
        result = await db.execute(
            update(LeaveRequest)
            .where(
                LeaveRequest.id == leave_request_id,
                LeaveRequest.status == LEAVE_PENDING,
            )
            .values(
                status=new_status,
                approved_by=decided_by,
                approved_at=decided_at,
                updated_at=decided_at,
            )
            .execution_options(synchronize_session="fetch")
        )
        await db.flush()
        return result.rowcount > 0

    async def get_approved(self, db: AsyncSession) -> Sequence[LeaveRequest]:
        """승인된 모든 휴가 신청 (All approved requests, oldest span first)."""
        query: Select = (
            select(LeaveRequest)
            .where(LeaveRequest.status == LEAVE_APPROVED)
            .order_by(LeaveRequest.start_date)
        )
        result = await db.execute(query)
        return result.scalars().all()

    async def count_with_status(self, db: AsyncSession, status: str) -> int:
        return await self.count(db, LeaveRequest.status == status)


# 싱글턴 인스턴스 — Singleton instance
leave_request_repository: LeaveRequestRepository = LeaveRequestRepository()
