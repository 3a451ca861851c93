"""알림 레포지토리 — 알림 수신함 DB 쿼리 담당.

Notification Repository — Per-user inbox queries, read-state updates
scoped to the owner, and fan-out inserts for leave and broadcast notices.
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import ColumnElement, Select, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from attendance_hub.models.notification import Notification
from attendance_hub.repositories.base import BaseRepository


class NotificationRepository(BaseRepository[Notification]):
    """알림 레포지토리.

    Extends:
        BaseRepository[Notification]
    """

    def __init__(self) -> None:
        super().__init__(Notification)

    async def get_user_notifications(
        self,
        db: AsyncSession,
        user_id: UUID,
        unread_only: bool = False,
        page: int = 1,
        per_page: int = 20,
    ) -> tuple[Sequence[Notification], int]:
        """사용자 수신함을 최신순으로 조회합니다.

        One page of a user's inbox, newest first.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            user_id: 수신자 UUID (Recipient)
            unread_only: 미읽음만 (Only unread)
            page: 페이지 번호 (Page number)
            per_page: 페이지당 항목 수 (Items per page)

        Returns:
            tuple[Sequence[Notification], int]: (알림 목록, 전체 개수)
        """
        query: Select = select(Notification).where(Notification.user_id == user_id)
        if unread_only:
            query = query.where(Notification.is_read.is_(False))
        return await self.get_paginated(db, query.order_by(Notification.created_at.desc()), page, per_page)

    async def get_unread_count(self, db: AsyncSession, user_id: UUID) -> int:
        return await self.count(db, Notification.user_id == user_id, Notification.is_read.is_(False))

    async def _set_read(self, db: AsyncSession, user_id: UUID, *criteria: ColumnElement[bool]) -> int:
        # 항상 수신자 본인으로 한정 — always scoped to the recipient
        result = await db.execute(
            update(Notification)
            .where(Notification.user_id == user_id, Notification.is_read.is_(False), *criteria)
            .values(is_read=True)
            .execution_options(synchronize_session="fetch")
        )
        await db.flush()
        return result.rowcount

    async def mark_read(self, db: AsyncSession, notification_id: UUID, user_id: UUID) -> bool:
        """단일 알림 읽음 처리 — 본인 알림이 아니면 False.

        An already-read notification of the same user still counts as found.
        """
        if await self._set_read(db, user_id, Notification.id == notification_id):
            return True
        return await self.count(db, Notification.id == notification_id, Notification.user_id == user_id) > 0

    async def mark_all_read(self, db: AsyncSession, user_id: UUID) -> int:
        """미읽음 알림 전체를 읽음 처리하고 변경 건수를 반환합니다."""
        return await self._set_read(db, user_id)

    async def create_many(
        self,
        db: AsyncSession,
        user_ids: Sequence[UUID],
        title: str,
        message: str,
        notification_type: str,
        related_type: str | None = None,
        related_id: UUID | None = None,
        attachment_url: str | None = None,
    ) -> list[Notification]:
        """수신자마다 같은 알림을 한 건씩 추가합니다 (flush only).

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            user_ids: 수신자 목록 (Recipients)
            title: 제목 (Title)
            message: 본문 (Body)
            notification_type: info | success | warning | error | task
            related_type: 참조 엔티티 유형 (Source entity type)
            related_id: 참조 엔티티 UUID (Source entity id)
            attachment_url: 첨부 URL (Attachment URL)

        Returns:
            list[Notification]: 추가된 알림 (Inserted notifications)
        """
        notifications: list[Notification] = [
            Notification(
                user_id=recipient,
                title=title,
                message=message,
                type=notification_type,
                related_type=related_type,
                related_id=related_id,
                attachment_url=attachment_url,
            )
            for recipient in user_ids
        ]
        db.add_all(notifications)
        await db.flush()
        return notifications


# 싱글턴 인스턴스 — Singleton instance
notification_repository: NotificationRepository = NotificationRepository()
