"""알림 서비스 — 알림 비즈니스 로직.

Notification Service — Business logic for notification management.
Handles read/unread operations, the leave-workflow notices, and admin
broadcasts. Leave-workflow notices are side effects of a decision and are
created by the leave service inside its own best-effort guard.
"""

import logging
from datetime import date
from typing import Sequence
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from attendance_hub.models.leave import LeaveRequest
from attendance_hub.models.notification import RELATED_LEAVE, Notification
from attendance_hub.models.user import ROLE_EMPLOYEE
from attendance_hub.repositories.notification_repository import notification_repository
from attendance_hub.repositories.user_repository import user_repository
from attendance_hub.utils.exceptions import BadRequestError, NotFoundError

logger = logging.getLogger(__name__)


def format_short_date(day: date) -> str:
    """"Jan 5" 형식 날짜 (Short month + day, no zero padding)."""
    return f"{day.strftime('%b')} {day.day}"


class NotificationService:
    """알림 서비스.

    Notification service providing shared read/unread operations
    and creation for leave decisions and broadcasts.
    """

    # --- 공통 조회/읽음 처리 (Shared read/unread operations) ---

    async def list_notifications(
        self,
        db: AsyncSession,
        user_id: UUID,
        unread_only: bool = False,
        page: int = 1,
        per_page: int = 20,
    ) -> tuple[Sequence[Notification], int]:
        """사용자의 알림 목록을 페이지네이션하여 조회합니다.

        List paginated notifications for a user.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            user_id: 사용자 UUID (User UUID)
            unread_only: 읽지 않은 알림만 (Only unread)
            page: 페이지 번호 (Page number)
            per_page: 페이지당 항목 수 (Items per page)

        Returns:
            tuple[Sequence[Notification], int]: (알림 목록, 전체 개수)
        """
        return await notification_repository.get_user_notifications(
            db, user_id, unread_only, page, per_page
        )

    async def get_unread_count(self, db: AsyncSession, user_id: UUID) -> int:
        return await notification_repository.get_unread_count(db, user_id)

    async def mark_read(
        self,
        db: AsyncSession,
        notification_id: UUID,
        user_id: UUID,
    ) -> None:
        """단일 알림을 읽음 처리합니다.

        Mark a single notification as read.

        Raises:
            NotFoundError: 본인 알림이 아니거나 없을 때 (Missing or not owned)
        """
        updated: bool = await notification_repository.mark_read(db, notification_id, user_id)
        if not updated:
            raise NotFoundError("알림을 찾을 수 없습니다 (Notification not found)")

    async def mark_all_read(self, db: AsyncSession, user_id: UUID) -> int:
        """모든 알림 읽음 처리 — 처리 건수 반환 (Returns rows updated)."""
        return await notification_repository.mark_all_read(db, user_id)

    def build_response(self, notification: Notification) -> dict:
        """알림 응답 딕셔너리 (Notification response dict)."""
        return {
            "id": str(notification.id),
            "title": notification.title,
            "message": notification.message,
            "type": notification.type,
            "related_type": notification.related_type,
            "related_id": str(notification.related_id) if notification.related_id else None,
            "attachment_url": notification.attachment_url,
            "is_read": notification.is_read,
            "created_at": notification.created_at,
        }

    # --- 휴가 알림 (Leave workflow notices) ---

    async def notify_admins_of_leave_request(
        self,
        db: AsyncSession,
        leave: LeaveRequest,
        requester_name: str,
    ) -> list[Notification]:
        """새 휴가 신청을 모든 활성 관리자에게 알립니다.

        Notify every active admin of a new leave request.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            leave: 휴가 신청 (Leave request)
            requester_name: 신청자 이름 (Requester display name)

        Returns:
            list[Notification]: 생성된 알림 목록 (Created notifications)
        """
        admin_ids: Sequence[UUID] = await user_repository.get_admin_ids(db)
        message: str = f"**{requester_name}** has requested leave from {leave.start_date} to {leave.end_date}."
        if leave.reason:
            message += f" Reason: {leave.reason}"
        return await notification_repository.create_many(
            db,
            admin_ids,
            title="New Leave Request",
            message=message,
            notification_type="warning",
            related_type=RELATED_LEAVE,
            related_id=leave.id,
        )

    async def notify_leave_decision(
        self,
        db: AsyncSession,
        leave: LeaveRequest,
        approved: bool,
    ) -> Notification:
        """휴가 승인/반려 결과를 신청자에게 알립니다.

        Notify the requester that their leave was approved or declined.
        """
        span: str = f"from {format_short_date(leave.start_date)} to {format_short_date(leave.end_date)}"
        if approved:
            title, notification_type = "Leave Request Approved", "success"
            message = f"Your leave request {span} has been approved."
        else:
            title, notification_type = "Leave Request Declined", "error"
            message = f"Your leave request {span} has been declined."

        notifications: list[Notification] = await notification_repository.create_many(
            db,
            [leave.user_id],
            title=title,
            message=message,
            notification_type=notification_type,
            related_type=RELATED_LEAVE,
            related_id=leave.id,
        )
        return notifications[0]

    # --- 공지 발송 (Broadcast) ---

    async def broadcast(
        self,
        db: AsyncSession,
        title: str,
        message: str,
        notification_type: str = "info",
        user_ids: list[UUID] | None = None,
        attachment_url: str | None = None,
        related_type: str | None = None,
        related_id: UUID | None = None,
    ) -> int:
        """지정 사용자 또는 모든 활성 직원에게 알림을 발송합니다.

        Send one notification per recipient. Without ``user_ids`` every active
        employee receives it; listed users must exist and be active, otherwise
        nothing is sent.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            title: 제목 (Title)
            message: 본문 (Body)
            notification_type: 알림 유형 (Notification type)
            user_ids: 수신자 목록, 선택 (Optional explicit recipients)
            attachment_url: 첨부 URL, 선택 (Optional attachment URL)
            related_type: 참조 유형, 선택 (Optional related entity type)
            related_id: 참조 ID, 선택 (Optional related entity UUID)

        Returns:
            int: 발송 건수 (Notifications created)

        Raises:
            BadRequestError: 수신자가 없거나, 없는/비활성 사용자가 포함된 경우
                             (No recipients, or unknown or inactive users listed)
        """
        if user_ids:
            recipients: Sequence[UUID] = list(dict.fromkeys(user_ids))
            active: set[UUID] = await user_repository.filter_active_ids(db, recipients)
            rejected: list[str] = [str(uid) for uid in recipients if uid not in active]
            if rejected:
                raise BadRequestError(
                    f"존재하지 않거나 비활성인 사용자입니다 (Unknown or inactive users: {', '.join(rejected)})"
                )
        else:
            recipients = await user_repository.get_active_ids(db, role=ROLE_EMPLOYEE)
        if not recipients:
            raise BadRequestError("수신자가 없습니다 (No recipients)")

        created: list[Notification] = await notification_repository.create_many(
            db,
            recipients,
            title=title,
            message=message,
            notification_type=notification_type,
            related_type=related_type,
            related_id=related_id,
            attachment_url=attachment_url,
        )
        logger.info("Broadcast %r sent to %d users", title, len(created))
        return len(created)


# 싱글턴 인스턴스 — Singleton instance
notification_service: NotificationService = NotificationService()
