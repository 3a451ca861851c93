"""관리자 알림 라우터 — 알림 관리 API.

Admin Notification Router — The admin's own notification inbox
(new leave requests arrive here) plus broadcasting to employees.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from attendance_hub.api.deps import require_admin
from attendance_hub.database import get_db
from attendance_hub.models.user import User
from attendance_hub.schemas.common import MessageResponse, PaginatedResponse
from attendance_hub.schemas.notification import (
    BroadcastResponse,
    NotificationBroadcast,
    UnreadCountResponse,
)
from attendance_hub.services.notification_service import notification_service
from attendance_hub.utils.exceptions import BadRequestError

router: APIRouter = APIRouter()


@router.get("", response_model=PaginatedResponse)
async def list_notifications(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
    unread_only: bool = False,
    page: int = 1,
    per_page: int = 20,
) -> dict:
    """관리자의 알림 목록을 조회합니다.

    List notifications for the admin user.

    Args:
        db: 비동기 데이터베이스 세션 (Async database session)
        current_user: 인증된 관리자 (Authenticated admin)
        unread_only: 읽지 않은 알림만 (Only unread)
        page: 페이지 번호 (Page number)
        per_page: 페이지당 항목 수 (Items per page)

    Returns:
        dict: 페이지네이션된 알림 목록 (Paginated notification list)
    """
    notifications, total = await notification_service.list_notifications(
        db, user_id=current_user.id, unread_only=unread_only, page=page, per_page=per_page
    )
    return {
        "items": [notification_service.build_response(n) for n in notifications],
        "total": total,
        "page": page,
        "per_page": per_page,
    }


@router.get("/unread-count", response_model=UnreadCountResponse)
async def get_unread_count(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> dict:
    count: int = await notification_service.get_unread_count(db, user_id=current_user.id)
    return {"unread_count": count}


@router.patch("/read-all", response_model=MessageResponse)
async def mark_all_read(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> dict:
    """모든 알림을 읽음 처리합니다 (Mark every unread notification as read)."""
    count: int = await notification_service.mark_all_read(db, user_id=current_user.id)
    await db.commit()
    return {"message": f"{count} notifications marked as read"}


@router.patch("/{notification_id}/read", response_model=MessageResponse)
async def mark_read(
    notification_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> dict:
    await notification_service.mark_read(db, notification_id, user_id=current_user.id)
    await db.commit()
    return {"message": "Notification marked as read"}


@router.post("/broadcast", response_model=BroadcastResponse, status_code=201)
async def broadcast_notification(
    data: NotificationBroadcast,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> dict:
    """직원에게 알림을 발송합니다.

    Send a notification to the listed users, or to every active employee
    when no recipients are given.

    Args:
        data: 발송 요청 (Broadcast request)
        db: 비동기 데이터베이스 세션 (Async database session)
        current_user: 인증된 관리자 (Authenticated admin)

    Returns:
        dict: 발송 건수 (Number of notifications created)
    """
    try:
        recipients: list[UUID] | None = [UUID(uid) for uid in data.user_ids] if data.user_ids else None
        related_id: UUID | None = UUID(data.related_id) if data.related_id else None
    except ValueError:
        raise BadRequestError("잘못된 UUID 형식입니다 (Invalid UUID)")

    sent: int = await notification_service.broadcast(
        db,
        title=data.title,
        message=data.message,
        notification_type=data.type,
        user_ids=recipients,
        attachment_url=data.attachment_url,
        related_type=data.related_type,
        related_id=related_id,
    )
    await db.commit()
    return {"sent": sent}
