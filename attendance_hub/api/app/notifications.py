"""앱 알림 라우터 — 내 알림 API.

App Notification Router — The employee's own notifications
(leave decisions, broadcasts).
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from attendance_hub.api.deps import get_current_user
from attendance_hub.database import get_db
from attendance_hub.models.user import User
from attendance_hub.schemas.common import MessageResponse, PaginatedResponse
from attendance_hub.schemas.notification import UnreadCountResponse
from attendance_hub.services.notification_service import notification_service

router: APIRouter = APIRouter()


@router.get("", response_model=PaginatedResponse)
async def list_my_notifications(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
    unread_only: bool = False,
    page: int = 1,
    per_page: int = 20,
) -> dict:
    """내 알림 목록을 조회합니다 (My notifications, newest first)."""
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
async def get_my_unread_count(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> dict:
    count: int = await notification_service.get_unread_count(db, user_id=current_user.id)
    return {"unread_count": count}


@router.patch("/read-all", response_model=MessageResponse)
async def mark_all_my_read(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> dict:
    count: int = await notification_service.mark_all_read(db, user_id=current_user.id)
    await db.commit()
    return {"message": f"{count} notifications marked as read"}


@router.patch("/{notification_id}/read", response_model=MessageResponse)
async def mark_my_read(
    notification_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> dict:
    """내 알림 하나를 읽음 처리합니다.

    Mark one of my notifications as read; another user's id yields 404.
    """
    await notification_service.mark_read(db, notification_id, user_id=current_user.id)
    await db.commit()
    return {"message": "Notification marked as read"}
