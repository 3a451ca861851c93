"""알림 Pydantic 스키마 정의.

Notification request/response schemas.
``related_type`` + ``related_id`` deep-link to the source entity.
"""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field


class NotificationResponse(BaseModel):
    """알림 응답 스키마.

    Attributes:
        id: 알림 UUID (Notification identifier)
        title: 제목 (Title)
        message: 본문 — 마크다운 허용 (Body, markdown allowed)
        type: 알림 유형 (info | success | warning | error | task)
        related_type: 참조 엔티티 유형 (Source entity type, nullable)
        related_id: 참조 엔티티 UUID (Source entity UUID, nullable)
        attachment_url: 첨부 URL (Attachment URL, nullable)
        is_read: 읽음 여부 (Read flag)
        created_at: 생성 일시 UTC (Creation timestamp)
    """

    id: str
    title: str
    message: str
    type: str
    related_type: str | None = None
    related_id: str | None = None
    attachment_url: str | None = None
    is_read: bool
    created_at: datetime


class UnreadCountResponse(BaseModel):
    unread_count: int


class NotificationBroadcast(BaseModel):
    """알림 발송 요청 스키마.

    Broadcast request. Without ``user_ids`` every active employee receives it.
    """

    title: str = Field(..., min_length=1, max_length=255)
    message: str = Field(..., min_length=1)
    type: Literal["info", "success", "warning", "error", "task"] = "info"
    user_ids: list[str] | None = None  # 수신자 UUID 목록, 선택 (Optional explicit recipients)
    attachment_url: str | None = None
    related_type: str | None = None
    related_id: str | None = None


class BroadcastResponse(BaseModel):
    sent: int  # 발송 건수 (Notifications created)
