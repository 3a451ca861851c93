"""알림 관련 SQLAlchemy ORM 모델 정의.

Notification SQLAlchemy ORM model definition.
Each notification can deep-link back to the entity that triggered it
via ``related_type`` and ``related_id``.

Tables:
    - notifications: 사용자 알림 (User notifications)
"""

import uuid
from datetime import datetime, timezone
from sqlalchemy import String, Boolean, DateTime, ForeignKey, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from attendance_hub.database import Base

# 알림 유형 — Notification types
NOTIFICATION_TYPES: tuple[str, ...] = ("info", "success", "warning", "error", "task")
# 참조 유형 — Related entity types
RELATED_LEAVE: str = "leave"
RELATED_TASK: str = "task"


class Notification(Base):
    """알림 모델 — 사용자에게 전달되는 시스템 알림.

    Notification model — System notifications delivered to users.
    Only ``is_read`` is mutated after creation.

    Notification Types (type 필드 값):
        - "info": 일반 공지 (General broadcast)
        - "success": 휴가 승인 등 (Leave approved)
        - "warning": 새 휴가 신청 등 (New leave request, sent to admins)
        - "error": 휴가 반려 등 (Leave declined)
        - "task": 업무 관련 (Task related)

    Attributes:
        id: 고유 식별자 UUID (Unique identifier)
        user_id: 수신자 FK (Recipient user)
        title: 제목 (Title)
        message: 본문 — 마크다운 허용 (Body, markdown allowed)
        type: 알림 유형 (Notification type, see above)
        is_read: 읽음 여부 (Whether the user has read this notification)
        related_type: 참조 엔티티 유형 (Referenced entity type, e.g. "leave")
        related_id: 참조 엔티티 ID (Referenced entity UUID)
        attachment_url: 첨부 파일 URL, 선택 (Public URL from the object store)
        created_at: 생성 일시 UTC (Creation timestamp)
    """

    __tablename__ = "notifications"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    # 수신자 FK — Target user who receives this notification
    user_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    message: Mapped[str] = mapped_column(Text, nullable=False)
    type: Mapped[str] = mapped_column(String(20), nullable=False, default="info")
    # 읽음 여부 — False=미읽음, True=읽음 (Unread by default)
    is_read: Mapped[bool] = mapped_column(Boolean, default=False)
    related_type: Mapped[str | None] = mapped_column(String(50), nullable=True)
    related_id: Mapped[uuid.UUID | None] = mapped_column(Uuid, nullable=True)
    attachment_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
