"""휴가 신청 SQLAlchemy ORM 모델 정의.

Leave request SQLAlchemy ORM model definition.

Tables:
    - leave_requests: 휴가 신청 (Employee leave submissions and their one-time decision)
"""

import uuid
from datetime import date, datetime, timezone

from sqlalchemy import CheckConstraint, Date, DateTime, ForeignKey, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from attendance_hub.database import Base

# 휴가 상태 — pending → approved | declined (both terminal)
LEAVE_PENDING: str = "pending"
LEAVE_APPROVED: str = "approved"
LEAVE_DECLINED: str = "declined"
LEAVE_STATUSES: tuple[str, ...] = (LEAVE_PENDING, LEAVE_APPROVED, LEAVE_DECLINED)


class LeaveRequest(Base):
    """휴가 신청 모델.

    Leave request model. ``start_date``/``end_date`` form an inclusive
    date-only span. Status changes exactly once, from ``pending`` to
    ``approved`` or ``declined``; approvals cannot be revoked.

    Attributes:
        id: 고유 식별자 UUID (Unique identifier)
        user_id: 신청자 FK (Requesting employee)
        start_date: 시작일, 포함 (Inclusive start date)
        end_date: 종료일, 포함 (Inclusive end date)
        reason: 사유, 선택 (Optional reason)
        status: 상태 — pending | approved | declined
        approved_by: 결정한 관리자 FK (Admin who approved or declined)
        approved_at: 결정 일시 UTC (Decision timestamp)
    """

    __tablename__ = "leave_requests"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)
    reason: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default=LEAVE_PENDING)
    # 결정자 FK — Set on approve and on decline
    approved_by: Mapped[uuid.UUID | None] = mapped_column(Uuid, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    approved_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

    __table_args__ = (
        CheckConstraint("start_date <= end_date", name="ck_leave_date_order"),
        CheckConstraint("status IN ('pending', 'approved', 'declined')", name="ck_leave_status"),
    )
