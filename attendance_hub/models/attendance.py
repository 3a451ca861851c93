"""근태 기록 SQLAlchemy ORM 모델 정의.

Attendance SQLAlchemy ORM model definition.

Tables:
    - attendance: 근태 기록 (One record per employee per local calendar day)
"""

import uuid
from datetime import date, datetime, timezone

from sqlalchemy import Date, DateTime, ForeignKey, Index, String, Text, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from attendance_hub.database import Base

# 근태 상태 — Attendance status vocabulary
STATUS_PRESENT: str = "present"
STATUS_LATE: str = "late"
# 결근은 조회 시 계산되며 저장되지 않음 — absent is derived at read time, never written by the engine
STATUS_ABSENT: str = "absent"
STATUS_LEAVE: str = "leave"
ATTENDANCE_STATUSES: tuple[str, ...] = (STATUS_PRESENT, STATUS_LATE, STATUS_ABSENT, STATUS_LEAVE)


class AttendanceRecord(Base):
    """근태 기록 모델.

    Attendance record model — created by an employee check-in (status
    ``present``/``late``) or by leave approval (status ``leave``). The status
    is decided once at creation and never recomputed when the schedule changes;
    the only later mutation is setting ``check_out``.

    Attributes:
        id: 고유 식별자 UUID (Unique identifier)
        user_id: 직원 FK (Employee)
        work_date: 로컬 근무 날짜 — check_in의 로컬 날짜 (Local calendar date of check_in)
        check_in: 출근 시각 UTC (Check-in instant; local midnight for leave rows)
        check_out: 퇴근 시각 UTC, 선택 (Check-out instant)
        status: 상태 — present | late | leave
        notes: 메모 (Free-text notes; carries the leave reason for leave rows)
        leave_request_id: 휴가 신청 FK (Set on rows materialized from an approved leave)
        created_at: 생성 일시 UTC (Creation timestamp)

    Constraints:
        uq_attendance_user_date: 동일 직원+날짜 중복 불가 (One record per employee per day)
    """

    __tablename__ = "attendance"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    # 직원 FK — Employee who owns the record (cascade purge on account deletion)
    user_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    # 근무 날짜 — Local calendar date derived from check_in
    work_date: Mapped[date] = mapped_column(Date, nullable=False)
    check_in: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    check_out: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default=STATUS_PRESENT)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    # 휴가 신청 FK — Source leave request for materialized leave rows
    leave_request_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("leave_requests.id", ondelete="SET NULL"), nullable=True
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    __table_args__ = (
        UniqueConstraint("user_id", "work_date", name="uq_attendance_user_date"),
        Index("ix_attendance_work_date_status", "work_date", "status"),
    )
