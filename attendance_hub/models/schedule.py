"""주간 근무 스케줄 SQLAlchemy ORM 모델 정의.

Weekly attendance schedule SQLAlchemy ORM model definition.

Tables:
    - attendance_schedule: 요일별 출퇴근 시간대 (One row per weekday, 0=Sunday..6=Saturday)
"""

import uuid
from datetime import datetime, time, timezone

from sqlalchemy import Boolean, CheckConstraint, DateTime, Integer, Time, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from attendance_hub.database import Base

# 기본 스케줄 값 — Default schedule seeded for every weekday
DEFAULT_CHECK_IN_START: time = time(8, 0)
DEFAULT_CHECK_IN_END: time = time(9, 30)
DEFAULT_CHECK_OUT_START: time = time(17, 0)
DEFAULT_CHECK_OUT_END: time = time(18, 30)
# 기본 근무일 — Monday..Friday (Sunday=0, Saturday=6 are off)
DEFAULT_WORKING_DAYS: frozenset[int] = frozenset({1, 2, 3, 4, 5})


class ScheduleDay(Base):
    """요일별 스케줄 모델.

    Schedule day model — admin-configured check-in/out windows for one weekday.
    Exactly one row exists per ``day_of_week`` value (seeded once, then only
    bulk-updated). ``check_in_start <= check_in_end`` is expected but not
    enforced; the classifier only reads ``check_in_end``.

    Attributes:
        id: 고유 식별자 UUID (Unique identifier)
        day_of_week: 요일 — 0=일요일 ... 6=토요일 (Weekday index, Sunday first)
        check_in_start: 출근 시작 시각 (Check-in window start)
        check_in_end: 출근 마감 시각 — 이후 출근은 지각 (Later check-ins are late)
        check_out_start: 퇴근 시작 시각 (Check-out window start)
        check_out_end: 퇴근 마감 시각 (Check-out window end)
        is_working_day: 근무일 여부 (Working-day flag)
    """

    __tablename__ = "attendance_schedule"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    # 요일 — 0=Sunday, 1=Monday, ..., 6=Saturday (unique per row)
    day_of_week: Mapped[int] = mapped_column(Integer, nullable=False, unique=True)
    check_in_start: Mapped[time] = mapped_column(Time, nullable=False, default=DEFAULT_CHECK_IN_START)
    check_in_end: Mapped[time] = mapped_column(Time, nullable=False, default=DEFAULT_CHECK_IN_END)
    check_out_start: Mapped[time] = mapped_column(Time, nullable=False, default=DEFAULT_CHECK_OUT_START)
    check_out_end: Mapped[time] = mapped_column(Time, nullable=False, default=DEFAULT_CHECK_OUT_END)
    is_working_day: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

    __table_args__ = (
        CheckConstraint("day_of_week >= 0 AND day_of_week <= 6", name="ck_schedule_day_of_week"),
    )
