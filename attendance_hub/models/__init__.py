"""SQLAlchemy ORM 모델 패키지 — 모든 도메인 모델의 중앙 임포트 지점.

SQLAlchemy ORM models package — Central import point for all domain models.
Importing from this package registers every model with the SQLAlchemy
metadata, which is required for Alembic migrations and ``create_all``.

Modules:
    user: 사용자 프로필 및 역할 (User profiles and roles)
    schedule: 요일별 출퇴근 스케줄 (Weekly schedule)
    leave: 휴가 신청 (Leave requests)
    attendance: 근태 기록 (Attendance records)
    notification: 알림 (User notifications)
"""

from attendance_hub.models.user import User
from attendance_hub.models.schedule import ScheduleDay
from attendance_hub.models.leave import LeaveRequest
from attendance_hub.models.attendance import AttendanceRecord
from attendance_hub.models.notification import Notification

__all__ = [
    "User",
    "ScheduleDay",
    "LeaveRequest",
    "AttendanceRecord",
    "Notification",
]
