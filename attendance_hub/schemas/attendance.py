"""근태 기록 Pydantic 스키마 정의.

Attendance record response schemas.
"""

from datetime import date, datetime

from pydantic import BaseModel


class AttendanceResponse(BaseModel):
    """근태 기록 응답 스키마.

    Attendance record response with resolved employee name and the
    worked duration (floored to whole minutes, None while in progress).

    Attributes:
        id: 근태 UUID (Record identifier)
        user_id: 직원 UUID (Employee identifier)
        user_name: 직원 이름 (Employee display name)
        department: 부서 (Department)
        work_date: 로컬 근무일 (Local work date)
        check_in: 출근 시각 UTC (Check-in instant)
        check_out: 퇴근 시각 UTC (Check-out instant, nullable)
        status: 상태 — present | late | leave
        notes: 메모 (Notes)
        leave_request_id: 휴가 신청 UUID (Source leave request, nullable)
        duration_minutes: 근무 분 (Worked minutes, nullable)
        duration: 표시용 근무 시간 "Xh Ym" (Display duration, nullable)
    """

    id: str
    user_id: str
    user_name: str
    department: str = ""
    work_date: date
    check_in: datetime
    check_out: datetime | None = None
    status: str  # present | late | leave
    notes: str | None = None
    leave_request_id: str | None = None
    duration_minutes: int | None = None
    duration: str | None = None
    created_at: datetime
