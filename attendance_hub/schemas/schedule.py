"""요일별 스케줄 Pydantic 스키마 정의.

Weekly schedule request/response schemas.
Times are plain local ``HH:MM[:SS]`` values without a timezone.
"""

from datetime import time

from pydantic import BaseModel, Field


class ScheduleDayResponse(BaseModel):
    """요일 스케줄 응답 스키마.

    Attributes:
        day_of_week: 요일 — 0=일요일 (Weekday index, 0=Sunday)
        day_name: 요일 이름 (Weekday name)
        check_in_start: 출근 시작 (Check-in window start)
        check_in_end: 출근 마감 (Later check-ins are late)
        check_out_start: 퇴근 시작 (Check-out window start)
        check_out_end: 퇴근 마감 (Check-out window end)
        is_working_day: 근무일 여부 (Working-day flag)
    """

    day_of_week: int
    day_name: str
    check_in_start: time
    check_in_end: time
    check_out_start: time
    check_out_end: time
    is_working_day: bool


class ScheduleDayUpdate(BaseModel):
    """요일 스케줄 수정 항목 — 지정한 필드만 변경 (Only provided fields change)."""

    day_of_week: int = Field(..., ge=0, le=6)
    check_in_start: time | None = None
    check_in_end: time | None = None
    check_out_start: time | None = None
    check_out_end: time | None = None
    is_working_day: bool | None = None


class ScheduleBulkUpdate(BaseModel):
    days: list[ScheduleDayUpdate] = Field(..., min_length=1, max_length=7)  # 수정할 요일 목록 (Days to update)
