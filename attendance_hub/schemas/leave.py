"""휴가 신청 Pydantic 스키마 정의.

Leave request request/response schemas, including the per-day outcome
of materializing an approved request into attendance records.
"""

from datetime import date, datetime

from pydantic import BaseModel, Field, model_validator


class LeaveRequestCreate(BaseModel):
    """휴가 신청 요청 스키마.

    Attributes:
        start_date: 시작일, 포함 (Inclusive start date)
        end_date: 종료일, 포함 (Inclusive end date)
        reason: 사유, 선택 (Optional reason)
    """

    start_date: date
    end_date: date
    reason: str | None = Field(None, max_length=1000)

    @model_validator(mode="after")
    def check_order(self) -> "LeaveRequestCreate":
        if self.start_date > self.end_date:
            raise ValueError("start_date must not be after end_date")
        return self


class LeaveRequestResponse(BaseModel):
    """휴가 신청 응답 스키마 (Leave request with requester and approver names)."""

    id: str
    user_id: str
    user_name: str
    department: str = ""
    start_date: date
    end_date: date
    days: int  # 달력일 수 (Calendar days in the span)
    reason: str | None = None
    status: str  # pending | approved | declined
    approved_by: str | None = None
    approved_by_name: str | None = None
    approved_at: datetime | None = None
    created_at: datetime


class DayOutcomeResponse(BaseModel):
    work_date: date
    outcome: str  # created | failed | not_attempted | conflict
    error: str | None = None


class LeaveApprovalResponse(BaseModel):
    """휴가 승인/복구 결과 — 신청 정보와 일자별 기록 결과.

    Approval (or repair) result: the request plus every day's outcome.
    """

    leave_request: LeaveRequestResponse
    created_days: int
    outcomes: list[DayOutcomeResponse]


class IncompleteLeaveSpan(BaseModel):
    """기록이 누락된 승인 휴가 (Approved request with missing leave days)."""

    leave_request_id: str
    user_id: str
    start_date: date
    end_date: date
    missing_dates: list[date]  # 기록 가능한 누락 날짜 (Writable gaps)
    conflict_dates: list[date] = []  # 출근 기록이 있는 날짜 (Days taken by a check-in)
