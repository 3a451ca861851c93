"""대시보드 Pydantic 스키마 정의.

Dashboard aggregation response schemas.
"""

from datetime import date

from pydantic import BaseModel


class DailySummaryResponse(BaseModel):
    """일일 근태 현황 (One local day's status breakdown).

    ``absent`` = max(0, total_employees − records that day).
    """

    work_date: date
    present: int
    late: int
    on_leave: int
    absent: int
    total_employees: int


class WeeklyRateResponse(BaseModel):
    """주간 출근율 (Monday-start week attendance rate, integer percent)."""

    week_start: date
    week_end: date
    attended: int  # present + late 기록 수 (Present and late records)
    expected: int  # 활성 인원 × 근무일 (Active users × working days)
    rate: int


class DashboardSummaryResponse(DailySummaryResponse):
    weekly_rate: int
    pending_leave_requests: int
