"""관리자 대시보드 라우터 — 근태 집계 API.

Admin Dashboard Router — Daily status breakdown, weekly attendance rate,
and a combined summary. Read-only.
"""

from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from attendance_hub.api.deps import require_admin
from attendance_hub.database import get_db
from attendance_hub.models.user import User
from attendance_hub.schemas.dashboard import (
    DailySummaryResponse,
    DashboardSummaryResponse,
    WeeklyRateResponse,
)
from attendance_hub.services.dashboard_service import dashboard_service

router: APIRouter = APIRouter()


@router.get("/daily-summary", response_model=DailySummaryResponse)
async def get_daily_summary(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
    day: Annotated[date | None, Query(alias="date")] = None,
) -> dict:
    """일일 근태 현황 (Present / late / on leave / absent for one day)."""
    return await dashboard_service.daily_summary(db, day)


@router.get("/weekly-rate", response_model=WeeklyRateResponse)
async def get_weekly_rate(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
    day: Annotated[date | None, Query(alias="date")] = None,
    use_schedule: bool | None = None,
) -> dict:
    """주간 출근율을 조회합니다.

    Attendance rate for the Monday-start week containing ``date``
    (default: today).

    Args:
        db: 비동기 데이터베이스 세션 (Async database session)
        current_user: 인증된 관리자 (Authenticated admin)
        day: 주 안의 임의 날짜 (Any date within the week)
        use_schedule: 스케줄 기반 분모 사용 여부, 미지정 시 설정값
                      (Schedule-based divisor; defaults to the setting)

    Returns:
        dict: 주간 출근율 (Weekly rate breakdown)
    """
    return await dashboard_service.weekly_rate(db, day, use_schedule)


@router.get("/summary", response_model=DashboardSummaryResponse)
async def get_summary(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
    day: Annotated[date | None, Query(alias="date")] = None,
) -> dict:
    return await dashboard_service.summary(db, day)
