"""앱 스케줄 라우터 — 오늘의 근무 스케줄 API.

App Schedule Router — Today's check-in/out windows for the employee UI.
"""

from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from attendance_hub.api.deps import get_current_user
from attendance_hub.database import get_db
from attendance_hub.models.schedule import ScheduleDay
from attendance_hub.models.user import User
from attendance_hub.schemas.schedule import ScheduleDayResponse
from attendance_hub.services.schedule_service import schedule_service
from attendance_hub.utils.local_time import local_date, now_utc

router: APIRouter = APIRouter()


@router.get("/today", response_model=ScheduleDayResponse | None)
async def get_today_schedule(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> dict | None:
    """오늘 요일의 스케줄 — 설정되지 않았으면 null (None when unconfigured)."""
    today: date = local_date(now_utc())
    schedule: ScheduleDay | None = await schedule_service.resolve(db, today)
    return schedule_service.build_response(schedule) if schedule else None
