"""관리자 스케줄 라우터 — 주간 근무 스케줄 API.

Admin Schedule Router — View and bulk-update the seven weekday rows.
"""

from typing import Annotated, Sequence

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from attendance_hub.api.deps import require_admin
from attendance_hub.database import get_db
from attendance_hub.models.schedule import ScheduleDay
from attendance_hub.models.user import User
from attendance_hub.schemas.schedule import ScheduleBulkUpdate, ScheduleDayResponse
from attendance_hub.services.schedule_service import schedule_service

router: APIRouter = APIRouter()


@router.get("", response_model=list[ScheduleDayResponse])
async def get_schedule(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> list[dict]:
    """주간 스케줄을 조회합니다 (Whole week, Sunday first)."""
    week: Sequence[ScheduleDay] = await schedule_service.list_schedule(db)
    return [schedule_service.build_response(day) for day in week]


@router.put("", response_model=list[ScheduleDayResponse])
async def update_schedule(
    data: ScheduleBulkUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> list[dict]:
    """여러 요일 스케줄을 한 번에 수정합니다.

    Bulk-update weekday rows. Later check-ins are classified against the
    new windows; existing records keep their status.

    Args:
        data: 요일별 변경 사항 (Per-weekday changes)
        db: 비동기 데이터베이스 세션 (Async database session)
        current_user: 인증된 관리자 (Authenticated admin)

    Returns:
        list[dict]: 수정 후 주간 스케줄 (Week after update)
    """
    week: Sequence[ScheduleDay] = await schedule_service.bulk_update(
        db, [day.model_dump() for day in data.days]
    )
    await db.commit()
    return [schedule_service.build_response(day) for day in week]
