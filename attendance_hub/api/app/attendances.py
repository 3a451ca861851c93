"""앱 근태 라우터 — 내 출퇴근 API.

App Attendance Router — Check-in, check-out, today's record,
and my attendance history.
"""

from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from attendance_hub.api.deps import get_current_user
from attendance_hub.database import get_db
from attendance_hub.models.attendance import AttendanceRecord
from attendance_hub.models.user import User
from attendance_hub.schemas.attendance import AttendanceResponse
from attendance_hub.schemas.common import PaginatedResponse
from attendance_hub.services.attendance_service import attendance_service

router: APIRouter = APIRouter()


@router.post("/check-in", response_model=AttendanceResponse, status_code=201)
async def check_in(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> dict:
    """출근을 기록합니다.

    Record today's check-in. The status (present/late) is decided against
    today's schedule at this moment and never recomputed.

    Args:
        db: 비동기 데이터베이스 세션 (Async database session)
        current_user: 인증된 사용자 (Authenticated user)

    Returns:
        dict: 생성된 근태 기록 (Created attendance record)
    """
    record: AttendanceRecord = await attendance_service.check_in(db, current_user.id)
    await db.commit()
    return await attendance_service.build_response(db, record)


@router.post("/check-out", response_model=AttendanceResponse)
async def check_out(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> dict:
    """퇴근을 기록합니다 (Set check-out on today's record)."""
    record: AttendanceRecord = await attendance_service.check_out(db, current_user.id)
    await db.commit()
    return await attendance_service.build_response(db, record)


@router.get("/today", response_model=AttendanceResponse | None)
async def get_my_today_attendance(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> dict | None:
    record: AttendanceRecord | None = await attendance_service.get_today(db, current_user.id)
    return await attendance_service.build_response(db, record) if record else None


@router.get("", response_model=PaginatedResponse)
async def list_my_attendances(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
    date_from: Annotated[date | None, Query()] = None,
    date_to: Annotated[date | None, Query()] = None,
    page: int = 1,
    per_page: int = 20,
) -> dict:
    """내 근태 기록 목록 (My attendance history, newest first)."""
    records, total = await attendance_service.list_attendances(
        db,
        user_id=current_user.id,
        date_from=date_from,
        date_to=date_to,
        page=page,
        per_page=per_page,
    )
    return {
        "items": await attendance_service.build_responses(db, records),
        "total": total,
        "page": page,
        "per_page": per_page,
    }
