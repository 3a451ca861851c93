"""관리자 근태 라우터 — 근태 기록 조회 및 내보내기 API.

Admin Attendance Router — List, detail, and spreadsheet export of
attendance records across all employees.
"""

from datetime import date
from io import BytesIO
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from fastapi.responses import StreamingResponse
from sqlalchemy.ext.asyncio import AsyncSession

from attendance_hub.api.deps import require_admin
from attendance_hub.database import get_db
from attendance_hub.models.user import User
from attendance_hub.schemas.attendance import AttendanceResponse
from attendance_hub.schemas.common import PaginatedResponse
from attendance_hub.services.attendance_service import attendance_service

router: APIRouter = APIRouter()


@router.get("", response_model=PaginatedResponse)
async def list_attendances(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
    user_id: Annotated[UUID | None, Query()] = None,
    date_from: Annotated[date | None, Query()] = None,
    date_to: Annotated[date | None, Query()] = None,
    status: Annotated[str | None, Query()] = None,
    page: int = 1,
    per_page: int = 20,
) -> dict:
    """근태 기록 목록을 필터링하여 조회합니다.

    List attendance records with optional filters.

    Args:
        db: 비동기 데이터베이스 세션 (Async database session)
        current_user: 인증된 관리자 (Authenticated admin)
        user_id: 직원 UUID 필터, 선택 (Optional employee filter)
        date_from: 시작일, 선택 (Optional range start)
        date_to: 종료일, 선택 (Optional range end)
        status: 상태 필터, 선택 (Optional status filter)
        page: 페이지 번호 (Page number)
        per_page: 페이지당 항목 수 (Items per page)

    Returns:
        dict: 페이지네이션된 근태 목록 (Paginated attendance list)
    """
    records, total = await attendance_service.list_attendances(
        db,
        user_id=user_id,
        date_from=date_from,
        date_to=date_to,
        status=status,
        page=page,
        per_page=per_page,
    )
    return {
        "items": await attendance_service.build_responses(db, records),
        "total": total,
        "page": page,
        "per_page": per_page,
    }


@router.get("/export")
async def export_attendances(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
    user_id: Annotated[UUID | None, Query()] = None,
    date_from: Annotated[date | None, Query()] = None,
    date_to: Annotated[date | None, Query()] = None,
    status: Annotated[str | None, Query()] = None,
) -> StreamingResponse:
    """근태 기록을 Excel 파일로 내보냅니다 (Download filtered records as .xlsx)."""
    content: bytes = await attendance_service.export_excel(db, user_id, date_from, date_to, status)
    filename: str = f"attendance_{date_from or 'all'}_{date_to or 'all'}.xlsx"
    return StreamingResponse(
        BytesIO(content),
        media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )


@router.get("/{attendance_id}", response_model=AttendanceResponse)
async def get_attendance(
    attendance_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> dict:
    record = await attendance_service.get_attendance(db, attendance_id)
    return await attendance_service.build_response(db, record)
