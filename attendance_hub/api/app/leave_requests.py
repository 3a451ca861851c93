"""앱 휴가 라우터 — 내 휴가 신청 API.

App Leave Request Router — Submit a leave request and view my requests.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from attendance_hub.api.deps import get_current_user
from attendance_hub.database import get_db
from attendance_hub.models.leave import LeaveRequest
from attendance_hub.models.user import User
from attendance_hub.schemas.common import PaginatedResponse
from attendance_hub.schemas.leave import LeaveRequestCreate, LeaveRequestResponse
from attendance_hub.services.leave_service import leave_service

router: APIRouter = APIRouter()


@router.post("", response_model=LeaveRequestResponse, status_code=201)
async def submit_leave_request(
    data: LeaveRequestCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> dict:
    """휴가를 신청합니다.

    Submit a leave request; every active admin is notified.

    Args:
        data: 휴가 신청 데이터 (Leave request data)
        db: 비동기 데이터베이스 세션 (Async database session)
        current_user: 인증된 사용자 (Authenticated user)

    Returns:
        dict: 생성된 휴가 신청 (Created leave request, status pending)
    """
    leave: LeaveRequest = await leave_service.submit(
        db,
        user_id=current_user.id,
        start_date=data.start_date,
        end_date=data.end_date,
        reason=data.reason,
    )
    return await leave_service.build_response(db, leave)


@router.get("", response_model=PaginatedResponse)
async def list_my_leave_requests(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
    status: Annotated[str | None, Query()] = None,
    page: int = 1,
    per_page: int = 20,
) -> dict:
    requests, total = await leave_service.list_requests(db, current_user.id, status, page, per_page)
    return {
        "items": await leave_service.build_responses(db, requests),
        "total": total,
        "page": page,
        "per_page": per_page,
    }
