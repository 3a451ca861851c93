"""관리자 휴가 라우터 — 휴가 신청 검토 및 복구 API.

Admin Leave Request Router — Review, approve, and decline leave requests,
and repair approved requests whose leave days were only partly written.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from attendance_hub.api.deps import require_admin
from attendance_hub.database import get_db
from attendance_hub.models.leave import LeaveRequest
from attendance_hub.models.user import User
from attendance_hub.schemas.common import PaginatedResponse
from attendance_hub.schemas.leave import (
    IncompleteLeaveSpan,
    LeaveApprovalResponse,
    LeaveRequestResponse,
)
from attendance_hub.services.leave_service import MaterializationResult, leave_service

router: APIRouter = APIRouter()


@router.get("", response_model=PaginatedResponse)
async def list_leave_requests(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
    status: Annotated[str | None, Query()] = None,
    user_id: Annotated[UUID | None, Query()] = None,
    page: int = 1,
    per_page: int = 20,
) -> dict:
    """휴가 신청 목록을 조회합니다.

    List leave requests, newest first, optionally filtered by status
    (pending | approved | declined) or employee.

    Args:
        db: 비동기 데이터베이스 세션 (Async database session)
        current_user: 인증된 관리자 (Authenticated admin)
        status: 상태 필터, 선택 (Optional status filter)
        user_id: 직원 필터, 선택 (Optional employee filter)
        page: 페이지 번호 (Page number)
        per_page: 페이지당 항목 수 (Items per page)

    Returns:
        dict: 페이지네이션된 휴가 신청 목록 (Paginated leave requests)
    """
    requests, total = await leave_service.list_requests(db, user_id, status, page, per_page)
    return {
        "items": await leave_service.build_responses(db, requests),
        "total": total,
        "page": page,
        "per_page": per_page,
    }


@router.get("/incomplete", response_model=list[IncompleteLeaveSpan])
async def list_incomplete_leave_spans(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> list[dict]:
    """기록이 누락된 승인 휴가 목록 (Approved requests missing leave days)."""
    return await leave_service.find_incomplete_spans(db)


@router.get("/{leave_request_id}", response_model=LeaveRequestResponse)
async def get_leave_request(
    leave_request_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> dict:
    leave: LeaveRequest = await leave_service.get_request(db, leave_request_id)
    return await leave_service.build_response(db, leave)


@router.post("/{leave_request_id}/approve", response_model=LeaveApprovalResponse)
async def approve_leave_request(
    leave_request_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> dict:
    """휴가를 승인합니다.

    Approve a pending request and write one ``leave`` record per day of the
    span. Each step commits on its own; a day that cannot be written stops
    the remaining days and the call answers 409 with per-day outcomes while
    the approval stays in place.

    Args:
        leave_request_id: 휴가 신청 UUID (Leave request UUID)
        db: 비동기 데이터베이스 세션 (Async database session)
        current_user: 인증된 관리자 (Authenticated admin)

    Returns:
        dict: 승인 결과 (Approved request and per-day outcomes)
    """
    approver_id: UUID = current_user.id
    leave, result = await leave_service.approve(db, leave_request_id, approver_id)
    return await _approval_response(db, leave, result)


@router.post("/{leave_request_id}/decline", response_model=LeaveRequestResponse)
async def decline_leave_request(
    leave_request_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> dict:
    """휴가를 반려합니다 (Decline a pending request; no attendance changes)."""
    leave: LeaveRequest = await leave_service.decline(db, leave_request_id, current_user.id)
    return await leave_service.build_response(db, leave)


@router.post("/{leave_request_id}/repair", response_model=LeaveApprovalResponse)
async def repair_leave_request(
    leave_request_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> dict:
    """승인된 휴가의 누락된 날짜를 기록합니다.

    Write the missing leave days of an approved request. Days that already
    have a record are not touched; days taken by a check-in come back as
    ``conflict``.
    """
    result: MaterializationResult = await leave_service.repair(db, leave_request_id)
    leave: LeaveRequest = await leave_service.get_request(db, leave_request_id)
    return await _approval_response(db, leave, result)


async def _approval_response(db: AsyncSession, leave: LeaveRequest, result: MaterializationResult) -> dict:
    return {
        "leave_request": await leave_service.build_response(db, leave),
        "created_days": result.created_count,
        "outcomes": result.as_dicts(),
    }
