"""관리자 API 라우터 패키지 — 모든 관리자 엔드포인트 통합.

Admin API Router package — Aggregates all admin-facing endpoints
into a single router for inclusion in the FastAPI application.

Included routers:
    - schedule: 주간 근무 스케줄 (Weekly check-in/out windows)
    - attendances: 근태 기록 조회/내보내기 (Attendance listing and export)
    - leave_requests: 휴가 승인/반려/복구 (Leave review and repair)
    - dashboard: 근태 집계 (Daily summary and weekly rate)
    - notifications: 관리자 알림 및 공지 발송 (Admin inbox and broadcast)
"""

from fastapi import APIRouter

from attendance_hub.api.admin.attendances import router as attendances_router
from attendance_hub.api.admin.dashboard import router as dashboard_router
from attendance_hub.api.admin.leave_requests import router as leave_requests_router
from attendance_hub.api.admin.notifications import router as notifications_router
from attendance_hub.api.admin.schedule import router as schedule_router

admin_router: APIRouter = APIRouter()

admin_router.include_router(schedule_router, prefix="/schedule", tags=["Schedule"])
admin_router.include_router(attendances_router, prefix="/attendances", tags=["Attendances"])
admin_router.include_router(leave_requests_router, prefix="/leave-requests", tags=["Leave Requests"])
# 대시보드: /dashboard 하위 (Dashboard aggregation APIs)
admin_router.include_router(dashboard_router, prefix="/dashboard", tags=["Dashboard"])
admin_router.include_router(notifications_router, prefix="/notifications", tags=["Admin Notifications"])
