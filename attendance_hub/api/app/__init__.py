"""앱 API 라우터 패키지 — 모든 앱(직원용) 엔드포인트 통합.

App API Router package — Aggregates all app-facing (employee) endpoints
into a single router for inclusion in the FastAPI application.

Included routers:
    - attendances: 내 출퇴근 (Check-in/out, today, history)
    - leave_requests: 내 휴가 신청 (Submit and view my leave)
    - notifications: 내 알림 (My notifications)
    - schedule: 오늘의 스케줄 (Today's windows)
"""

from fastapi import APIRouter

from attendance_hub.api.app.attendances import router as attendance_router
from attendance_hub.api.app.leave_requests import router as leave_requests_router
from attendance_hub.api.app.notifications import router as notifications_router
from attendance_hub.api.app.schedule import router as schedule_router

app_router: APIRouter = APIRouter()

app_router.include_router(attendance_router, prefix="/my/attendance", tags=["My Attendance"])
app_router.include_router(leave_requests_router, prefix="/my/leave-requests", tags=["My Leave Requests"])
app_router.include_router(notifications_router, prefix="/my/notifications", tags=["My Notifications"])
app_router.include_router(schedule_router, prefix="/schedule", tags=["Schedule"])
