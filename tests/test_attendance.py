"""출퇴근 및 근태 조회 테스트.

Attendance tests — check-in classification against the schedule,
one-record-per-day, check-out rules, admin listing and export.
"""

from datetime import date, datetime, timedelta, timezone
from io import BytesIO

import pytest
from httpx import AsyncClient
from openpyxl import load_workbook
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from attendance_hub.models.attendance import AttendanceRecord
from attendance_hub.services.attendance_service import EXPORT_HEADERS, attendance_service
from attendance_hub.utils.exceptions import BadRequestError, DuplicateError, NotFoundError
from tests.conftest import auth_header, create_attendance, create_user

CHECK_IN_URL = "/api/v1/app/my/attendance/check-in"
CHECK_OUT_URL = "/api/v1/app/my/attendance/check-out"
TODAY_URL = "/api/v1/app/my/attendance/today"
MY_ATTENDANCE_URL = "/api/v1/app/my/attendance"
ADMIN_ATTENDANCE_URL = "/api/v1/admin/attendances"

WEDNESDAY = date(2024, 1, 10)


def _wed(hour: int, minute: int) -> datetime:
    return datetime(2024, 1, 10, hour, minute, tzinfo=timezone.utc)


class TestCheckInService:
    """출근 서비스 테스트."""

    async def test_on_time_check_in_is_present(self, db: AsyncSession, schedule, employee_user):
        """09:30 정각 출근은 정상."""
        record = await attendance_service.check_in(db, employee_user.id, now=_wed(9, 30))
        await db.commit()
        assert record.status == "present"
        assert record.work_date == WEDNESDAY

    async def test_after_deadline_is_late(self, db: AsyncSession, schedule, employee_user):
        """09:31 출근은 지각."""
        record = await attendance_service.check_in(db, employee_user.id, now=_wed(9, 31))
        await db.commit()
        assert record.status == "late"

    async def test_missing_schedule_is_present(self, db: AsyncSession, employee_user):
        """스케줄이 없으면 늦은 시각이라도 정상."""
        record = await attendance_service.check_in(db, employee_user.id, now=_wed(15, 0))
        await db.commit()
        assert record.status == "present"

    async def test_second_check_in_same_day_rejected(self, db: AsyncSession, schedule, employee_user):
        """같은 날 두 번째 출근은 거부."""
        user_id = employee_user.id
        await attendance_service.check_in(db, user_id, now=_wed(9, 0))
        await db.commit()

        with pytest.raises(DuplicateError):
            await attendance_service.check_in(db, user_id, now=_wed(12, 0))

        count = (await db.execute(
            select(func.count()).select_from(AttendanceRecord).where(AttendanceRecord.user_id == user_id)
        )).scalar()
        assert count == 1

    async def test_next_day_check_in_allowed(self, db: AsyncSession, schedule, employee_user):
        await attendance_service.check_in(db, employee_user.id, now=_wed(9, 0))
        await db.commit()
        record = await attendance_service.check_in(db, employee_user.id, now=_wed(9, 0) + timedelta(days=1))
        await db.commit()
        assert record.work_date == date(2024, 1, 11)


class TestCheckOutService:
    """퇴근 서비스 테스트."""

    async def test_check_out_sets_time(self, db: AsyncSession, schedule, employee_user):
        await attendance_service.check_in(db, employee_user.id, now=_wed(9, 0))
        await db.commit()
        record = await attendance_service.check_out(db, employee_user.id, now=_wed(17, 45))
        await db.commit()
        response = await attendance_service.build_response(db, record)
        assert response["duration"] == "8h 45m"
        assert response["duration_minutes"] == 525

    async def test_clock_skew_is_clamped(self, db: AsyncSession, schedule, employee_user):
        """퇴근 시각이 출근보다 이르면 출근 시각으로 보정."""
        await attendance_service.check_in(db, employee_user.id, now=_wed(9, 0))
        await db.commit()
        record = await attendance_service.check_out(db, employee_user.id, now=_wed(8, 59))
        await db.commit()
        response = await attendance_service.build_response(db, record)
        assert response["duration_minutes"] == 0

    async def test_check_out_without_check_in(self, db: AsyncSession, employee_user):
        with pytest.raises(NotFoundError):
            await attendance_service.check_out(db, employee_user.id, now=_wed(17, 0))

    async def test_double_check_out_rejected(self, db: AsyncSession, schedule, employee_user):
        await attendance_service.check_in(db, employee_user.id, now=_wed(9, 0))
        await attendance_service.check_out(db, employee_user.id, now=_wed(17, 0))
        await db.commit()
        with pytest.raises(BadRequestError):
            await attendance_service.check_out(db, employee_user.id, now=_wed(18, 0))

    async def test_cannot_check_out_on_leave_day(self, db: AsyncSession, employee_user):
        """휴가일에는 퇴근 불가."""
        await create_attendance(db, employee_user.id, WEDNESDAY, "leave",
                                check_in=datetime(2024, 1, 10, tzinfo=timezone.utc))
        with pytest.raises(BadRequestError):
            await attendance_service.check_out(db, employee_user.id, now=_wed(17, 0))


class TestAppAttendanceApi:
    """앱 출퇴근 API 테스트."""

    async def test_check_in_and_out(self, client: AsyncClient, schedule, employee_token):
        res = await client.post(CHECK_IN_URL, headers=auth_header(employee_token))
        assert res.status_code == 201
        data = res.json()
        assert data["status"] in ("present", "late")
        assert data["check_out"] is None
        assert data["user_name"] == "Test Employee"

        res = await client.get(TODAY_URL, headers=auth_header(employee_token))
        assert res.status_code == 200
        assert res.json()["id"] == data["id"]

        res = await client.post(CHECK_OUT_URL, headers=auth_header(employee_token))
        assert res.status_code == 200
        assert res.json()["check_out"] is not None

    async def test_duplicate_check_in_conflict(self, client: AsyncClient, schedule, employee_token):
        """두 번째 출근 요청은 409."""
        res = await client.post(CHECK_IN_URL, headers=auth_header(employee_token))
        assert res.status_code == 201
        res = await client.post(CHECK_IN_URL, headers=auth_header(employee_token))
        assert res.status_code == 409

    async def test_today_empty(self, client: AsyncClient, employee_token):
        res = await client.get(TODAY_URL, headers=auth_header(employee_token))
        assert res.status_code == 200
        assert res.json() is None

    async def test_history_only_mine(self, client: AsyncClient, db: AsyncSession, employee_user, employee_token):
        other = await create_user(db, "Other Employee")
        await create_attendance(db, employee_user.id, WEDNESDAY, "present")
        await create_attendance(db, other.id, WEDNESDAY, "late")

        res = await client.get(MY_ATTENDANCE_URL, headers=auth_header(employee_token))
        assert res.status_code == 200
        data = res.json()
        assert data["total"] == 1
        assert data["items"][0]["status"] == "present"

    async def test_requires_token(self, client: AsyncClient):
        res = await client.post(CHECK_IN_URL)
        assert res.status_code in (401, 403)

    async def test_invalid_token(self, client: AsyncClient):
        res = await client.post(CHECK_IN_URL, headers=auth_header("not-a-jwt"))
        assert res.status_code == 401


class TestAdminAttendanceApi:
    """관리자 근태 API 테스트."""

    async def test_list_with_filters(self, client: AsyncClient, db: AsyncSession, admin_token, employee_user):
        await create_attendance(db, employee_user.id, date(2024, 1, 9), "present")
        await create_attendance(db, employee_user.id, WEDNESDAY, "late")
        await create_attendance(db, employee_user.id, date(2024, 1, 11), "present")

        res = await client.get(
            ADMIN_ATTENDANCE_URL,
            params={"date_from": "2024-01-10", "date_to": "2024-01-11"},
            headers=auth_header(admin_token),
        )
        assert res.status_code == 200
        data = res.json()
        assert data["total"] == 2
        # 최신순 정렬
        assert [item["work_date"] for item in data["items"]] == ["2024-01-11", "2024-01-10"]

        res = await client.get(ADMIN_ATTENDANCE_URL, params={"status": "late"}, headers=auth_header(admin_token))
        assert res.json()["total"] == 1

    async def test_detail_not_found(self, client: AsyncClient, admin_token):
        res = await client.get(
            f"{ADMIN_ATTENDANCE_URL}/00000000-0000-0000-0000-000000000000",
            headers=auth_header(admin_token),
        )
        assert res.status_code == 404

    async def test_employee_forbidden(self, client: AsyncClient, employee_token):
        res = await client.get(ADMIN_ATTENDANCE_URL, headers=auth_header(employee_token))
        assert res.status_code == 403

    async def test_export_excel(self, client: AsyncClient, db: AsyncSession, admin_token, employee_user):
        """Excel 내보내기 — 헤더와 행 확인."""
        await create_attendance(
            db, employee_user.id, WEDNESDAY, "present",
            check_in=_wed(9, 0), check_out=_wed(17, 30),
        )
        res = await client.get(f"{ADMIN_ATTENDANCE_URL}/export", headers=auth_header(admin_token))
        assert res.status_code == 200
        assert "spreadsheetml" in res.headers["content-type"]

        ws = load_workbook(BytesIO(res.content)).active
        rows = list(ws.iter_rows(values_only=True))
        assert list(rows[0]) == EXPORT_HEADERS
        assert rows[1][0] == "Test Employee"
        assert rows[1][2] == "2024-01-10"
        assert rows[1][5] == "8h 30m"
        assert rows[1][6] == "Present"
