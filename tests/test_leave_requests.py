"""휴가 신청 및 승인 테스트.

Leave tests — submission, approval materializing one leave record per day,
single-decision rule, decline, partial failure reporting, and read-repair.
"""

from datetime import date, datetime, timezone

import pytest
from httpx import AsyncClient
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from attendance_hub.config import settings
from attendance_hub.models.attendance import AttendanceRecord
from attendance_hub.models.leave import LeaveRequest
from attendance_hub.models.notification import Notification
from attendance_hub.repositories.leave_repository import leave_request_repository
from attendance_hub.services.leave_service import leave_service
from attendance_hub.utils.exceptions import BadRequestError
from tests.conftest import auth_header, create_attendance

APP_LEAVE_URL = "/api/v1/app/my/leave-requests"
ADMIN_LEAVE_URL = "/api/v1/admin/leave-requests"


async def _leave_records(db: AsyncSession, user_id) -> list[AttendanceRecord]:
    result = await db.execute(
        select(AttendanceRecord)
        .where(AttendanceRecord.user_id == user_id, AttendanceRecord.status == "leave")
        .order_by(AttendanceRecord.work_date)
    )
    return list(result.scalars().all())


async def _notifications(db: AsyncSession, user_id) -> list[Notification]:
    result = await db.execute(select(Notification).where(Notification.user_id == user_id))
    return list(result.scalars().all())


class TestSubmitLeave:
    """휴가 신청 테스트."""

    async def test_submit_notifies_admins(
        self, client: AsyncClient, db: AsyncSession, admin_user, employee_token
    ):
        """신청 시 관리자에게 알림 생성."""
        admin_id = admin_user.id
        res = await client.post(
            APP_LEAVE_URL,
            json={"start_date": "2024-01-10", "end_date": "2024-01-12", "reason": "Family trip"},
            headers=auth_header(employee_token),
        )
        assert res.status_code == 201
        data = res.json()
        assert data["status"] == "pending"
        assert data["days"] == 3

        notes = await _notifications(db, admin_id)
        assert len(notes) == 1
        assert notes[0].title == "New Leave Request"
        assert notes[0].type == "warning"
        assert notes[0].related_type == "leave"
        assert str(notes[0].related_id) == data["id"]
        assert notes[0].message == (
            "**Test Employee** has requested leave from 2024-01-10 to 2024-01-12. Reason: Family trip"
        )

    async def test_submit_rejects_reversed_range(self, client: AsyncClient, employee_token):
        res = await client.post(
            APP_LEAVE_URL,
            json={"start_date": "2024-01-12", "end_date": "2024-01-10"},
            headers=auth_header(employee_token),
        )
        assert res.status_code == 422

    async def test_service_rejects_reversed_range(self, db: AsyncSession, employee_user):
        with pytest.raises(BadRequestError):
            await leave_service.submit(db, employee_user.id, date(2024, 1, 12), date(2024, 1, 10))

    async def test_list_my_requests(self, client: AsyncClient, db: AsyncSession, employee_user, employee_token):
        await leave_service.submit(db, employee_user.id, date(2024, 1, 10), date(2024, 1, 10))
        await leave_service.submit(db, employee_user.id, date(2024, 2, 1), date(2024, 2, 2))

        res = await client.get(APP_LEAVE_URL, headers=auth_header(employee_token))
        assert res.status_code == 200
        assert res.json()["total"] == 2


class TestApproveLeave:
    """휴가 승인 테스트."""

    async def test_approve_creates_one_record_per_day(
        self, client: AsyncClient, db: AsyncSession, admin_user, admin_token, employee_user
    ):
        """01-10 ~ 01-12 승인 시 leave 기록 3개 생성."""
        employee_id = employee_user.id
        leave = await leave_service.submit(db, employee_id, date(2024, 1, 10), date(2024, 1, 12), "Family trip")
        leave_id = leave.id

        res = await client.post(f"{ADMIN_LEAVE_URL}/{leave_id}/approve", headers=auth_header(admin_token))
        assert res.status_code == 200
        data = res.json()
        assert data["created_days"] == 3
        assert data["leave_request"]["status"] == "approved"
        assert data["leave_request"]["approved_by_name"] == "Test Admin"

        records = await _leave_records(db, employee_id)
        assert [r.work_date for r in records] == [date(2024, 1, 10), date(2024, 1, 11), date(2024, 1, 12)]
        for record in records:
            assert record.notes == "Approved leave: Family trip"
            assert record.leave_request_id == leave_id
            check_in = record.check_in.replace(tzinfo=timezone.utc) if record.check_in.tzinfo is None else record.check_in
            assert check_in == datetime(record.work_date.year, record.work_date.month, record.work_date.day,
                                        tzinfo=timezone.utc)

    async def test_approve_notifies_requester(
        self, client: AsyncClient, db: AsyncSession, admin_token, employee_user
    ):
        employee_id = employee_user.id
        leave = await leave_service.submit(db, employee_id, date(2024, 1, 10), date(2024, 1, 12))
        await client.post(f"{ADMIN_LEAVE_URL}/{leave.id}/approve", headers=auth_header(admin_token))

        notes = await _notifications(db, employee_id)
        assert len(notes) == 1
        assert notes[0].title == "Leave Request Approved"
        assert notes[0].type == "success"
        assert notes[0].message == "Your leave request from Jan 10 to Jan 12 has been approved."

    async def test_missing_reason_note(self, client: AsyncClient, db: AsyncSession, admin_token, employee_user):
        employee_id = employee_user.id
        leave = await leave_service.submit(db, employee_id, date(2024, 1, 10), date(2024, 1, 10))
        await client.post(f"{ADMIN_LEAVE_URL}/{leave.id}/approve", headers=auth_header(admin_token))

        records = await _leave_records(db, employee_id)
        assert records[0].notes == "Approved leave: No reason provided"

    async def test_second_approve_rejected(
        self, client: AsyncClient, db: AsyncSession, admin_token, employee_user
    ):
        """두 번째 승인은 400, 기록은 중복 생성되지 않음."""
        employee_id = employee_user.id
        leave = await leave_service.submit(db, employee_id, date(2024, 1, 10), date(2024, 1, 12))
        url = f"{ADMIN_LEAVE_URL}/{leave.id}/approve"

        assert (await client.post(url, headers=auth_header(admin_token))).status_code == 200
        assert (await client.post(url, headers=auth_header(admin_token))).status_code == 400
        assert len(await _leave_records(db, employee_id)) == 3

    async def test_conditional_transition_only_once(self, db: AsyncSession, admin_user, employee_user):
        """대기 상태 전이는 한 번만 성공."""
        leave = await leave_service.submit(db, employee_user.id, date(2024, 1, 10), date(2024, 1, 10))
        now = datetime.now(timezone.utc)
        first = await leave_request_repository.transition_from_pending(db, leave.id, "approved", admin_user.id, now)
        second = await leave_request_repository.transition_from_pending(db, leave.id, "declined", admin_user.id, now)
        assert (first, second) == (True, False)

    async def test_unknown_request(self, client: AsyncClient, admin_token):
        res = await client.post(
            f"{ADMIN_LEAVE_URL}/00000000-0000-0000-0000-000000000000/approve",
            headers=auth_header(admin_token),
        )
        assert res.status_code == 404

    async def test_employee_cannot_approve(
        self, client: AsyncClient, db: AsyncSession, employee_user, employee_token
    ):
        leave = await leave_service.submit(db, employee_user.id, date(2024, 1, 10), date(2024, 1, 10))
        res = await client.post(f"{ADMIN_LEAVE_URL}/{leave.id}/approve", headers=auth_header(employee_token))
        assert res.status_code == 403

    async def test_skip_non_working_days(
        self, client: AsyncClient, db: AsyncSession, schedule, admin_token, employee_user, monkeypatch
    ):
        """비근무일 제외 설정 시 주말에는 기록하지 않음."""
        monkeypatch.setattr(settings, "LEAVE_SKIP_NON_WORKING_DAYS", True)
        employee_id = employee_user.id
        # 금요일 ~ 월요일 (Friday to Monday)
        leave = await leave_service.submit(db, employee_id, date(2024, 1, 12), date(2024, 1, 15))

        res = await client.post(f"{ADMIN_LEAVE_URL}/{leave.id}/approve", headers=auth_header(admin_token))
        assert res.status_code == 200
        records = await _leave_records(db, employee_id)
        assert [r.work_date for r in records] == [date(2024, 1, 12), date(2024, 1, 15)]

    async def test_weekends_included_by_default(
        self, client: AsyncClient, db: AsyncSession, schedule, admin_token, employee_user
    ):
        employee_id = employee_user.id
        leave = await leave_service.submit(db, employee_id, date(2024, 1, 12), date(2024, 1, 15))
        await client.post(f"{ADMIN_LEAVE_URL}/{leave.id}/approve", headers=auth_header(admin_token))
        assert len(await _leave_records(db, employee_id)) == 4


class TestDeclineLeave:
    """휴가 반려 테스트."""

    async def test_decline_creates_no_records(
        self, client: AsyncClient, db: AsyncSession, admin_token, employee_user
    ):
        employee_id = employee_user.id
        leave = await leave_service.submit(db, employee_id, date(2024, 1, 10), date(2024, 1, 12))
        leave_id = leave.id

        res = await client.post(f"{ADMIN_LEAVE_URL}/{leave_id}/decline", headers=auth_header(admin_token))
        assert res.status_code == 200
        assert res.json()["status"] == "declined"
        assert res.json()["approved_by"] is not None

        assert await _leave_records(db, employee_id) == []
        notes = await _notifications(db, employee_id)
        assert [(n.title, n.type) for n in notes] == [("Leave Request Declined", "error")]

        # 반려 후 승인 불가 — decided requests are terminal
        res = await client.post(f"{ADMIN_LEAVE_URL}/{leave_id}/approve", headers=auth_header(admin_token))
        assert res.status_code == 400

    async def test_list_by_status(self, client: AsyncClient, db: AsyncSession, admin_token, employee_user):
        await leave_service.submit(db, employee_user.id, date(2024, 1, 10), date(2024, 1, 10))
        declined = await leave_service.submit(db, employee_user.id, date(2024, 1, 20), date(2024, 1, 20))
        await client.post(f"{ADMIN_LEAVE_URL}/{declined.id}/decline", headers=auth_header(admin_token))

        res = await client.get(ADMIN_LEAVE_URL, params={"status": "pending"}, headers=auth_header(admin_token))
        assert res.status_code == 200
        assert res.json()["total"] == 1
        assert res.json()["items"][0]["user_name"] == "Test Employee"


class TestPartialMaterialization:
    """휴가 기록 일부 실패 및 복구 테스트."""

    async def test_conflicting_day_stops_approval(
        self, client: AsyncClient, db: AsyncSession, admin_token, employee_user
    ):
        """중간 날짜에 출근 기록이 있으면 이후 날짜는 미처리, 승인은 유지."""
        employee_id = employee_user.id
        await create_attendance(db, employee_id, date(2024, 1, 11), "present")
        leave = await leave_service.submit(db, employee_id, date(2024, 1, 10), date(2024, 1, 12), "Trip")
        leave_id = leave.id

        res = await client.post(f"{ADMIN_LEAVE_URL}/{leave_id}/approve", headers=auth_header(admin_token))
        assert res.status_code == 409
        detail = res.json()["detail"]
        assert detail["leave_request_id"] == str(leave_id)
        assert [(o["work_date"], o["outcome"]) for o in detail["outcomes"]] == [
            ("2024-01-10", "created"),
            ("2024-01-11", "failed"),
            ("2024-01-12", "not_attempted"),
        ]

        status = (await db.execute(select(LeaveRequest.status).where(LeaveRequest.id == leave_id))).scalar()
        assert status == "approved"
        assert [r.work_date for r in await _leave_records(db, employee_id)] == [date(2024, 1, 10)]
        # 알림은 실패와 무관하게 발송
        assert [n.title for n in await _notifications(db, employee_id)] == ["Leave Request Approved"]

    async def test_repair_fills_days_around_check_in(
        self, client: AsyncClient, db: AsyncSession, admin_token, employee_user
    ):
        """출근 기록은 그대로 두고 그 이후 날짜를 복구."""
        employee_id = employee_user.id
        check_in = await create_attendance(db, employee_id, date(2024, 1, 11), "present")
        check_in_id = check_in.id
        leave = await leave_service.submit(db, employee_id, date(2024, 1, 10), date(2024, 1, 12), "Trip")
        leave_id = leave.id
        await client.post(f"{ADMIN_LEAVE_URL}/{leave_id}/approve", headers=auth_header(admin_token))

        res = await client.get(f"{ADMIN_LEAVE_URL}/incomplete", headers=auth_header(admin_token))
        assert res.status_code == 200
        spans = res.json()
        assert len(spans) == 1
        assert spans[0]["missing_dates"] == ["2024-01-12"]
        assert spans[0]["conflict_dates"] == ["2024-01-11"]

        res = await client.post(f"{ADMIN_LEAVE_URL}/{leave_id}/repair", headers=auth_header(admin_token))
        assert res.status_code == 200
        data = res.json()
        assert data["created_days"] == 1
        assert [(o["work_date"], o["outcome"]) for o in data["outcomes"]] == [
            ("2024-01-11", "conflict"),
            ("2024-01-12", "created"),
        ]
        assert [r.work_date for r in await _leave_records(db, employee_id)] == [
            date(2024, 1, 10),
            date(2024, 1, 12),
        ]
        kept = (
            await db.execute(select(AttendanceRecord.status).where(AttendanceRecord.id == check_in_id))
        ).scalar()
        assert kept == "present"

        res = await client.get(f"{ADMIN_LEAVE_URL}/incomplete", headers=auth_header(admin_token))
        assert res.json() == []

        # 재실행해도 충돌만 보고 (Running again only reports the conflict)
        res = await client.post(f"{ADMIN_LEAVE_URL}/{leave_id}/repair", headers=auth_header(admin_token))
        assert res.status_code == 200
        assert res.json()["created_days"] == 0

    async def test_repair_recreates_lost_day(
        self, client: AsyncClient, db: AsyncSession, admin_token, employee_user
    ):
        """유실된 leave 기록만 다시 생성."""
        employee_id = employee_user.id
        leave = await leave_service.submit(db, employee_id, date(2024, 1, 10), date(2024, 1, 12))
        leave_id = leave.id
        await client.post(f"{ADMIN_LEAVE_URL}/{leave_id}/approve", headers=auth_header(admin_token))

        await db.execute(
            delete(AttendanceRecord).where(
                AttendanceRecord.user_id == employee_id, AttendanceRecord.work_date == date(2024, 1, 11)
            )
        )
        await db.commit()

        res = await client.post(f"{ADMIN_LEAVE_URL}/{leave_id}/repair", headers=auth_header(admin_token))
        assert res.status_code == 200
        assert res.json()["created_days"] == 1
        assert len(await _leave_records(db, employee_id)) == 3

    async def test_repair_requires_approved(self, client: AsyncClient, db: AsyncSession, admin_token, employee_user):
        leave = await leave_service.submit(db, employee_user.id, date(2024, 1, 10), date(2024, 1, 10))
        res = await client.post(f"{ADMIN_LEAVE_URL}/{leave.id}/repair", headers=auth_header(admin_token))
        assert res.status_code == 400
