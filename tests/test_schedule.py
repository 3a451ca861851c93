"""주간 스케줄 테스트.

Schedule tests — Weekly listing, bulk update and its effect on later
check-in classification, and today's schedule for the employee app.
"""

from datetime import datetime, timezone

from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from attendance_hub.services.attendance_service import attendance_service
from attendance_hub.services.schedule_service import DAY_NAMES, day_of_week_index, schedule_service
from attendance_hub.utils.local_time import local_date, now_utc
from tests.conftest import auth_header, create_user

ADMIN_SCHEDULE_URL = "/api/v1/admin/schedule"
APP_SCHEDULE_URL = "/api/v1/app/schedule/today"


class TestAdminSchedule:
    """관리자 스케줄 API 테스트."""

    async def test_week_sunday_first(self, client: AsyncClient, schedule, admin_token):
        """7개 요일, 일요일부터, 주말은 비근무."""
        res = await client.get(ADMIN_SCHEDULE_URL, headers=auth_header(admin_token))
        assert res.status_code == 200
        days = res.json()
        assert [d["day_of_week"] for d in days] == list(range(7))
        assert [d["day_name"] for d in days] == list(DAY_NAMES)
        assert days[0]["is_working_day"] is False
        assert days[6]["is_working_day"] is False
        assert all(d["is_working_day"] for d in days[1:6])
        assert days[3]["check_in_end"] == "09:30:00"

    async def test_update_affects_later_check_ins_only(
        self, client: AsyncClient, db: AsyncSession, schedule, admin_token
    ):
        """수정 전 기록은 상태 유지, 이후 출근은 새 마감 기준."""
        early_bird = await create_user(db, "Early Bird")
        late_comer = await create_user(db, "Late Comer")
        early_bird_id, late_comer_id = early_bird.id, late_comer.id

        before = await attendance_service.check_in(
            db, early_bird_id, now=datetime(2024, 1, 10, 9, 45, tzinfo=timezone.utc)
        )
        await db.commit()
        before_id = before.id
        assert before.status == "late"

        res = await client.put(
            ADMIN_SCHEDULE_URL,
            json={"days": [{"day_of_week": 3, "check_in_end": "10:00:00"}]},
            headers=auth_header(admin_token),
        )
        assert res.status_code == 200
        wednesday = res.json()[3]
        assert wednesday["check_in_end"] == "10:00:00"
        assert wednesday["check_in_start"] == "08:00:00"

        after = await attendance_service.check_in(
            db, late_comer_id, now=datetime(2024, 1, 10, 9, 45, tzinfo=timezone.utc)
        )
        await db.commit()
        assert after.status == "present"

        unchanged = await attendance_service.get_attendance(db, before_id)
        assert unchanged.status == "late"

    async def test_duplicate_day_rejected(self, client: AsyncClient, schedule, admin_token):
        res = await client.put(
            ADMIN_SCHEDULE_URL,
            json={"days": [{"day_of_week": 1, "is_working_day": False}, {"day_of_week": 1}]},
            headers=auth_header(admin_token),
        )
        assert res.status_code == 400

    async def test_unseeded_day_not_found(self, client: AsyncClient, admin_token):
        res = await client.put(
            ADMIN_SCHEDULE_URL,
            json={"days": [{"day_of_week": 2, "is_working_day": False}]},
            headers=auth_header(admin_token),
        )
        assert res.status_code == 404

    async def test_day_index_validated(self, client: AsyncClient, schedule, admin_token):
        res = await client.put(
            ADMIN_SCHEDULE_URL,
            json={"days": [{"day_of_week": 7}]},
            headers=auth_header(admin_token),
        )
        assert res.status_code == 422

    async def test_employee_cannot_update(self, client: AsyncClient, schedule, employee_token):
        res = await client.put(
            ADMIN_SCHEDULE_URL,
            json={"days": [{"day_of_week": 1, "is_working_day": False}]},
            headers=auth_header(employee_token),
        )
        assert res.status_code == 403


class TestScheduleService:
    """스케줄 서비스 테스트."""

    async def test_seeding_is_idempotent(self, db: AsyncSession):
        assert await schedule_service.ensure_default_schedule(db) == 7
        assert await schedule_service.ensure_default_schedule(db) == 0
        assert await schedule_service.working_day_count(db) == 5


class TestAppSchedule:
    """앱 오늘 스케줄 테스트."""

    async def test_today(self, client: AsyncClient, schedule, employee_token):
        res = await client.get(APP_SCHEDULE_URL, headers=auth_header(employee_token))
        assert res.status_code == 200
        assert res.json()["day_of_week"] == day_of_week_index(local_date(now_utc()))

    async def test_today_unconfigured(self, client: AsyncClient, employee_token):
        res = await client.get(APP_SCHEDULE_URL, headers=auth_header(employee_token))
        assert res.status_code == 200
        assert res.json() is None
