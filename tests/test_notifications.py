"""알림 API 테스트.

Notification API tests — Inbox listing, unread count, marking read,
and admin broadcast. Covers both admin and app notification endpoints.
"""

import pytest_asyncio
from httpx import AsyncClient
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from attendance_hub.models.notification import Notification
from tests.conftest import auth_header, create_user, make_token

ADMIN_NOTIFY_URL = "/api/v1/admin/notifications"
APP_NOTIFY_URL = "/api/v1/app/my/notifications"


@pytest_asyncio.fixture
async def notifications(db: AsyncSession, employee_user) -> list[Notification]:
    """테스트용 알림 데이터를 생성합니다."""
    notifs = []
    for i in range(3):
        n = Notification(
            user_id=employee_user.id,
            title=f"Notice {i}",
            message=f"Test notification {i}",
            type="info",
            is_read=False,
        )
        db.add(n)
        notifs.append(n)
    await db.commit()
    for n in notifs:
        await db.refresh(n)
    return notifs


class TestAppNotifications:
    """앱 알림 API 테스트."""

    async def test_list_notifications(self, client: AsyncClient, employee_token, notifications):
        res = await client.get(APP_NOTIFY_URL, headers=auth_header(employee_token))
        assert res.status_code == 200
        data = res.json()
        assert data["total"] == 3
        assert {item["title"] for item in data["items"]} == {"Notice 0", "Notice 1", "Notice 2"}

    async def test_mark_read_updates_count(self, client: AsyncClient, employee_token, notifications):
        """읽음 처리 후 미읽음 수 감소, 미읽음 필터에서 제외."""
        notif_id = str(notifications[0].id)
        res = await client.patch(f"{APP_NOTIFY_URL}/{notif_id}/read", headers=auth_header(employee_token))
        assert res.status_code == 200

        res = await client.get(f"{APP_NOTIFY_URL}/unread-count", headers=auth_header(employee_token))
        assert res.json() == {"unread_count": 2}

        res = await client.get(APP_NOTIFY_URL, params={"unread_only": "true"}, headers=auth_header(employee_token))
        assert notif_id not in {item["id"] for item in res.json()["items"]}

    async def test_cannot_mark_other_users_notification(
        self, client: AsyncClient, db: AsyncSession, notifications
    ):
        """다른 사용자의 알림은 404."""
        stranger = await create_user(db, "Stranger")
        res = await client.patch(
            f"{APP_NOTIFY_URL}/{notifications[0].id}/read",
            headers=auth_header(make_token(stranger)),
        )
        assert res.status_code == 404

    async def test_mark_all_read(self, client: AsyncClient, employee_token, notifications):
        res = await client.patch(f"{APP_NOTIFY_URL}/read-all", headers=auth_header(employee_token))
        assert res.status_code == 200
        assert res.json()["message"] == "3 notifications marked as read"

        res = await client.get(f"{APP_NOTIFY_URL}/unread-count", headers=auth_header(employee_token))
        assert res.json() == {"unread_count": 0}

    async def test_notifications_no_auth(self, client: AsyncClient):
        """인증 없이 접근 불가."""
        res = await client.get(APP_NOTIFY_URL)
        assert res.status_code in (401, 403)


class TestBroadcast:
    """관리자 알림 발송 테스트."""

    async def test_broadcast_to_all_employees(
        self, client: AsyncClient, db: AsyncSession, admin_user, admin_token, employee_user
    ):
        """수신자 미지정 시 활성 직원 전원, 관리자 및 비활성 제외."""
        admin_id, employee_id = admin_user.id, employee_user.id
        second = await create_user(db, "Second Employee")
        await create_user(db, "Former Employee", is_active=False)
        second_id = second.id

        res = await client.post(
            f"{ADMIN_NOTIFY_URL}/broadcast",
            json={"title": "Office closed", "message": "The office is closed on Friday."},
            headers=auth_header(admin_token),
        )
        assert res.status_code == 201
        assert res.json() == {"sent": 2}

        result = await db.execute(select(Notification.user_id).where(Notification.title == "Office closed"))
        recipients = set(result.scalars().all())
        assert recipients == {employee_id, second_id}
        assert admin_id not in recipients

    async def test_broadcast_to_explicit_users(
        self, client: AsyncClient, db: AsyncSession, admin_token, employee_user
    ):
        employee_id = employee_user.id
        res = await client.post(
            f"{ADMIN_NOTIFY_URL}/broadcast",
            json={
                "title": "Payslip ready",
                "message": "Your January payslip is available.",
                "type": "success",
                "user_ids": [str(employee_id), str(employee_id)],
                "attachment_url": "https://example.com/payslip.pdf",
            },
            headers=auth_header(admin_token),
        )
        assert res.status_code == 201
        assert res.json() == {"sent": 1}

        notification = (
            await db.execute(select(Notification).where(Notification.user_id == employee_id))
        ).scalar_one()
        assert notification.type == "success"
        assert notification.attachment_url == "https://example.com/payslip.pdf"

    async def test_broadcast_invalid_uuid(self, client: AsyncClient, admin_token):
        res = await client.post(
            f"{ADMIN_NOTIFY_URL}/broadcast",
            json={"title": "Hi", "message": "Hello", "user_ids": ["not-a-uuid"]},
            headers=auth_header(admin_token),
        )
        assert res.status_code == 400

    async def test_broadcast_rejects_unknown_user(
        self, client: AsyncClient, db: AsyncSession, admin_token, employee_user
    ):
        """존재하지 않는 사용자가 포함되면 400, 아무에게도 발송하지 않음."""
        employee_id = employee_user.id
        unknown = "00000000-0000-0000-0000-000000000001"
        res = await client.post(
            f"{ADMIN_NOTIFY_URL}/broadcast",
            json={"title": "Hi", "message": "Hello", "user_ids": [str(employee_id), unknown]},
            headers=auth_header(admin_token),
        )
        assert res.status_code == 400
        assert unknown in res.json()["detail"]

        count = (await db.execute(select(func.count()).select_from(Notification))).scalar()
        assert count == 0

    async def test_broadcast_rejects_inactive_user(
        self, client: AsyncClient, db: AsyncSession, admin_token
    ):
        former = await create_user(db, "Former Employee", is_active=False)
        res = await client.post(
            f"{ADMIN_NOTIFY_URL}/broadcast",
            json={"title": "Hi", "message": "Hello", "user_ids": [str(former.id)]},
            headers=auth_header(admin_token),
        )
        assert res.status_code == 400

    async def test_broadcast_without_recipients(self, client: AsyncClient, admin_token):
        """활성 직원이 없으면 400."""
        res = await client.post(
            f"{ADMIN_NOTIFY_URL}/broadcast",
            json={"title": "Hi", "message": "Hello"},
            headers=auth_header(admin_token),
        )
        assert res.status_code == 400

    async def test_employee_cannot_broadcast(self, client: AsyncClient, employee_token):
        res = await client.post(
            f"{ADMIN_NOTIFY_URL}/broadcast",
            json={"title": "Hi", "message": "Hello"},
            headers=auth_header(employee_token),
        )
        assert res.status_code == 403

    async def test_admin_inbox(self, client: AsyncClient, admin_token, notifications):
        """관리자 수신함에는 직원 알림이 보이지 않음."""
        res = await client.get(ADMIN_NOTIFY_URL, headers=auth_header(admin_token))
        assert res.status_code == 200
        assert res.json()["total"] == 0
