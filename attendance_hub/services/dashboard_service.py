"""대시보드 서비스 — 근태 집계 비즈니스 로직.

Dashboard Service — Read-only aggregation for the admin dashboard:
the daily status breakdown and the weekly attendance rate.
"""

from datetime import date, timedelta

from sqlalchemy.ext.asyncio import AsyncSession

from attendance_hub.config import settings
from attendance_hub.models.attendance import STATUS_LATE, STATUS_LEAVE, STATUS_PRESENT
from attendance_hub.repositories.attendance_repository import attendance_repository
from attendance_hub.repositories.user_repository import user_repository
from attendance_hub.services.leave_service import leave_service
from attendance_hub.services.schedule_service import schedule_service
from attendance_hub.utils.local_time import local_date, now_utc


def week_bounds(day: date) -> tuple[date, date]:
    """날짜가 속한 월요일 시작 주의 (월요일, 일요일) (Monday-start week containing day)."""
    monday: date = day - timedelta(days=day.weekday())
    return monday, monday + timedelta(days=6)


def attendance_rate(attended: int, divisor: int) -> int:
    """출근율(%)을 반올림(0.5 올림)하여 반환합니다 — 분모 0이면 0.

    Integer percentage rounded half up; 0 when there is nothing to divide by.
    """
    if divisor <= 0:
        return 0
    return (attended * 200 + divisor) // (divisor * 2)


class DashboardService:
    """대시보드 서비스.

    Dashboard aggregation service for admin dashboard views.
    """

    async def daily_summary(self, db: AsyncSession, day: date | None = None) -> dict:
        """일일 근태 현황을 집계합니다.

        Count one local day's records by status. ``absent`` is not stored:
        it is the active headcount minus the day's records, floored at zero.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            day: 집계 날짜, 기본값 오늘 (Local date, defaults to today)

        Returns:
            dict: {work_date, present, late, on_leave, absent, total_employees}
        """
        if day is None:
            day = local_date(now_utc())

        counts: dict[str, int] = await attendance_repository.count_by_status_on(db, day)
        active: int = await user_repository.count_active(db)
        recorded: int = sum(counts.values())

        return {
            "work_date": day,
            "present": counts.get(STATUS_PRESENT, 0),
            "late": counts.get(STATUS_LATE, 0),
            "on_leave": counts.get(STATUS_LEAVE, 0),
            "absent": max(0, active - recorded),
            "total_employees": active,
        }

    async def weekly_rate(
        self,
        db: AsyncSession,
        day: date | None = None,
        use_schedule: bool | None = None,
    ) -> dict:
        """주간 출근율을 계산합니다.

        Attendance rate for the Monday-start week containing ``day``:
        present + late records over ``active × working days``. Working days
        are a fixed count unless ``use_schedule`` (or the
        ``WEEKLY_RATE_USE_SCHEDULE`` setting) asks for the schedule's count.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            day: 기준 날짜, 기본값 오늘 (Any date in the week, defaults to today)
            use_schedule: 스케줄 기반 분모 사용, None이면 설정값
                          (Schedule-based divisor; None uses the setting)

        Returns:
            dict: {week_start, week_end, attended, expected, rate}
        """
        if day is None:
            day = local_date(now_utc())
        if use_schedule is None:
            use_schedule = settings.WEEKLY_RATE_USE_SCHEDULE

        week_start, week_end = week_bounds(day)
        attended: int = await attendance_repository.count_with_status_between(
            db, week_start, week_end, (STATUS_PRESENT, STATUS_LATE)
        )
        active: int = await user_repository.count_active(db)
        working_days: int = (
            await schedule_service.working_day_count(db)
            if use_schedule
            else settings.WEEKLY_RATE_ASSUMED_WORKING_DAYS
        )
        expected: int = active * working_days

        return {
            "week_start": week_start,
            "week_end": week_end,
            "attended": attended,
            "expected": expected,
            "rate": attendance_rate(attended, expected),
        }

    async def summary(self, db: AsyncSession, day: date | None = None) -> dict:
        """대시보드 요약 — 일일 현황, 주간 출근율, 대기 휴가 수."""
        if day is None:
            day = local_date(now_utc())
        daily: dict = await self.daily_summary(db, day)
        weekly: dict = await self.weekly_rate(db, day)
        return {
            **daily,
            "weekly_rate": weekly["rate"],
            "pending_leave_requests": await leave_service.count_pending(db),
        }


# 싱글턴 인스턴스 — Singleton instance
dashboard_service: DashboardService = DashboardService()
