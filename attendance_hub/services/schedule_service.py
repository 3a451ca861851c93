"""스케줄 서비스 — 요일별 근무 스케줄 비즈니스 로직.

Schedule Service — Resolves the admin-configured schedule for a date,
and manages the seven weekday rows (seed, list, bulk update).
A missing row is a configuration gap, not an error: callers decide how to
fail open.
"""

import logging
from datetime import date
from typing import Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from attendance_hub.models.schedule import (
    DEFAULT_CHECK_IN_END,
    DEFAULT_CHECK_IN_START,
    DEFAULT_CHECK_OUT_END,
    DEFAULT_CHECK_OUT_START,
    DEFAULT_WORKING_DAYS,
    ScheduleDay,
)
from attendance_hub.repositories.schedule_repository import schedule_repository
from attendance_hub.utils.exceptions import BadRequestError, NotFoundError

logger = logging.getLogger(__name__)

# 스케줄 수정 가능 필드 — Fields an admin may change on a weekday row
_EDITABLE_FIELDS: tuple[str, ...] = (
    "check_in_start",
    "check_in_end",
    "check_out_start",
    "check_out_end",
    "is_working_day",
)

# 요일 이름 — Sunday-first, indexed by day_of_week
DAY_NAMES: tuple[str, ...] = ("Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday")


def day_of_week_index(day: date) -> int:
    """날짜의 요일 인덱스를 반환합니다 — 0=일요일 ... 6=토요일.

    Python's ``weekday()`` is Monday-first; the schedule table is Sunday-first.
    """
    return (day.weekday() + 1) % 7


class ScheduleService:
    """요일별 스케줄 서비스.

    Weekly schedule service: resolution for the classifier and the leave
    reconciler, plus admin maintenance of the seven weekday rows.
    """

    async def resolve(self, db: AsyncSession, day: date) -> ScheduleDay | None:
        """날짜에 해당하는 요일 스케줄을 조회합니다.

        Resolve the schedule row for the weekday of ``day``.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            day: 로컬 달력 날짜 (Local calendar date)

        Returns:
            ScheduleDay | None: 스케줄 또는 None — 설정 누락 시 (None on config gap)
        """
        schedule: ScheduleDay | None = await schedule_repository.get_by_day_of_week(
            db, day_of_week_index(day)
        )
        if schedule is None:
            logger.warning("No schedule configured for %s (day_of_week=%d)", day, day_of_week_index(day))
        return schedule

    async def list_schedule(self, db: AsyncSession) -> Sequence[ScheduleDay]:
        """주간 스케줄 전체를 일요일부터 조회합니다 (Whole week, Sunday first)."""
        return await schedule_repository.get_week(db)

    async def working_day_count(self, db: AsyncSession) -> int:
        """근무일로 설정된 요일 수 (Number of weekdays flagged as working)."""
        week: Sequence[ScheduleDay] = await schedule_repository.get_week(db)
        return sum(1 for day in week if day.is_working_day)

    async def bulk_update(
        self,
        db: AsyncSession,
        updates: list[dict],
    ) -> Sequence[ScheduleDay]:
        """여러 요일 스케줄을 한 번에 수정합니다.

        Update several weekday rows in one call. Each item carries
        ``day_of_week`` plus any subset of the editable fields. Window ordering
        is not enforced; existing attendance records keep the status they
        were classified with.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            updates: 요일별 변경 사항 목록 (Per-weekday changes)

        Returns:
            Sequence[ScheduleDay]: 수정 후 주간 스케줄 (Week after update)

        Raises:
            BadRequestError: 요일 중복 (Duplicate weekday in one request)
            NotFoundError: 요일 행이 없을 때 (Weekday row not seeded)
        """
        seen: set[int] = set()
        for item in updates:
            day_index: int = item["day_of_week"]
            if day_index in seen:
                raise BadRequestError(f"요일이 중복되었습니다 (Duplicate day_of_week {day_index})")
            seen.add(day_index)

            schedule: ScheduleDay | None = await schedule_repository.get_by_day_of_week(db, day_index)
            if schedule is None:
                raise NotFoundError(f"요일 스케줄이 없습니다 (No schedule row for day_of_week {day_index})")

            for field in _EDITABLE_FIELDS:
                if item.get(field) is not None:
                    setattr(schedule, field, item[field])

        await db.flush()
        logger.info("Schedule updated for days %s", sorted(seen))
        return await schedule_repository.get_week(db)

    def build_response(self, schedule: ScheduleDay) -> dict:
        return {
            "day_of_week": schedule.day_of_week,
            "day_name": DAY_NAMES[schedule.day_of_week],
            "check_in_start": schedule.check_in_start,
            "check_in_end": schedule.check_in_end,
            "check_out_start": schedule.check_out_start,
            "check_out_end": schedule.check_out_end,
            "is_working_day": schedule.is_working_day,
        }

    async def ensure_default_schedule(self, db: AsyncSession) -> int:
        """누락된 요일 스케줄을 기본값으로 생성합니다.

        Seed any missing weekday rows with the default windows
        (08:00-09:30 in, 17:00-18:30 out, Monday to Friday working).
        Existing rows are left untouched.

        Returns:
            int: 새로 생성된 행 수 (Rows created)
        """
        existing: set[int] = {day.day_of_week for day in await schedule_repository.get_week(db)}
        created: int = 0
        for day_index in range(7):
            if day_index in existing:
                continue
            db.add(
                ScheduleDay(
                    day_of_week=day_index,
                    check_in_start=DEFAULT_CHECK_IN_START,
                    check_in_end=DEFAULT_CHECK_IN_END,
                    check_out_start=DEFAULT_CHECK_OUT_START,
                    check_out_end=DEFAULT_CHECK_OUT_END,
                    is_working_day=day_index in DEFAULT_WORKING_DAYS,
                )
            )
            created += 1
        await db.flush()
        return created


# 싱글턴 인스턴스 — Singleton instance
schedule_service: ScheduleService = ScheduleService()
