"""출근 상태 분류기 — 순수 규칙 함수 모음.

Status Classifier — Pure rules that decide a check-in's status from the
schedule's check-in deadline, plus the worked-duration helper used by
listings and exports. No database access; callers resolve the schedule.

Rules:
    - 출근 시각(분) > 마감 시각(분) → late, 그 외 → present
      (Minutes-since-midnight strictly after ``check_in_end`` is late)
    - 스케줄 누락/파싱 불가 → present (Fail open on config gaps)
    - 비근무일도 시간 비교로 분류 (Non-working days are classified the same way)
"""

import logging
from datetime import datetime, time

from attendance_hub.models.attendance import STATUS_LATE, STATUS_PRESENT
from attendance_hub.models.schedule import ScheduleDay
from attendance_hub.utils.local_time import ensure_aware

logger = logging.getLogger(__name__)


def parse_time_of_day_minutes(value: time | str | None) -> int | None:
    """시각 값을 자정 기준 분으로 변환합니다.

    Convert a time-of-day to minutes since midnight. Accepts ``time``
    objects or ``HH:MM[:SS]`` strings; seconds are ignored.

    Args:
        value: 시각 (time object or "HH:MM[:SS]" string)

    Returns:
        int | None: 자정 기준 분, 파싱 불가 시 None (None when unparseable)
    """
    if isinstance(value, time):
        return value.hour * 60 + value.minute
    if not isinstance(value, str):
        return None

    parts: list[str] = value.strip().split(":")
    if len(parts) not in (2, 3):
        return None
    try:
        hours: int = int(parts[0])
        minutes: int = int(parts[1])
    except ValueError:
        return None
    if not (0 <= hours <= 23 and 0 <= minutes <= 59):
        return None
    return hours * 60 + minutes


def classify(check_in_local: datetime, schedule: ScheduleDay | None) -> str:
    """출근 시각과 요일 스케줄로 상태를 결정합니다.

    Decide ``present`` or ``late`` for a check-in. Never returns
    ``absent`` or ``leave``: those are derived or written elsewhere.

    Args:
        check_in_local: 로컬 시간 기준 출근 시각 (Check-in in local wall time)
        schedule: 해당 요일 스케줄, 없으면 None (Weekday schedule or None)

    Returns:
        str: "present" 또는 "late"
    """
    if schedule is None:
        logger.warning("Classifying check-in as present: no schedule for %s", check_in_local.date())
        return STATUS_PRESENT

    deadline: int | None = parse_time_of_day_minutes(schedule.check_in_end)
    if deadline is None:
        logger.warning(
            "Classifying check-in as present: unparseable check_in_end %r (day_of_week=%s)",
            schedule.check_in_end,
            schedule.day_of_week,
        )
        return STATUS_PRESENT

    arrived: int = check_in_local.hour * 60 + check_in_local.minute
    return STATUS_LATE if arrived > deadline else STATUS_PRESENT


def calculate_duration(check_in: datetime, check_out: datetime | None) -> tuple[int, int] | None:
    """근무 시간을 (시간, 분)으로 계산합니다 — 퇴근 전이면 None.

    Worked time floored to whole minutes. Negative spans clamp to zero.
    """
    if check_out is None:
        return None
    total_minutes: int = max(0, int((ensure_aware(check_out) - ensure_aware(check_in)).total_seconds() // 60))
    return total_minutes // 60, total_minutes % 60


def format_duration(duration: tuple[int, int] | None) -> str:
    if duration is None:
        return "In progress"
    hours, minutes = duration
    return f"{hours}h {minutes}m"
