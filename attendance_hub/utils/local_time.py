"""로컬 시간 변환 유틸리티 모듈.

Local time conversion utilities.
Schedule times are plain ``HH:MM:SS`` values with no timezone; they are
interpreted in the configured ``TIMEZONE``. Instants are always stored in UTC.
"""

from datetime import date, datetime, time, timezone
from zoneinfo import ZoneInfo

from attendance_hub.config import settings


def local_zone() -> ZoneInfo:
    """설정된 로컬 타임존을 반환합니다 (Configured local timezone)."""
    return ZoneInfo(settings.TIMEZONE)


def ensure_aware(value: datetime) -> datetime:
    """naive datetime을 UTC로 간주하여 tz-aware로 변환합니다.

    Some drivers (SQLite) hand back naive datetimes for timezone-aware
    columns; every stored instant is UTC, so naive values are tagged as such.
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def to_local(value: datetime) -> datetime:
    """UTC 인스턴트를 로컬 시간으로 변환합니다 (Convert an instant to local wall time)."""
    return ensure_aware(value).astimezone(local_zone())


def to_utc(value: datetime) -> datetime:
    """인스턴트를 UTC로 정규화합니다 (Normalize an instant to UTC)."""
    return ensure_aware(value).astimezone(timezone.utc)


def local_date(value: datetime) -> date:
    """인스턴트의 로컬 달력 날짜 (Local calendar date of an instant)."""
    return to_local(value).date()


def start_of_local_day(day: date) -> datetime:
    """로컬 날짜의 자정을 UTC 인스턴트로 반환합니다.

    Return local midnight of ``day`` as a UTC instant.
    """
    return datetime.combine(day, time.min, tzinfo=local_zone()).astimezone(timezone.utc)


def now_utc() -> datetime:
    return datetime.now(timezone.utc)
