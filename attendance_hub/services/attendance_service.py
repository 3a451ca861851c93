"""근태 서비스 — 출퇴근 기록 비즈니스 로직.

Attendance Service — Business logic for employee check-in/check-out,
admin attendance listing, and spreadsheet export.
Check-in resolves the weekday schedule and classifies the record once;
the status is never recomputed afterwards.
"""

import logging
from datetime import date, datetime
from io import BytesIO
from typing import Sequence
from uuid import UUID

from openpyxl import Workbook
from openpyxl.styles import Alignment, Font, PatternFill
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from attendance_hub.models.attendance import STATUS_LEAVE, AttendanceRecord
from attendance_hub.models.schedule import ScheduleDay
from attendance_hub.repositories.attendance_repository import attendance_repository
from attendance_hub.repositories.user_repository import user_repository
from attendance_hub.services.schedule_service import schedule_service
from attendance_hub.services.status_classifier import calculate_duration, classify, format_duration
from attendance_hub.utils.exceptions import BadRequestError, DuplicateError, NotFoundError
from attendance_hub.utils.local_time import ensure_aware, now_utc, to_local, to_utc

logger = logging.getLogger(__name__)

# 내보내기 열 — Export sheet columns and widths
EXPORT_HEADERS: list[str] = ["Employee", "Department", "Date", "Check In", "Check Out", "Duration", "Status"]
_EXPORT_WIDTHS: list[int] = [24, 18, 12, 10, 10, 12, 10]


class AttendanceService:
    """근태 서비스.

    Attendance service handling check-in/out, listing, and export.
    """

    # === 출퇴근 (Check-in / Check-out) ===

    async def check_in(
        self,
        db: AsyncSession,
        user_id: UUID,
        now: datetime | None = None,
    ) -> AttendanceRecord:
        """출근을 기록합니다.

        Record a check-in for the current local day. The weekday schedule is
        resolved fresh and the status (present/late) is decided here once.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            user_id: 직원 UUID (Employee UUID)
            now: 출근 시각, 기본값 현재 UTC (Check-in instant, defaults to now)

        Returns:
            AttendanceRecord: 생성된 근태 기록 (Created record, flushed)

        Raises:
            DuplicateError: 오늘 이미 기록이 있을 때 (Already checked in today)
        """
        check_in_at: datetime = to_utc(now) if now is not None else now_utc()
        local_now: datetime = to_local(check_in_at)
        work_date: date = local_now.date()

        existing: AttendanceRecord | None = await attendance_repository.get_user_day(db, user_id, work_date)
        if existing is not None:
            raise DuplicateError("오늘 이미 출근 기록이 있습니다 (Already checked in today)")

        schedule: ScheduleDay | None = await schedule_service.resolve(db, work_date)
        status: str = classify(local_now, schedule)

        try:
            record: AttendanceRecord = await attendance_repository.create(
                db,
                {
                    "user_id": user_id,
                    "work_date": work_date,
                    "check_in": check_in_at,
                    "status": status,
                },
            )
        except IntegrityError:
            # 동시 출근 요청 — Lost the race on uq_attendance_user_date
            await db.rollback()
            raise DuplicateError("오늘 이미 출근 기록이 있습니다 (Already checked in today)")

        logger.info("Check-in user=%s date=%s status=%s", user_id, work_date, status)
        return record

    async def check_out(
        self,
        db: AsyncSession,
        user_id: UUID,
        now: datetime | None = None,
    ) -> AttendanceRecord:
        """퇴근을 기록합니다.

        Set ``check_out`` on today's record. A clock reading earlier than the
        stored check-in is clamped so the duration is never negative.

        Raises:
            NotFoundError: 오늘 출근 기록이 없을 때 (No check-in today)
            BadRequestError: 휴가 기록이거나 이미 퇴근한 경우
                             (Leave record, or already checked out)
        """
        check_out_at: datetime = to_utc(now) if now is not None else now_utc()
        work_date: date = to_local(check_out_at).date()

        record: AttendanceRecord | None = await attendance_repository.get_user_day(db, user_id, work_date)
        if record is None:
            raise NotFoundError("오늘 출근 기록이 없습니다 (No check-in recorded today)")
        if record.status == STATUS_LEAVE:
            raise BadRequestError("휴가일에는 퇴근할 수 없습니다 (Cannot check out on a leave day)")
        if record.check_out is not None:
            raise BadRequestError("이미 퇴근 처리되었습니다 (Already checked out today)")

        check_in_at: datetime = ensure_aware(record.check_in)
        record.check_out = max(check_out_at, check_in_at)
        await db.flush()
        await db.refresh(record)

        logger.info("Check-out user=%s date=%s", user_id, work_date)
        return record

    async def get_today(
        self,
        db: AsyncSession,
        user_id: UUID,
        now: datetime | None = None,
    ) -> AttendanceRecord | None:
        """오늘 내 근태 기록 (Today's record for the user, or None)."""
        work_date: date = to_local(now if now is not None else now_utc()).date()
        return await attendance_repository.get_user_day(db, user_id, work_date)

    # === 조회 (Listing) ===

    async def list_attendances(
        self,
        db: AsyncSession,
        user_id: UUID | None = None,
        date_from: date | None = None,
        date_to: date | None = None,
        status: str | None = None,
        page: int = 1,
        per_page: int = 20,
    ) -> tuple[Sequence[AttendanceRecord], int]:
        """근태 목록을 필터링하여 조회합니다.

        List attendance records with optional filters, newest first.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            user_id: 직원 필터, 선택 (Optional employee filter)
            date_from: 시작일, 선택 (Optional range start)
            date_to: 종료일, 선택 (Optional range end)
            status: 상태 필터, 선택 (Optional status filter)
            page: 페이지 번호 (Page number)
            per_page: 페이지당 항목 수 (Items per page)

        Returns:
            tuple[Sequence[AttendanceRecord], int]: (근태 목록, 전체 개수)
        """
        if date_from is not None and date_to is not None and date_from > date_to:
            raise BadRequestError("시작일이 종료일보다 늦습니다 (date_from is after date_to)")
        return await attendance_repository.get_by_filters(
            db, user_id, date_from, date_to, status, page, per_page
        )

    async def get_attendance(self, db: AsyncSession, attendance_id: UUID) -> AttendanceRecord:
        """근태 상세 조회 — 없으면 404 (Detail lookup; 404 when missing)."""
        record: AttendanceRecord | None = await attendance_repository.get_by_id(db, attendance_id)
        if record is None:
            raise NotFoundError("근태 기록을 찾을 수 없습니다 (Attendance record not found)")
        return record

    async def build_responses(
        self,
        db: AsyncSession,
        records: Sequence[AttendanceRecord],
    ) -> list[dict]:
        """근태 응답 딕셔너리 목록을 구성합니다 (직원 이름/부서 포함).

        Build response dicts with resolved employee name and department,
        looking users up in one query.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            records: 근태 ORM 객체 목록 (Attendance ORM objects)

        Returns:
            list[dict]: 응답 딕셔너리 목록 (Response dicts)
        """
        names: dict[UUID, tuple[str, str]] = await user_repository.get_names(
            db, {record.user_id for record in records}
        )
        responses: list[dict] = []
        for record in records:
            user_name, department = names.get(record.user_id, ("Unknown", ""))
            duration: tuple[int, int] | None = calculate_duration(record.check_in, record.check_out)
            responses.append(
                {
                    "id": str(record.id),
                    "user_id": str(record.user_id),
                    "user_name": user_name,
                    "department": department,
                    "work_date": record.work_date,
                    "check_in": ensure_aware(record.check_in),
                    "check_out": ensure_aware(record.check_out) if record.check_out else None,
                    "status": record.status,
                    "notes": record.notes,
                    "leave_request_id": str(record.leave_request_id) if record.leave_request_id else None,
                    "duration_minutes": duration[0] * 60 + duration[1] if duration else None,
                    "duration": format_duration(duration) if duration else None,
                    "created_at": record.created_at,
                }
            )
        return responses

    async def build_response(self, db: AsyncSession, record: AttendanceRecord) -> dict:
        return (await self.build_responses(db, [record]))[0]

    # === 내보내기 (Export) ===

    async def export_excel(
        self,
        db: AsyncSession,
        user_id: UUID | None = None,
        date_from: date | None = None,
        date_to: date | None = None,
        status: str | None = None,
    ) -> bytes:
        """근태 기록을 Excel 파일로 내보내기.

        Export filtered attendance records as an .xlsx workbook with
        Employee / Department / Date / Check In / Check Out / Duration / Status
        columns. Times are shown in local wall time.
        """
        records: Sequence[AttendanceRecord] = await attendance_repository.list_by_filters(
            db, user_id, date_from, date_to, status
        )
        rows: list[dict] = await self.build_responses(db, records)

        wb = Workbook()
        ws = wb.active
        ws.title = "Attendance"

        header_font = Font(bold=True, color="FFFFFF", size=11)
        header_fill = PatternFill(start_color="2D3436", end_color="2D3436", fill_type="solid")
        for col_idx, header in enumerate(EXPORT_HEADERS, 1):
            cell = ws.cell(row=1, column=col_idx, value=header)
            cell.font = header_font
            cell.fill = header_fill
            cell.alignment = Alignment(horizontal="center")

        for row in rows:
            check_out: datetime | None = row["check_out"]
            ws.append([
                row["user_name"],
                row["department"],
                row["work_date"].isoformat(),
                to_local(row["check_in"]).strftime("%H:%M"),
                to_local(check_out).strftime("%H:%M") if check_out else "-",
                row["duration"] or ("-" if row["status"] == STATUS_LEAVE else "In progress"),
                row["status"].capitalize(),
            ])

        for i, width in enumerate(_EXPORT_WIDTHS, 1):
            ws.column_dimensions[ws.cell(row=1, column=i).column_letter].width = width

        buffer = BytesIO()
        wb.save(buffer)
        return buffer.getvalue()


# 싱글턴 인스턴스 — Singleton instance
attendance_service: AttendanceService = AttendanceService()
