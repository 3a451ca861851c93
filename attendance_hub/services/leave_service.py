"""휴가 서비스 — 휴가 신청/승인 및 근태 기록 동기화 비즈니스 로직.

Leave Service — Business logic for leave requests and for reconciling an
approved request into per-day ``leave`` attendance records.

Approval runs as a sequence of independently committed steps:
    1. 조건부 상태 전이 pending → approved (Conditional transition, committed)
    2. 일자별 leave 기록 생성, 일자마다 커밋 (One committed record per day;
       the first failure stops the loop, earlier days stay)
    3. 신청자 알림, 실패해도 무시 (Best-effort requester notification)

A stopped step 2 is reported after step 3 as ``PartialMaterializationError``.
Days left missing are found by ``find_incomplete_spans`` and filled by an
explicit ``repair`` call, which leaves days already taken by a check-in alone.
"""

import logging
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Sequence
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from attendance_hub.config import settings
from attendance_hub.models.attendance import STATUS_LEAVE, AttendanceRecord
from attendance_hub.models.leave import LEAVE_APPROVED, LEAVE_DECLINED, LEAVE_PENDING, LeaveRequest
from attendance_hub.models.schedule import ScheduleDay
from attendance_hub.repositories.attendance_repository import attendance_repository
from attendance_hub.repositories.leave_repository import leave_request_repository
from attendance_hub.repositories.user_repository import user_repository
from attendance_hub.services.notification_service import notification_service
from attendance_hub.services.schedule_service import day_of_week_index, schedule_service
from attendance_hub.utils.exceptions import BadRequestError, NotFoundError, PartialMaterializationError
from attendance_hub.utils.local_time import now_utc, start_of_local_day

logger = logging.getLogger(__name__)

# 일자별 결과 — Per-day outcome values
OUTCOME_CREATED: str = "created"
OUTCOME_FAILED: str = "failed"
OUTCOME_NOT_ATTEMPTED: str = "not_attempted"
# 다른 근태 기록이 이미 있는 날 — day already taken by a non-leave record
OUTCOME_CONFLICT: str = "conflict"


@dataclass
class DayOutcome:
    work_date: date
    outcome: str
    error: str | None = None


@dataclass
class MaterializationResult:
    """휴가 기록 생성 결과 (Outcome of writing one request's leave days)."""

    leave_request_id: UUID
    outcomes: list[DayOutcome] = field(default_factory=list)

    @property
    def complete(self) -> bool:
        return all(item.outcome in (OUTCOME_CREATED, OUTCOME_CONFLICT) for item in self.outcomes)

    @property
    def created_count(self) -> int:
        return sum(1 for item in self.outcomes if item.outcome == OUTCOME_CREATED)

    def as_dicts(self) -> list[dict]:
        return [
            {"work_date": item.work_date.isoformat(), "outcome": item.outcome, "error": item.error}
            for item in self.outcomes
        ]


def leave_span(start: date, end: date) -> list[date]:
    """시작일~종료일(포함)의 모든 달력일 (Every calendar day in the closed span)."""
    return [start + timedelta(days=offset) for offset in range((end - start).days + 1)]


def leave_note(reason: str | None) -> str:
    return f"Approved leave: {reason or 'No reason provided'}"


class LeaveService:
    """휴가 서비스.

    Leave request lifecycle (submit, approve, decline) and read-repair of
    partially materialized approvals.
    """

    # === 신청 (Submission) ===

    async def submit(
        self,
        db: AsyncSession,
        user_id: UUID,
        start_date: date,
        end_date: date,
        reason: str | None = None,
    ) -> LeaveRequest:
        """휴가를 신청하고 관리자에게 알립니다.

        Create a pending leave request and notify every active admin.
        The request is committed before the notice is attempted; a failed
        notice is logged and does not undo the request.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            user_id: 신청자 UUID (Requesting employee)
            start_date: 시작일, 포함 (Inclusive start)
            end_date: 종료일, 포함 (Inclusive end)
            reason: 사유, 선택 (Optional reason)

        Returns:
            LeaveRequest: 생성된 휴가 신청 (Created request)

        Raises:
            BadRequestError: 시작일이 종료일보다 늦을 때 (start after end)
        """
        if start_date > end_date:
            raise BadRequestError("시작일이 종료일보다 늦습니다 (start_date must not be after end_date)")

        leave: LeaveRequest = await leave_request_repository.create(
            db,
            {
                "user_id": user_id,
                "start_date": start_date,
                "end_date": end_date,
                "reason": reason or None,
                "status": LEAVE_PENDING,
            },
        )
        await db.commit()
        logger.info("Leave request %s submitted by %s (%s..%s)", leave.id, user_id, start_date, end_date)

        names: dict[UUID, tuple[str, str]] = await user_repository.get_names(db, {user_id})
        requester_name: str = names.get(user_id, ("Employee", ""))[0] or "Employee"
        try:
            await notification_service.notify_admins_of_leave_request(db, leave, requester_name)
            await db.commit()
        except SQLAlchemyError:
            await db.rollback()
            await db.refresh(leave)
            logger.exception("Failed to notify admins of leave request %s", leave.id)
        return leave

    # === 승인/반려 (Decision) ===

    async def approve(
        self,
        db: AsyncSession,
        leave_request_id: UUID,
        approver_id: UUID,
    ) -> tuple[LeaveRequest, MaterializationResult]:
        """휴가를 승인하고 일자별 leave 근태 기록을 생성합니다.

        Approve a pending request, then write one ``leave`` record per
        calendar day of the span, then notify the requester.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            leave_request_id: 휴가 신청 UUID (Leave request UUID)
            approver_id: 승인 관리자 UUID (Approving admin)

        Returns:
            tuple[LeaveRequest, MaterializationResult]: (승인된 신청, 일자별 결과)

        Raises:
            NotFoundError: 신청이 없을 때 (Unknown request)
            BadRequestError: 대기 상태가 아닐 때 (Request already decided)
            PartialMaterializationError: 일부 일자 기록 실패 (Some days were not written)
        """
        leave: LeaveRequest = await self._decide(db, leave_request_id, LEAVE_APPROVED, approver_id)

        days: list[date] = await self.expected_days(db, leave)
        result: MaterializationResult = await self._materialize(db, leave, days)

        await self._notify_decision(db, leave, approved=True)

        if not result.complete:
            raise PartialMaterializationError(str(leave.id), result.as_dicts())
        return leave, result

    async def decline(
        self,
        db: AsyncSession,
        leave_request_id: UUID,
        approver_id: UUID,
    ) -> LeaveRequest:
        """휴가를 반려합니다 — 근태 기록은 생성하지 않습니다.

        Decline a pending request and notify the requester. No attendance
        records are touched.
        """
        leave: LeaveRequest = await self._decide(db, leave_request_id, LEAVE_DECLINED, approver_id)
        await self._notify_decision(db, leave, approved=False)
        return leave

    async def _decide(
        self,
        db: AsyncSession,
        leave_request_id: UUID,
        new_status: str,
        approver_id: UUID,
    ) -> LeaveRequest:
        leave: LeaveRequest | None = await leave_request_repository.get_by_id(db, leave_request_id)
        if leave is None:
            raise NotFoundError("휴가 신청을 찾을 수 없습니다 (Leave request not found)")

        moved: bool = await leave_request_repository.transition_from_pending(
            db, leave_request_id, new_status, approver_id, now_utc()
        )
        if not moved:
            raise BadRequestError(
                f"대기 중인 신청만 처리할 수 있습니다 (Leave request is not pending; status is {leave.status})"
            )
        await db.commit()
        await db.refresh(leave)
        logger.info("Leave request %s %s by %s", leave.id, new_status, approver_id)
        return leave

    async def _notify_decision(self, db: AsyncSession, leave: LeaveRequest, approved: bool) -> None:
        try:
            await notification_service.notify_leave_decision(db, leave, approved=approved)
            await db.commit()
        except SQLAlchemyError:
            await db.rollback()
            await db.refresh(leave)
            logger.exception("Failed to notify requester of leave decision %s", leave.id)

    # === 일자별 기록 생성 (Materialization) ===

    async def expected_days(self, db: AsyncSession, leave: LeaveRequest) -> list[date]:
        """승인된 신청이 leave 기록을 가져야 하는 날짜 목록.

        Every calendar day of the span. With ``LEAVE_SKIP_NON_WORKING_DAYS``
        days whose schedule row says non-working are dropped; a day with no
        schedule row is kept.
        """
        days: list[date] = leave_span(leave.start_date, leave.end_date)
        if not settings.LEAVE_SKIP_NON_WORKING_DAYS:
            return days

        week: Sequence[ScheduleDay] = await schedule_service.list_schedule(db)
        working: dict[int, bool] = {row.day_of_week: row.is_working_day for row in week}
        return [day for day in days if working.get(day_of_week_index(day), True)]

    async def _materialize(
        self,
        db: AsyncSession,
        leave: LeaveRequest,
        days: list[date],
    ) -> MaterializationResult:
        # 롤백 시 ORM 객체가 만료되므로 값을 미리 보관 — Rollback expires ORM state
        leave_id: UUID = leave.id
        user_id: UUID = leave.user_id
        note: str = leave_note(leave.reason)

        result: MaterializationResult = MaterializationResult(leave_request_id=leave_id)
        for index, day in enumerate(days):
            try:
                await attendance_repository.create(
                    db,
                    {
                        "user_id": user_id,
                        "work_date": day,
                        "check_in": start_of_local_day(day),
                        "status": STATUS_LEAVE,
                        "notes": note,
                        "leave_request_id": leave_id,
                    },
                )
                await db.commit()
                result.outcomes.append(DayOutcome(day, OUTCOME_CREATED))
            except SQLAlchemyError as exc:
                await db.rollback()
                logger.error("Leave %s: writing %s failed, %d day(s) not attempted: %s",
                             leave_id, day, len(days) - index - 1, exc)
                result.outcomes.append(DayOutcome(day, OUTCOME_FAILED, str(getattr(exc, "orig", exc))))
                result.outcomes.extend(DayOutcome(rest, OUTCOME_NOT_ATTEMPTED) for rest in days[index + 1:])
                await db.refresh(leave)
                break

        logger.info("Leave %s materialized %d/%d day(s)", leave_id, result.created_count, len(days))
        return result

    # === 복구 (Read-repair) ===

    async def gap_days(self, db: AsyncSession, leave: LeaveRequest) -> tuple[list[date], list[date]]:
        """leave 기록이 없는 예상 날짜를 (누락, 충돌)로 나눕니다.

        Split the expected days that lack a leave record into days with no
        record at all (writable) and days already taken by another record,
        such as a check-in. Conflicting days are never overwritten.

        Returns:
            tuple[list[date], list[date]]: (누락 날짜, 충돌 날짜) (missing, conflicting)
        """
        expected: list[date] = await self.expected_days(db, leave)
        statuses: dict[date, str] = await attendance_repository.get_user_day_statuses(
            db, leave.user_id, leave.start_date, leave.end_date
        )
        missing: list[date] = [day for day in expected if day not in statuses]
        conflicts: list[date] = [
            day for day in expected if day in statuses and statuses[day] != STATUS_LEAVE
        ]
        return missing, conflicts

    async def find_incomplete_spans(self, db: AsyncSession) -> list[dict]:
        """기록이 누락된 승인 휴가 목록을 조회합니다.

        List approved requests that still have writable days without a
        ``leave`` record. Days taken by a check-in are reported alongside but
        do not by themselves keep a request on the list.

        Returns:
            list[dict]: 신청별 누락/충돌 날짜 (Per-request missing and conflicting dates)
        """
        spans: list[dict] = []
        for leave in await leave_request_repository.get_approved(db):
            missing, conflicts = await self.gap_days(db, leave)
            if missing:
                spans.append(
                    {
                        "leave_request_id": str(leave.id),
                        "user_id": str(leave.user_id),
                        "start_date": leave.start_date,
                        "end_date": leave.end_date,
                        "missing_dates": missing,
                        "conflict_dates": conflicts,
                    }
                )
        return spans

    async def repair(self, db: AsyncSession, leave_request_id: UUID) -> MaterializationResult:
        """승인된 휴가의 누락된 날짜만 기록합니다.

        Write leave records for the missing days of an approved request.
        Days that already have a leave record are skipped; days taken by a
        check-in are reported as ``conflict`` and left untouched, so they
        never block the days after them.

        Raises:
            NotFoundError: 신청이 없을 때 (Unknown request)
            BadRequestError: 승인된 신청이 아닐 때 (Request is not approved)
            PartialMaterializationError: 복구 중 실패 (A writable day failed again)
        """
        leave: LeaveRequest | None = await leave_request_repository.get_by_id(db, leave_request_id)
        if leave is None:
            raise NotFoundError("휴가 신청을 찾을 수 없습니다 (Leave request not found)")
        if leave.status != LEAVE_APPROVED:
            raise BadRequestError("승인된 신청만 복구할 수 있습니다 (Only approved requests can be repaired)")

        leave_id: UUID = leave.id
        missing, conflicts = await self.gap_days(db, leave)
        if conflicts:
            logger.warning("Leave %s: %d day(s) already have a check-in, left as is: %s",
                           leave_id, len(conflicts), conflicts)

        result: MaterializationResult = await self._materialize(db, leave, missing)
        result.outcomes.extend(DayOutcome(day, OUTCOME_CONFLICT) for day in conflicts)
        result.outcomes.sort(key=lambda item: item.work_date)
        if not result.complete:
            raise PartialMaterializationError(str(leave_id), result.as_dicts())
        return result

    # === 조회 (Listing) ===

    async def list_requests(
        self,
        db: AsyncSession,
        user_id: UUID | None = None,
        status: str | None = None,
        page: int = 1,
        per_page: int = 20,
    ) -> tuple[Sequence[LeaveRequest], int]:
        return await leave_request_repository.get_by_filters(db, user_id, status, page, per_page)

    async def get_request(self, db: AsyncSession, leave_request_id: UUID) -> LeaveRequest:
        leave: LeaveRequest | None = await leave_request_repository.get_by_id(db, leave_request_id)
        if leave is None:
            raise NotFoundError("휴가 신청을 찾을 수 없습니다 (Leave request not found)")
        return leave

    async def count_pending(self, db: AsyncSession) -> int:
        return await leave_request_repository.count_with_status(db, LEAVE_PENDING)

    async def build_responses(
        self,
        db: AsyncSession,
        requests: Sequence[LeaveRequest],
    ) -> list[dict]:
        """휴가 신청 응답 딕셔너리 목록 (신청자/결정자 이름 포함).

        Build response dicts with requester and approver names resolved.
        """
        user_ids: set[UUID] = {item.user_id for item in requests}
        user_ids.update(item.approved_by for item in requests if item.approved_by is not None)
        names: dict[UUID, tuple[str, str]] = await user_repository.get_names(db, user_ids)

        responses: list[dict] = []
        for item in requests:
            user_name, department = names.get(item.user_id, ("Unknown", ""))
            approver: tuple[str, str] | None = names.get(item.approved_by) if item.approved_by else None
            responses.append(
                {
                    "id": str(item.id),
                    "user_id": str(item.user_id),
                    "user_name": user_name,
                    "department": department,
                    "start_date": item.start_date,
                    "end_date": item.end_date,
                    "days": (item.end_date - item.start_date).days + 1,
                    "reason": item.reason,
                    "status": item.status,
                    "approved_by": str(item.approved_by) if item.approved_by else None,
                    "approved_by_name": approver[0] if approver else None,
                    "approved_at": item.approved_at,
                    "created_at": item.created_at,
                }
            )
        return responses

    async def build_response(self, db: AsyncSession, leave: LeaveRequest) -> dict:
        return (await self.build_responses(db, [leave]))[0]


# 싱글턴 인스턴스 — Singleton instance
leave_service: LeaveService = LeaveService()
