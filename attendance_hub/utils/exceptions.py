"""커스텀 HTTP 예외 클래스 모듈.

Custom HTTP exception classes module.
Provides pre-configured HTTPException subclasses for common error patterns
so services can raise domain failures without specifying status codes.

Usage:
    from attendance_hub.utils.exceptions import NotFoundError, DuplicateError
    raise NotFoundError("Leave request not found")
    raise DuplicateError("Already checked in today")
"""

from typing import Any

from fastapi import HTTPException, status


class NotFoundError(HTTPException):
    """404 Not Found 예외 — 요청한 리소스를 찾을 수 없을 때 사용.

    Args:
        detail: 오류 메시지 (Error message, default: "Resource not found")
    """

    def __init__(self, detail: str = "Resource not found") -> None:
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class DuplicateError(HTTPException):
    """409 Conflict 예외 — 유일성 제약 위반 시 사용.

    409 Conflict exception.
    Raised when a write violates a uniqueness rule
    (e.g. a second check-in for the same employee on the same day).

    Args:
        detail: 오류 메시지 (Error message, default: "Resource already exists")
    """

    def __init__(self, detail: str = "Resource already exists") -> None:
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail)


class ForbiddenError(HTTPException):
    """403 Forbidden 예외 — 권한 부족 시 사용.

    Args:
        detail: 오류 메시지 (Error message, default: "Insufficient permissions")
    """

    def __init__(self, detail: str = "Insufficient permissions") -> None:
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail=detail)


class UnauthorizedError(HTTPException):
    """401 Unauthorized 예외 — 인증 실패 시 사용.

    Args:
        detail: 오류 메시지 (Error message, default: "Authentication required")
    """

    def __init__(self, detail: str = "Authentication required") -> None:
        super().__init__(status_code=status.HTTP_401_UNAUTHORIZED, detail=detail)


class BadRequestError(HTTPException):
    """400 Bad Request 예외 — 잘못된 요청 데이터 또는 상태 전이 시 사용.

    400 Bad Request exception.
    Raised when the request is invalid beyond what Pydantic validation catches
    (e.g. approving a leave request that is no longer pending).

    Args:
        detail: 오류 메시지 (Error message, default: "Bad request")
    """

    def __init__(self, detail: str = "Bad request") -> None:
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class PartialMaterializationError(HTTPException):
    """409 Conflict 예외 — 휴가 기록 생성이 중간에 실패했을 때 사용.

    409 Conflict exception raised after a leave approval whose per-day
    attendance writes stopped part-way. The approval itself stays committed;
    the detail carries every day's outcome so the admin can run a repair.

    Args:
        leave_request_id: 휴가 신청 UUID 문자열 (Leave request id)
        outcomes: 일자별 결과 목록 (Per-day outcome dicts)
    """

    def __init__(self, leave_request_id: str, outcomes: list[dict[str, Any]]) -> None:
        super().__init__(
            status_code=status.HTTP_409_CONFLICT,
            detail={
                "message": "휴가가 승인되었으나 일부 근태 기록 생성에 실패했습니다 "
                "(Leave approved but attendance records were only partially created)",
                "leave_request_id": leave_request_id,
                "outcomes": outcomes,
            },
        )
