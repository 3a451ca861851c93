"""FastAPI 의존성 주입 모듈 — 인증 및 권한 검사.

FastAPI dependency injection module — Authentication and authorization.
Session tokens are issued by the external identity provider; this module
only verifies them and maps the caller onto a local ``User`` row.

Authentication Flow:
    1. 클라이언트가 Authorization: Bearer <token> 헤더를 전송
       (Client sends Authorization: Bearer <token> header)
    2. decode_token()이 JWT 서명과 만료를 검증
       (decode_token verifies signature and expiry)
    3. 페이로드의 "sub" 필드로 DB에서 사용자를 조회
       (User is fetched from DB using payload "sub" field)
    4. 사용자 활성 상태를 확인 (User active status is verified)

Authorization:
    - 직원 API: 활성 사용자 누구나 (Employee routes: any active user)
    - 관리자 API: role == "admin" (Admin routes: admins only)
"""

from typing import Annotated
from uuid import UUID

import jwt
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from attendance_hub.database import get_db
from attendance_hub.models.user import User
from attendance_hub.repositories.user_repository import user_repository
from attendance_hub.utils.exceptions import ForbiddenError, UnauthorizedError
from attendance_hub.utils.jwt import decode_token

# HTTP Bearer 토큰 추출기 — Authorization 헤더에서 JWT 토큰 추출
security: HTTPBearer = HTTPBearer()


async def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials, Depends(security)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> User:
    """JWT 토큰에서 현재 인증된 사용자를 추출합니다.

    Decode the bearer JWT and return the authenticated, active user.

    Args:
        credentials: HTTP Bearer 토큰 자격 증명 (Bearer token credentials)
        db: 비동기 DB 세션 (Async database session)

    Returns:
        User: 인증된 사용자 ORM 인스턴스 (Authenticated user)

    Raises:
        UnauthorizedError: 토큰이 유효하지 않거나 사용자가 없거나 비활성
                           (Invalid/expired token, unknown or inactive user)
    """
    try:
        payload: dict = decode_token(credentials.credentials)
        if payload.get("type") != "access":
            raise UnauthorizedError("Invalid token type")
        user_id: UUID = UUID(payload["sub"])
    except UnauthorizedError:
        raise
    except (jwt.InvalidTokenError, KeyError, ValueError, TypeError):
        raise UnauthorizedError("Invalid or expired token")

    user: User | None = await user_repository.get_by_id(db, user_id)
    if user is None or not user.is_active:
        raise UnauthorizedError("User not found or inactive")
    return user


async def require_admin(
    current_user: Annotated[User, Depends(get_current_user)],
) -> User:
    """관리자 권한 검사 의존성 (Admin-only dependency; 403 otherwise)."""
    if not current_user.is_admin:
        raise ForbiddenError("Admin access required")
    return current_user
