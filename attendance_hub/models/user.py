"""사용자 관련 SQLAlchemy ORM 모델 정의.

User SQLAlchemy ORM model definition.
Mirrors the identity provider's profile and role data: the provider owns
credentials and sessions, this table holds what the attendance engine reads
(display name, department, role, active flag).

Tables:
    - users: 사용자 프로필 (Employee/admin profiles)
"""

import uuid
from datetime import datetime, timezone
from sqlalchemy import String, Boolean, DateTime, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from attendance_hub.database import Base

# 역할 상수 — Role names
ROLE_ADMIN: str = "admin"
ROLE_EMPLOYEE: str = "employee"


class User(Base):
    """사용자 모델 — 직원 또는 관리자 프로필.

    User model — Employee or admin profile.

    Attributes:
        id: 고유 식별자 UUID, ID 공급자의 사용자 ID와 동일 (Identity provider user id)
        full_name: 표시 이름 (Full display name)
        email: 이메일, 선택 (Optional email)
        department: 부서 (Department)
        title: 직함 (Job title)
        role: 역할 — "admin" | "employee" (Role)
        is_active: 활성 상태 (Inactive users are excluded from attendance totals)
        created_at: 생성 일시 UTC (Creation timestamp)
        updated_at: 수정 일시 UTC (Last update timestamp)
    """

    __tablename__ = "users"

    # 사용자 고유 식별자 — Identity provider user id (UUID)
    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    # 표시 이름 — Full display name
    full_name: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    # 이메일 — Optional email
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    # 부서 — Department
    department: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    # 직함 — Job title
    title: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    # 역할 — "admin" | "employee"
    role: Mapped[str] = mapped_column(String(20), nullable=False, default=ROLE_EMPLOYEE)
    # 활성 상태 — False면 출근율/결근 집계에서 제외 (Excluded from attendance totals when False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)
    # 생성 일시 — Record creation timestamp (UTC)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    # 수정 일시 — Last modification timestamp (UTC, auto-updated)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN
