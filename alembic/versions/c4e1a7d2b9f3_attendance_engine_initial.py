"""attendance_engine_initial

Revision ID: c4e1a7d2b9f3
Revises:
Create Date: 2026-10-18 09:00:00.000000

근태/휴가 엔진 테이블 생성 및 기본 주간 스케줄 시드.
Create the attendance and leave tables and seed the default weekly schedule
(Sunday/Saturday off, 08:00-09:30 check-in, 17:00-18:30 check-out).
"""
from datetime import time
from typing import Sequence, Union
import uuid

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID


# revision identifiers, used by Alembic.
revision: str = 'c4e1a7d2b9f3'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # users — ID 공급자 프로필 사본 (Profile mirror of the identity provider)
    op.create_table(
        'users',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        sa.Column('full_name', sa.String(255), nullable=False, server_default=''),
        sa.Column('email', sa.String(255), nullable=True),
        sa.Column('department', sa.String(255), nullable=False, server_default=''),
        sa.Column('title', sa.String(255), nullable=False, server_default=''),
        sa.Column('role', sa.String(20), nullable=False, server_default='employee'),
        sa.Column('is_active', sa.Boolean(), server_default=sa.text('true'), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    # attendance_schedule — 요일별 출퇴근 시간대 (exactly one row per weekday, 0=Sunday)
    schedule_table = op.create_table(
        'attendance_schedule',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        sa.Column('day_of_week', sa.Integer(), nullable=False, unique=True),
        sa.Column('check_in_start', sa.Time(), nullable=False),
        sa.Column('check_in_end', sa.Time(), nullable=False),
        sa.Column('check_out_start', sa.Time(), nullable=False),
        sa.Column('check_out_end', sa.Time(), nullable=False),
        sa.Column('is_working_day', sa.Boolean(), server_default=sa.text('true'), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.CheckConstraint('day_of_week >= 0 AND day_of_week <= 6', name='ck_schedule_day_of_week'),
    )

    # leave_requests — 휴가 신청 (pending → approved | declined, once)
    op.create_table(
        'leave_requests',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        sa.Column('user_id', UUID(as_uuid=True), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('start_date', sa.Date(), nullable=False),
        sa.Column('end_date', sa.Date(), nullable=False),
        sa.Column('reason', sa.Text(), nullable=True),
        sa.Column('status', sa.String(20), server_default='pending', nullable=False),
        sa.Column('approved_by', UUID(as_uuid=True), sa.ForeignKey('users.id', ondelete='SET NULL'), nullable=True),
        sa.Column('approved_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.CheckConstraint('start_date <= end_date', name='ck_leave_date_order'),
        sa.CheckConstraint("status IN ('pending', 'approved', 'declined')", name='ck_leave_status'),
    )
    op.create_index('ix_leave_requests_status', 'leave_requests', ['status'])
    op.create_index('ix_leave_requests_user', 'leave_requests', ['user_id'])

    # attendance — 근태 기록 (one record per user per local work date)
    op.create_table(
        'attendance',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        sa.Column('user_id', UUID(as_uuid=True), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('work_date', sa.Date(), nullable=False),
        sa.Column('check_in', sa.DateTime(timezone=True), nullable=False),
        sa.Column('check_out', sa.DateTime(timezone=True), nullable=True),
        sa.Column('status', sa.String(20), server_default='present', nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('leave_request_id', UUID(as_uuid=True), sa.ForeignKey('leave_requests.id', ondelete='SET NULL'), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index('ix_attendance_work_date_status', 'attendance', ['work_date', 'status'])

    # 유니크 제약 — 동일 사용자+날짜 중복 방지 (Enforces one record per user per day)
    op.create_unique_constraint('uq_attendance_user_date', 'attendance', ['user_id', 'work_date'])

    # notifications — 사용자 알림
    op.create_table(
        'notifications',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        sa.Column('user_id', UUID(as_uuid=True), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('message', sa.Text(), nullable=False),
        sa.Column('type', sa.String(20), server_default='info', nullable=False),
        sa.Column('is_read', sa.Boolean(), server_default=sa.text('false'), nullable=False),
        sa.Column('related_type', sa.String(50), nullable=True),
        sa.Column('related_id', UUID(as_uuid=True), nullable=True),
        sa.Column('attachment_url', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index('ix_notifications_user_read', 'notifications', ['user_id', 'is_read'])

    # 기본 주간 스케줄 시드 — Seed the default week (Mon..Fri working)
    op.bulk_insert(
        schedule_table,
        [
            {
                'id': uuid.uuid4(),
                'day_of_week': day,
                'check_in_start': time(8, 0),
                'check_in_end': time(9, 30),
                'check_out_start': time(17, 0),
                'check_out_end': time(18, 30),
                'is_working_day': day not in (0, 6),
            }
            for day in range(7)
        ],
    )


def downgrade() -> None:
    op.drop_index('ix_notifications_user_read', table_name='notifications')
    op.drop_table('notifications')
    op.drop_constraint('uq_attendance_user_date', 'attendance', type_='unique')
    op.drop_index('ix_attendance_work_date_status', table_name='attendance')
    op.drop_table('attendance')
    op.drop_index('ix_leave_requests_user', table_name='leave_requests')
    op.drop_index('ix_leave_requests_status', table_name='leave_requests')
    op.drop_table('leave_requests')
    op.drop_table('attendance_schedule')
    op.drop_table('users')
