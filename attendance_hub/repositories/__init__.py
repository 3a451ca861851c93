"""레포지토리 패키지 — 데이터베이스 쿼리 계층.

Repository package. One module per table (users, schedule, attendance,
leave requests, notifications); each binds its model to BaseRepository
and exposes a module-level singleton. No commits happen here.
"""
