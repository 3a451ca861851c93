"""서비스 패키지 — 근태 및 휴가 비즈니스 로직 계층.

Service package. Check-in classification, leave approval and its per-day
materialization, dashboard aggregation, and notifications. Services flush;
routers commit, except the leave workflow which commits each step itself.
"""
