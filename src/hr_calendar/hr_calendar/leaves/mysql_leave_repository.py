from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import HalfDayType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import LeaveApplication
from .repository import LeaveRepository


def _half_day(value) -> Optional[HalfDayType]:
    if not value:
        return None
    try:
        return HalfDayType(str(value).strip().lower())
    except ValueError:
        return None


class MySQLLeaveRepository(LeaveRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_user(self, *, user_id: int) -> Sequence[LeaveApplication]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT request_id, user_id, leave_type, start_date, end_date, reason,
                       status, half_day_type, rejection_reason, created_at
                FROM leave_requests
                WHERE user_id=%s
                ORDER BY created_at DESC
                """,
                (int(user_id),),
            )
            rows = fetchall(cur)
            return [
                LeaveApplication(
                    id=int(r["request_id"]),
                    user_id=int(r["user_id"]),
                    leave_type=r.get("leave_type"),
                    start_date=r["start_date"],
                    end_date=r["end_date"],
                    reason=r.get("reason") or "",
                    status=r["status"],
                    half_day_type=_half_day(r.get("half_day_type")),
                    rejection_reason=r.get("rejection_reason"),
                    created_at=r.get("created_at"),
                )
                for r in rows
            ]
