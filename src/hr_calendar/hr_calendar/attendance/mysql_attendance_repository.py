from __future__ import annotations

from collections import defaultdict
from datetime import date
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_duration
from .model import AttendanceRecord, GeoPoint, Session
from .repository import AttendanceRepository


def _point(lat, lng) -> Optional[GeoPoint]:
    if lat is None or lng is None:
        return None
    return GeoPoint(latitude=float(lat), longitude=float(lng))


def _to_session(r: dict) -> Session:
    return Session(
        check_in=r["check_in"],
        check_out=r.get("check_out"),
        location_in=_point(r.get("lat_in"), r.get("lng_in")),
        location_out=_point(r.get("lat_out"), r.get("lng_out")),
    )


def _to_record(r: dict, sessions: Sequence[Session]) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=int(r["attendance_id"]),
        user_id=int(r["user_id"]),
        work_date=r["work_date"],
        sessions=tuple(sessions),
        total_hours=normalize_mysql_duration(r.get("total_hours")),
        notes=r.get("notes"),
        status=r.get("calendar_status"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _sessions_for(self, cur, attendance_ids: Sequence[int]) -> dict[int, list[Session]]:
        by_record: dict[int, list[Session]] = defaultdict(list)
        if not attendance_ids:
            return by_record

        placeholders = ",".join(["%s"] * len(attendance_ids))
        cur.execute(
            f"""
            SELECT attendance_id, check_in, check_out, lat_in, lng_in, lat_out, lng_out
            FROM attendance_sessions
            WHERE attendance_id IN ({placeholders})
            ORDER BY attendance_id, check_in
            """,
            tuple(attendance_ids),
        )
        for r in fetchall(cur):
            by_record[int(r["attendance_id"])].append(_to_session(r))
        return by_record

    def list_for_user_range(self, *, user_id: int, start_date: date, end_date: date) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT attendance_id, user_id, work_date, total_hours, notes, calendar_status
                FROM attendance_records
                WHERE user_id=%s AND work_date BETWEEN %s AND %s
                ORDER BY work_date
                """,
                (int(user_id), start_date, end_date),
            )
            rows = fetchall(cur)
            sessions = self._sessions_for(cur, [int(r["attendance_id"]) for r in rows])
            return [_to_record(r, sessions.get(int(r["attendance_id"]), [])) for r in rows]

    def get_for_user_and_date(self, user_id: int, work_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT attendance_id, user_id, work_date, total_hours, notes, calendar_status
                FROM attendance_records
                WHERE user_id=%s AND work_date=%s
                """,
                (int(user_id), work_date),
            )
            r = fetchone(cur)
            if not r:
                return None
            sessions = self._sessions_for(cur, [int(r["attendance_id"])])
            return _to_record(r, sessions.get(int(r["attendance_id"]), []))
