from __future__ import annotations

from contextlib import contextmanager
from datetime import time, timedelta
from typing import Any, Dict, List, Optional

from .connection import DatabaseConnection


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    conn = conn_factory.connect()
    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def normalize_mysql_duration(value: Any) -> Optional[timedelta]:
    """Normalize a MySQL TIME column used as an elapsed duration.

    mysql-connector can return TIME as:
    - datetime.timedelta (may exceed 24h)
    - datetime.time
    - string (e.g. '08:30:00')
    """

    if value is None:
        return None

    if isinstance(value, timedelta):
        return value

    if isinstance(value, time):
        return timedelta(hours=value.hour, minutes=value.minute, seconds=value.second)

    if isinstance(value, str):
        parts = value.strip().split(":")
        if len(parts) < 2:
            raise ValueError(f"Invalid time string: {value!r}")
        hours = int(parts[0])
        minutes = int(parts[1])
        seconds = int(float(parts[2])) if len(parts) >= 3 and parts[2] else 0
        return timedelta(hours=hours, minutes=minutes, seconds=seconds)

    raise TypeError(f"Unsupported MySQL TIME value type: {type(value)!r}")


def normalize_mysql_time(value: Any) -> Optional[time]:
    """Normalize a MySQL TIME column used as a time of day."""

    delta = normalize_mysql_duration(value)
    if delta is None:
        return None
    total_seconds = int(delta.total_seconds()) % 86400
    return time(hour=total_seconds // 3600, minute=(total_seconds % 3600) // 60, second=total_seconds % 60)
