from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Optional, Tuple


@dataclass(frozen=True)
class GeoPoint:
    latitude: float
    longitude: float


@dataclass(frozen=True)
class Session:
    """One check-in/check-out pair. ``check_out`` is None while clocked in."""

    check_in: datetime
    check_out: Optional[datetime] = None
    location_in: Optional[GeoPoint] = None
    location_out: Optional[GeoPoint] = None

    @property
    def is_open(self) -> bool:
        return self.check_out is None


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: a user's attendance for one calendar date.

    ``status`` is the calendar status label reported by the server (for
    example ``"present"`` or ``"half day"``); None when it was not computed.
    """

    user_id: int
    work_date: date
    sessions: Tuple[Session, ...] = ()
    total_hours: Optional[timedelta] = None
    notes: Optional[str] = None
    status: Optional[str] = None
    attendance_id: Optional[int] = None
