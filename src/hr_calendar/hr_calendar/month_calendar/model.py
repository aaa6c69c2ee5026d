from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from types import MappingProxyType
from typing import Mapping, Optional, Tuple

from ..attendance.model import AttendanceRecord, GeoPoint
from ..attendance.sessions import SessionSummary
from ..common.datetime_utils import format_duration
from ..core.enums import DayKind
from ..core.exceptions import FetchFailure
from ..holidays.model import Holiday
from ..leaves.model import LeaveApplication

CSS_CLASSES = {
    DayKind.PRESENT: "bg-success",
    DayKind.ABSENT: "bg-danger",
    DayKind.LATE: "bg-warning text-dark",
    DayKind.HALF_DAY: "bg-info text-dark",
    DayKind.LEAVE_APPROVED: "bg-primary",
    DayKind.LEAVE_PENDING: "bg-secondary",
    DayKind.LEAVE_REJECTED: "bg-dark",
    DayKind.HOLIDAY: "bg-light text-dark",
}


def _point(p: Optional[GeoPoint]) -> Optional[dict]:
    return {"latitude": p.latitude, "longitude": p.longitude} if p else None


def _attendance_dict(a: AttendanceRecord) -> dict:
    total: Optional[timedelta] = a.total_hours
    return {
        "status": a.status,
        "notes": a.notes,
        "total_hours": format_duration(total) if total is not None else None,
        "sessions": [
            {
                "check_in": s.check_in.isoformat(),
                "check_out": s.check_out.isoformat() if s.check_out else None,
                "location_in": _point(s.location_in),
                "location_out": _point(s.location_out),
            }
            for s in a.sessions
        ],
    }


def _leave_dict(leave: LeaveApplication) -> dict:
    status = leave.normalized_status
    return {
        "id": leave.id,
        "start_date": leave.start_date.isoformat(),
        "end_date": leave.end_date.isoformat(),
        "status": status.value if status else None,
        "half_day_type": leave.half_day_type.value if leave.half_day_type else None,
        "reason": leave.reason,
        "rejection_reason": leave.rejection_reason,
    }


@dataclass(frozen=True)
class DayStatus:
    """Reconciled state of one calendar date.

    ``kind`` drives the primary color. On a holiday the leave (if any) is kept
    as a secondary indicator.
    """

    date: date
    kind: DayKind
    attendance: Optional[AttendanceRecord] = None
    leave: Optional[LeaveApplication] = None
    holiday: Optional[Holiday] = None
    sessions: Optional[SessionSummary] = None

    @property
    def css_class(self) -> str:
        return CSS_CLASSES[self.kind]

    def to_dict(self) -> dict:
        return {
            "date": self.date.isoformat(),
            "kind": self.kind.value,
            "css_class": self.css_class,
            "holiday": {"title": self.holiday.title} if self.holiday else None,
            "leave": _leave_dict(self.leave) if self.leave else None,
            "attendance": _attendance_dict(self.attendance) if self.attendance else None,
            "sessions": self.sessions.to_dict() if self.sessions else None,
        }


@dataclass(frozen=True)
class MonthCalendar:
    """One user's month, replaced wholesale on every rebuild.

    ``cells[i]`` is day ``i + 1``; None marks a day with no data at all.
    """

    user_id: int
    year: int
    month: int
    leading_blanks: int
    cells: Tuple[Optional[DayStatus], ...]
    today: Optional[date] = None
    errors: Tuple[FetchFailure, ...] = ()

    @property
    def days_in_month(self) -> int:
        return len(self.cells)

    @property
    def trailing_blanks(self) -> int:
        return -(self.leading_blanks + self.days_in_month) % 7

    @property
    def by_date(self) -> Mapping[date, DayStatus]:
        return MappingProxyType({c.date: c for c in self.cells if c is not None})

    def cell_for(self, day: date) -> Optional[DayStatus]:
        if (day.year, day.month) != (self.year, self.month):
            return None
        return self.cells[day.day - 1]

    def to_dict(self) -> dict:
        return {
            "user_id": self.user_id,
            "year": self.year,
            "month": self.month,
            "leading_blanks": self.leading_blanks,
            "trailing_blanks": self.trailing_blanks,
            "today": self.today.isoformat() if self.today else None,
            "cells": [c.to_dict() if c else None for c in self.cells],
            "errors": [{"source": e.source.value, "message": str(e)} for e in self.errors],
        }
