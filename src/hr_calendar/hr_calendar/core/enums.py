from __future__ import annotations

from enum import Enum
from typing import Optional, Union


class LeaveStatus(str, Enum):
    """Approval state of a leave application.

    The leave API reports it either as a small integer or as a lower-case
    string; both are accepted by ``normalize``.
    """

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    CANCELLED = "cancelled"

    @classmethod
    def normalize(cls, value: Union["LeaveStatus", int, str, None]) -> Optional["LeaveStatus"]:
        """Map any known representation to a member, ``None`` when unrecognized."""

        if value is None:
            return None
        if isinstance(value, cls):
            return value
        if isinstance(value, bool):
            return None
        if isinstance(value, int):
            return _LEAVE_STATUS_CODES.get(value)

        text = str(value).strip().lower()
        if text.isdigit():
            return _LEAVE_STATUS_CODES.get(int(text))
        return _LEAVE_STATUS_NAMES.get(text)


_LEAVE_STATUS_CODES = {
    1: LeaveStatus.PENDING,
    2: LeaveStatus.APPROVED,
    3: LeaveStatus.REJECTED,
    4: LeaveStatus.CANCELLED,
}

_LEAVE_STATUS_NAMES = {
    "pending": LeaveStatus.PENDING,
    "approved": LeaveStatus.APPROVED,
    "rejected": LeaveStatus.REJECTED,
    "cancelled": LeaveStatus.CANCELLED,
    "canceled": LeaveStatus.CANCELLED,
}


class HalfDayType(str, Enum):
    MORNING = "morning"
    AFTERNOON = "afternoon"


class AttendanceStatus(str, Enum):
    """Calendar status labels computed server-side for an attendance record."""

    PRESENT = "present"
    LATE = "late"
    HALF_DAY = "half day"
    ON_LEAVE = "on leave"
    ABSENT = "absent"


class DayKind(str, Enum):
    """Reconciled state of one calendar cell."""

    PRESENT = "present"
    ABSENT = "absent"
    LATE = "late"
    HALF_DAY = "half-day"
    LEAVE_APPROVED = "leave-approved"
    LEAVE_PENDING = "leave-pending"
    LEAVE_REJECTED = "leave-rejected"
    HOLIDAY = "holiday"


class ChangeKind(str, Enum):
    """External mutations that invalidate the displayed month."""

    ATTENDANCE = "attendance"
    LEAVE = "leave"


class CalendarSource(str, Enum):
    ATTENDANCE = "attendance"
    LEAVE = "leave"
    HOLIDAY = "holiday"
