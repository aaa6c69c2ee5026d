"""Reconciliation of attendance, leave and holiday data for a single date.

Precedence, highest first:

1. holiday (a leave on the same date is kept as a secondary indicator)
2. leave, by the effective application's status
3. attendance, by the server label or, without one, by whether any session exists
4. nothing: no ``DayStatus`` at all
"""

from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..attendance.model import AttendanceRecord
from ..attendance.sessions import SessionSummary
from ..core.enums import DayKind, LeaveStatus
from ..holidays.model import Holiday
from ..leaves.model import LeaveApplication
from .model import DayStatus

_LEAVE_KINDS = {
    LeaveStatus.APPROVED: DayKind.LEAVE_APPROVED,
    LeaveStatus.REJECTED: DayKind.LEAVE_REJECTED,
    # cancelled renders the same as rejected
    LeaveStatus.CANCELLED: DayKind.LEAVE_REJECTED,
    LeaveStatus.PENDING: DayKind.LEAVE_PENDING,
}

# lower wins; unrecognized statuses sit between pending and rejected
_LEAVE_RANK = {
    LeaveStatus.APPROVED: 0,
    LeaveStatus.PENDING: 1,
    None: 2,
    LeaveStatus.REJECTED: 3,
    LeaveStatus.CANCELLED: 4,
}

_ATTENDANCE_KINDS = {
    "present": DayKind.PRESENT,
    "active": DayKind.PRESENT,
    "half day": DayKind.HALF_DAY,
    "half-day": DayKind.HALF_DAY,
    "half_day": DayKind.HALF_DAY,
    "on leave": DayKind.LEAVE_APPROVED,
    "late": DayKind.LATE,
    "absent": DayKind.ABSENT,
}


def leave_kind(leave: LeaveApplication) -> DayKind:
    return _LEAVE_KINDS.get(leave.normalized_status, DayKind.LEAVE_PENDING)


def attendance_kind(record: AttendanceRecord) -> DayKind:
    if record.status:
        label = getattr(record.status, "value", record.status)
        return _ATTENDANCE_KINDS.get(str(label).strip().lower(), DayKind.ABSENT)
    return DayKind.PRESENT if record.sessions else DayKind.ABSENT


def _leave_sort_key(leave: LeaveApplication):
    created = leave.created_at.timestamp() if leave.created_at else float("-inf")
    return (_LEAVE_RANK[leave.normalized_status], -created, -int(leave.id))


def pick_effective_leave(entries: Sequence[LeaveApplication]) -> Optional[LeaveApplication]:
    """Approved > Pending > Rejected > Cancelled, then the most recently created."""

    if not entries:
        return None
    return min(entries, key=_leave_sort_key)


def resolve_day(
    day: date,
    attendance: Optional[AttendanceRecord] = None,
    leave_entries: Sequence[LeaveApplication] = (),
    holiday: Optional[Holiday] = None,
    *,
    sessions: Optional[SessionSummary] = None,
) -> Optional[DayStatus]:
    leave = pick_effective_leave(leave_entries)

    if holiday is not None:
        kind = DayKind.HOLIDAY
    elif leave is not None:
        kind = leave_kind(leave)
    elif attendance is not None:
        kind = attendance_kind(attendance)
    else:
        return None

    return DayStatus(
        date=day,
        kind=kind,
        attendance=attendance,
        leave=leave,
        holiday=holiday,
        sessions=sessions,
    )
