from __future__ import annotations

from datetime import datetime
from typing import Optional

from ...core.constants import FULL_DAY_MIN_MINUTES, HALF_DAY_MIN_MINUTES
from ...core.enums import AttendanceStatus
from ...shifts.model import Shift
from .base import AttendanceStrategy, StatusDecision, describe_minutes


class ShiftStrategy(AttendanceStrategy):
    """Shift assigned: short days are absent, then lateness, then half day."""

    def decide(self, *, worked_minutes: int, first_check_in: Optional[datetime], shift: Optional[Shift], grace_minutes: int) -> StatusDecision:
        worked = describe_minutes(worked_minutes)
        if worked_minutes < HALF_DAY_MIN_MINUTES:
            return StatusDecision(status=AttendanceStatus.ABSENT, reason=f"Insufficient working time: {worked}")

        if shift and first_check_in:
            late_minutes = shift.minutes_late(first_check_in)
            if late_minutes > grace_minutes:
                return StatusDecision(
                    status=AttendanceStatus.LATE,
                    reason=f"Late by {late_minutes} minutes (shift starts at {shift.start_time:%H:%M})",
                )

        if worked_minutes < FULL_DAY_MIN_MINUTES:
            return StatusDecision(status=AttendanceStatus.HALF_DAY, reason=f"Half day - worked {worked}")
        return StatusDecision(status=AttendanceStatus.PRESENT, reason=f"On time and worked {worked}")
