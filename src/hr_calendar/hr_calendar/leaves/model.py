from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional, Union

from ..core.enums import HalfDayType, LeaveStatus


@dataclass(frozen=True)
class LeaveApplication:
    """A request for time off covering ``start_date..end_date`` inclusive.

    ``status`` is kept as delivered by the leave API (enum, integer code or
    lower-case string); read it through ``normalized_status``.
    """

    id: int
    user_id: int
    start_date: date
    end_date: date
    status: Union[LeaveStatus, int, str, None]
    reason: str = ""
    half_day_type: Optional[HalfDayType] = None
    rejection_reason: Optional[str] = None
    leave_type: Optional[int] = None
    created_at: Optional[datetime] = None

    @property
    def normalized_status(self) -> Optional[LeaveStatus]:
        return LeaveStatus.normalize(self.status)
