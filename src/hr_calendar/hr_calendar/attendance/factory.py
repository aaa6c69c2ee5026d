from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..shifts.model import Shift
from .model import AttendanceRecord
from .strategies.absent_strategy import AbsentStrategy
from .strategies.base import AttendanceStrategy
from .strategies.hours_strategy import WorkedHoursStrategy
from .strategies.shift_strategy import ShiftStrategy


@dataclass
class AttendanceStrategyFactory:
    """Factory Pattern: choose appropriate strategy based on rules."""

    def for_record(self, *, record: AttendanceRecord, shift: Optional[Shift]) -> AttendanceStrategy:
        if not record.sessions:
            return AbsentStrategy()
        if not shift:
            return WorkedHoursStrategy()
        return ShiftStrategy()
