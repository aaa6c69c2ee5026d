from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time


@dataclass(frozen=True)
class Shift:
    """Work shift assigned to a user; the evaluator measures lateness from ``start_time``."""

    shift_id: int
    shift_name: str
    start_time: time
    end_time: time
    break_minutes: int = 0

    def starts_at(self, day: date) -> datetime:
        """Naive local start of the shift on ``day``."""
        return datetime.combine(day, self.start_time)

    def minutes_late(self, first_check_in: datetime) -> int:
        """Whole minutes between shift start and a naive local check-in (negative when early)."""
        return int((first_check_in - self.starts_at(first_check_in.date())).total_seconds() // 60)
