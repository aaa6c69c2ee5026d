"""Expansion of leave applications into the calendar dates they cover."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterator, NamedTuple, Optional

from ..core.exceptions import InvalidRangeError
from .model import LeaveApplication

ONE_DAY = timedelta(days=1)


class LeaveDay(NamedTuple):
    date: date
    leave: LeaveApplication


def leave_duration_days(start_date: date, end_date: date) -> int:
    """Inclusive day count: the same start and end is one day."""

    return (end_date - start_date).days + 1


def ranges_overlap(start1: date, end1: date, start2: date, end2: date) -> bool:
    return start1 <= end2 and end1 >= start2


@dataclass(frozen=True)
class LeaveRange:
    """Lazy, restartable sequence of ``LeaveDay`` from ``start`` to ``end`` inclusive."""

    leave: LeaveApplication
    start: date
    end: date

    def __iter__(self) -> Iterator[LeaveDay]:
        current = self.start
        while current <= self.end:
            yield LeaveDay(current, self.leave)
            current += ONE_DAY

    def __len__(self) -> int:
        return max(leave_duration_days(self.start, self.end), 0)

    def __contains__(self, item: object) -> bool:
        return isinstance(item, date) and self.start <= item <= self.end

    def clip(self, start: date, end: date) -> Optional["LeaveRange"]:
        """The part of this range inside ``start..end``, None when disjoint."""

        if not ranges_overlap(self.start, self.end, start, end):
            return None
        return LeaveRange(self.leave, max(self.start, start), min(self.end, end))


def expand_leave(leave: LeaveApplication) -> LeaveRange:
    if leave.end_date < leave.start_date:
        raise InvalidRangeError(
            f"Leave {leave.id} ends {leave.end_date.isoformat()} before it starts {leave.start_date.isoformat()}"
        )
    return LeaveRange(leave, leave.start_date, leave.end_date)
