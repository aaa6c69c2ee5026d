from __future__ import annotations

import asyncio
from datetime import date
from typing import Protocol, Sequence

from ..attendance.model import AttendanceRecord
from ..attendance.service import AttendanceService
from ..holidays.model import Holiday
from ..holidays.repository import HolidayRepository
from ..leaves.model import LeaveApplication
from ..leaves.repository import LeaveRepository


class CalendarSources(Protocol):
    """Read collaborators of the month calendar. Any raised exception counts as a fetch failure."""

    async def fetch_attendance(self, user_id: int, start_date: date, end_date: date) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    async def fetch_leave_applications(self, user_id: int) -> Sequence[LeaveApplication]:
        """All of the user's applications; the caller filters by month."""

        raise NotImplementedError

    async def fetch_holidays(self) -> Sequence[Holiday]:
        raise NotImplementedError


class RepositoryCalendarSources(CalendarSources):
    """Runs the blocking MySQL repositories in worker threads."""

    def __init__(self, attendance: AttendanceService, leaves: LeaveRepository, holidays: HolidayRepository):
        self._attendance = attendance
        self._leaves = leaves
        self._holidays = holidays

    async def fetch_attendance(self, user_id: int, start_date: date, end_date: date) -> Sequence[AttendanceRecord]:
        return await asyncio.to_thread(self._attendance.list_for_range, user_id, start_date, end_date)

    async def fetch_leave_applications(self, user_id: int) -> Sequence[LeaveApplication]:
        return await asyncio.to_thread(lambda: self._leaves.list_for_user(user_id=user_id))

    async def fetch_holidays(self) -> Sequence[Holiday]:
        return await asyncio.to_thread(self._holidays.list_all)
