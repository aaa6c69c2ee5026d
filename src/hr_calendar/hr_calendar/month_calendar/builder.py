from __future__ import annotations

import asyncio
import calendar
import logging
from dataclasses import dataclass
from datetime import date
from typing import Any, Awaitable, Optional

from ..attendance.model import AttendanceRecord
from ..attendance.sessions import SessionSummary, summarize_sessions
from ..common.datetime_utils import Clock
from ..common.validators import require_month, require_year
from ..core.constants import DEFAULT_FIRST_WEEKDAY
from ..core.enums import CalendarSource
from ..core.exceptions import FetchFailure, InvalidRangeError, MalformedSessionError
from ..holidays.model import Holiday
from ..leaves.expander import expand_leave
from ..leaves.model import LeaveApplication
from .model import MonthCalendar
from .resolver import resolve_day
from .sources import CalendarSources

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Fetched:
    value: Any = ()
    error: Optional[FetchFailure] = None


class MonthCalendarBuilder:
    """Builds a ``MonthCalendar`` from the three read collaborators.

    Re-runnable: every call fetches afresh and returns a new immutable value.
    When attendance or leave data cannot be fetched the calendar is built from
    whatever did arrive, and the failures are listed in ``errors``.
    """

    def __init__(
        self,
        sources: CalendarSources,
        *,
        clock: Clock | None = None,
        first_weekday: int = DEFAULT_FIRST_WEEKDAY,
    ):
        self._sources = sources
        self._clock = clock or Clock()
        self._first_weekday = int(first_weekday) % 7

    @property
    def first_weekday(self) -> int:
        return self._first_weekday

    async def _fetch(self, source: CalendarSource, call: Awaitable[Any]) -> _Fetched:
        try:
            return _Fetched(value=await call)
        except FetchFailure as e:
            logger.warning("%s", e)
            return _Fetched(error=e)
        except Exception as e:
            failure = FetchFailure(source, e)
            logger.warning("%s", failure)
            return _Fetched(error=failure)

    def _attendance_by_date(self, records, first: date, last: date):
        by_date: dict[date, AttendanceRecord] = {}
        summaries: dict[date, SessionSummary] = {}
        for record in records:
            day = record.work_date
            if not first <= day <= last:
                continue
            if day in by_date:
                logger.warning("Duplicate attendance record for user %s on %s ignored", record.user_id, day)
                continue
            try:
                summaries[day] = summarize_sessions(record.sessions)
            except MalformedSessionError as e:
                logger.error("Skipping attendance for user %s on %s: %s", record.user_id, day, e)
                continue
            by_date[day] = record
        return by_date, summaries

    def _leaves_by_date(self, leaves, first: date, last: date) -> dict[date, list[LeaveApplication]]:
        by_date: dict[date, list[LeaveApplication]] = {}
        for leave in leaves:
            try:
                in_month = expand_leave(leave).clip(first, last)
            except InvalidRangeError as e:
                logger.error("Skipping leave application: %s", e)
                continue
            if in_month is None:
                continue
            for leave_day in in_month:
                by_date.setdefault(leave_day.date, []).append(leave_day.leave)
        return by_date

    @staticmethod
    def _holidays_by_date(holidays, first: date, last: date) -> dict[date, Holiday]:
        by_date: dict[date, Holiday] = {}
        for holiday in holidays:
            if first <= holiday.date <= last:
                by_date.setdefault(holiday.date, holiday)
        return by_date

    async def build(self, user_id: int, year: int | None = None, month: int | None = None) -> MonthCalendar:
        today = self._clock.today()
        year = today.year if year is None else require_year(year)
        month = today.month if month is None else require_month(month)

        weekday_of_first, days_in_month = calendar.monthrange(year, month)
        first = date(year, month, 1)
        last = date(year, month, days_in_month)
        leading_blanks = (weekday_of_first - self._first_weekday) % 7

        attendance, leaves, holidays = await asyncio.gather(
            self._fetch(CalendarSource.ATTENDANCE, self._sources.fetch_attendance(user_id, first, last)),
            self._fetch(CalendarSource.LEAVE, self._sources.fetch_leave_applications(user_id)),
            self._fetch(CalendarSource.HOLIDAY, self._sources.fetch_holidays()),
        )
        errors = tuple(f.error for f in (attendance, leaves, holidays) if f.error is not None)
        today_marker = today if first <= today <= last else None

        if attendance.error and leaves.error:
            logger.error("No calendar data for user %s, %04d-%02d", user_id, year, month)
            return MonthCalendar(
                user_id=user_id,
                year=year,
                month=month,
                leading_blanks=leading_blanks,
                cells=(None,) * days_in_month,
                today=today_marker,
                errors=errors,
            )

        attendance_map, summaries = self._attendance_by_date(attendance.value or (), first, last)
        leave_map = self._leaves_by_date(leaves.value or (), first, last)
        holiday_map = self._holidays_by_date(holidays.value or (), first, last)

        cells = []
        for n in range(1, days_in_month + 1):
            day = date(year, month, n)
            cells.append(
                resolve_day(
                    day,
                    attendance_map.get(day),
                    leave_map.get(day, ()),
                    holiday_map.get(day),
                    sessions=summaries.get(day),
                )
            )

        return MonthCalendar(
            user_id=user_id,
            year=year,
            month=month,
            leading_blanks=leading_blanks,
            cells=tuple(cells),
            today=today_marker,
            errors=errors,
        )


async def build_month_calendar(
    sources: CalendarSources,
    user_id: int,
    year: int | None = None,
    month: int | None = None,
    *,
    clock: Clock | None = None,
) -> MonthCalendar:
    return await MonthCalendarBuilder(sources, clock=clock).build(user_id, year, month)
