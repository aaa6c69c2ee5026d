from __future__ import annotations

import asyncio
import logging
from datetime import date, datetime, timedelta, timezone

import pytest

from src.hr_calendar.hr_calendar.attendance.model import AttendanceRecord, Session
from src.hr_calendar.hr_calendar.attendance.service import AttendanceService
from src.hr_calendar.hr_calendar.common.datetime_utils import FixedClock
from src.hr_calendar.hr_calendar.core.enums import CalendarSource, DayKind, LeaveStatus
from src.hr_calendar.hr_calendar.core.exceptions import ValidationError
from src.hr_calendar.hr_calendar.holidays.model import Holiday
from src.hr_calendar.hr_calendar.leaves.model import LeaveApplication
from src.hr_calendar.hr_calendar.month_calendar.builder import MonthCalendarBuilder, build_month_calendar
from src.hr_calendar.hr_calendar.month_calendar.sources import RepositoryCalendarSources

IST = timezone(timedelta(hours=5, minutes=30))
CLOCK = FixedClock(datetime(2025, 3, 15, 10, 0))


class FakeSources:
    def __init__(self, attendance=(), leaves=(), holidays=(), fail=()):
        self.attendance = list(attendance)
        self.leaves = list(leaves)
        self.holidays = list(holidays)
        self.fail = set(fail)
        self.calls = []

    async def fetch_attendance(self, user_id, start_date, end_date):
        self.calls.append(("attendance", user_id, start_date, end_date))
        if "attendance" in self.fail:
            raise ConnectionError("attendance service unavailable")
        return list(self.attendance)

    async def fetch_leave_applications(self, user_id):
        self.calls.append(("leave", user_id))
        if "leave" in self.fail:
            raise ConnectionError("leave service unavailable")
        return list(self.leaves)

    async def fetch_holidays(self):
        self.calls.append(("holiday",))
        if "holiday" in self.fail:
            raise TimeoutError("holiday service timed out")
        return list(self.holidays)


def record(day: date, status: str | None = "present", sessions=None) -> AttendanceRecord:
    if sessions is None:
        sessions = (
            Session(
                check_in=datetime(day.year, day.month, day.day, 9, tzinfo=IST),
                check_out=datetime(day.year, day.month, day.day, 17, tzinfo=IST),
            ),
        )
    return AttendanceRecord(user_id=7, work_date=day, sessions=tuple(sessions), status=status)


def leave(start: date, end: date, status=LeaveStatus.PENDING, leave_id: int = 1) -> LeaveApplication:
    return LeaveApplication(id=leave_id, user_id=7, start_date=start, end_date=end, status=status, reason="Trip")


def build(sources, year=2025, month=3, **kwargs):
    builder = MonthCalendarBuilder(sources, clock=CLOCK, **kwargs)
    return asyncio.run(builder.build(7, year, month))


def test_grid_geometry_sunday_first():
    cal = build(FakeSources())

    assert cal.leading_blanks == 6
    assert cal.days_in_month == 31
    assert cal.trailing_blanks == 5
    assert (cal.leading_blanks + cal.days_in_month + cal.trailing_blanks) % 7 == 0


def test_grid_geometry_monday_first():
    cal = build(FakeSources(), first_weekday=0)

    assert cal.leading_blanks == 5
    assert cal.trailing_blanks == 6


@pytest.mark.parametrize("year, month", [(2024, 2), (2025, 2), (2025, 4), (2025, 12), (2026, 6)])
def test_grid_always_fills_whole_weeks(year, month):
    cal = build(FakeSources(), year=year, month=month)

    assert (cal.leading_blanks + cal.days_in_month + cal.trailing_blanks) % 7 == 0
    assert 0 <= cal.leading_blanks < 7
    assert 0 <= cal.trailing_blanks < 7


def test_pending_leave_over_three_days():
    sources = FakeSources(leaves=[leave(date(2025, 3, 10), date(2025, 3, 12))])

    cal = build(sources)

    kinds = {c.date.day: c.kind for c in cal.cells if c is not None}
    assert kinds == {10: DayKind.LEAVE_PENDING, 11: DayKind.LEAVE_PENDING, 12: DayKind.LEAVE_PENDING}
    assert cal.cell_for(date(2025, 3, 9)) is None
    assert not cal.errors


def test_attendance_failure_keeps_leave_days():
    sources = FakeSources(
        attendance=[record(date(2025, 3, 3))],
        leaves=[leave(date(2025, 3, 20), date(2025, 3, 20), status=2)],
        fail={"attendance"},
    )

    cal = build(sources)

    assert cal.cell_for(date(2025, 3, 20)).kind == DayKind.LEAVE_APPROVED
    assert cal.cell_for(date(2025, 3, 3)) is None
    assert [e.source for e in cal.errors] == [CalendarSource.ATTENDANCE]
    assert "attendance service unavailable" in str(cal.errors[0])


def test_leave_failure_keeps_attendance_days():
    sources = FakeSources(attendance=[record(date(2025, 3, 3))], fail={"leave"})

    cal = build(sources)

    assert cal.cell_for(date(2025, 3, 3)).kind == DayKind.PRESENT
    assert [e.source for e in cal.errors] == [CalendarSource.LEAVE]


def test_both_failures_give_an_empty_grid():
    sources = FakeSources(holidays=[Holiday(date(2025, 3, 14), "Holi")], fail={"attendance", "leave"})

    cal = build(sources)

    assert cal.cells == (None,) * 31
    assert {e.source for e in cal.errors} == {CalendarSource.ATTENDANCE, CalendarSource.LEAVE}
    assert cal.leading_blanks == 6


def test_holiday_failure_is_reported_but_not_fatal():
    sources = FakeSources(attendance=[record(date(2025, 3, 3))], fail={"holiday"})

    cal = build(sources)

    assert cal.cell_for(date(2025, 3, 3)).kind == DayKind.PRESENT
    assert [e.source for e in cal.errors] == [CalendarSource.HOLIDAY]


def test_holiday_precedence_in_month():
    sources = FakeSources(
        attendance=[record(date(2025, 3, 14))],
        leaves=[leave(date(2025, 3, 13), date(2025, 3, 14), status=2)],
        holidays=[Holiday(date(2025, 3, 14), "Holi"), Holiday(date(2025, 4, 14), "Other month")],
    )

    cal = build(sources)

    holi = cal.cell_for(date(2025, 3, 14))
    assert holi.kind == DayKind.HOLIDAY
    assert holi.leave is not None
    assert cal.cell_for(date(2025, 3, 13)).kind == DayKind.LEAVE_APPROVED


def test_rebuild_with_same_data_is_identical():
    sources = FakeSources(
        attendance=[record(date(2025, 3, 3)), record(date(2025, 3, 4), status="half day")],
        leaves=[leave(date(2025, 3, 10), date(2025, 3, 12))],
        holidays=[Holiday(date(2025, 3, 14), "Holi")],
    )

    assert build(sources) == build(sources)


def test_cross_month_leave_is_clipped():
    sources = FakeSources(leaves=[leave(date(2025, 2, 26), date(2025, 3, 2), status="approved")])

    cal = build(sources)

    days = sorted(c.date.day for c in cal.cells if c is not None)
    assert days == [1, 2]


def test_invalid_leave_range_is_skipped(caplog):
    sources = FakeSources(
        leaves=[
            leave(date(2025, 3, 12), date(2025, 3, 10), leave_id=1),
            leave(date(2025, 3, 20), date(2025, 3, 20), leave_id=2),
        ]
    )

    with caplog.at_level(logging.ERROR):
        cal = build(sources)

    assert cal.cell_for(date(2025, 3, 11)) is None
    assert cal.cell_for(date(2025, 3, 20)).kind == DayKind.LEAVE_PENDING
    assert "Skipping leave application" in caplog.text


def test_malformed_attendance_is_skipped():
    bad = record(
        date(2025, 3, 5),
        sessions=[
            Session(check_in=datetime(2025, 3, 5, 17, tzinfo=IST), check_out=datetime(2025, 3, 5, 9, tzinfo=IST))
        ],
    )
    sources = FakeSources(attendance=[bad, record(date(2025, 3, 6))])

    cal = build(sources)

    assert cal.cell_for(date(2025, 3, 5)) is None
    assert cal.cell_for(date(2025, 3, 6)).kind == DayKind.PRESENT


def test_records_outside_the_month_are_ignored():
    sources = FakeSources(attendance=[record(date(2025, 2, 28)), record(date(2025, 4, 1))])

    cal = build(sources)

    assert all(c is None for c in cal.cells)


def test_attendance_fetch_is_scoped_to_the_month():
    sources = FakeSources()

    build(sources, year=2024, month=2)

    assert ("attendance", 7, date(2024, 2, 1), date(2024, 2, 29)) in sources.calls


def test_today_marker_and_defaults():
    sources = FakeSources()

    current = asyncio.run(MonthCalendarBuilder(sources, clock=CLOCK).build(7))
    other = build(sources, year=2025, month=4)

    assert (current.year, current.month) == (2025, 3)
    assert current.today == date(2025, 3, 15)
    assert other.today is None


@pytest.mark.parametrize("month", [0, 13, -1])
def test_invalid_month_is_rejected(month):
    with pytest.raises(ValidationError):
        build(FakeSources(), month=month)


def test_session_summary_is_attached():
    sessions = [
        Session(check_in=datetime(2025, 3, 3, 9, tzinfo=IST), check_out=datetime(2025, 3, 3, 13, tzinfo=IST)),
        Session(check_in=datetime(2025, 3, 3, 14, tzinfo=IST), check_out=datetime(2025, 3, 3, 18, tzinfo=IST)),
    ]
    cal = build(FakeSources(attendance=[record(date(2025, 3, 3), sessions=sessions)]))

    summary = cal.cell_for(date(2025, 3, 3)).sessions
    assert summary.to_dict()["total_worked"] == "8:00:00"
    assert summary.to_dict()["breaks"] == ["1:00:00"]


def test_to_dict_shape():
    sources = FakeSources(leaves=[leave(date(2025, 3, 10), date(2025, 3, 10))], fail={"holiday"})

    data = build(sources).to_dict()

    assert data["leading_blanks"] == 6
    assert data["trailing_blanks"] == 5
    assert data["today"] == "2025-03-15"
    assert len(data["cells"]) == 31
    assert data["cells"][9]["kind"] == "leave-pending"
    assert data["cells"][9]["leave"]["status"] == "pending"
    assert data["errors"][0]["source"] == "holiday"


def test_build_month_calendar_helper():
    sources = FakeSources(attendance=[record(date(2025, 3, 3), status="late")])

    cal = asyncio.run(build_month_calendar(sources, 7, 2025, 3, clock=CLOCK))

    assert cal.cell_for(date(2025, 3, 3)).kind == DayKind.LATE
    assert cal.by_date[date(2025, 3, 3)].css_class == "bg-warning text-dark"


class InMemoryAttendanceRepo:
    def __init__(self, records):
        self._records = list(records)

    def list_for_user_range(self, *, user_id, start_date, end_date):
        return [r for r in self._records if r.user_id == user_id and start_date <= r.work_date <= end_date]

    def get_for_user_and_date(self, user_id, work_date):
        return next((r for r in self._records if r.user_id == user_id and r.work_date == work_date), None)


class InMemoryLeaveRepo:
    def list_for_user(self, *, user_id):
        return []


class InMemoryHolidayRepo:
    def list_all(self):
        return []


def test_unlabeled_days_with_sessions_show_present():
    clocked_in = AttendanceRecord(
        user_id=7,
        work_date=date(2025, 3, 15),
        sessions=(Session(check_in=datetime(2025, 3, 15, 9, tzinfo=IST)),),
    )
    short_day = record(
        date(2025, 3, 14),
        status=None,
        sessions=[Session(check_in=datetime(2025, 3, 14, 9, tzinfo=IST), check_out=datetime(2025, 3, 14, 11, tzinfo=IST))],
    )
    attendance = AttendanceService(InMemoryAttendanceRepo([clocked_in, short_day]), clock=CLOCK)
    sources = RepositoryCalendarSources(attendance, InMemoryLeaveRepo(), InMemoryHolidayRepo())

    cal = build(sources)

    assert cal.cell_for(date(2025, 3, 15)).kind == DayKind.PRESENT
    assert cal.cell_for(date(2025, 3, 15)).sessions.has_open_session
    assert cal.cell_for(date(2025, 3, 14)).kind == DayKind.PRESENT
