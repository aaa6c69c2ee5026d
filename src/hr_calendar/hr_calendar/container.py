from __future__ import annotations

from dataclasses import dataclass

from .attendance.factory import AttendanceStrategyFactory
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.service import AttendanceService
from .common.datetime_utils import Clock
from .core.constants import (
    DEFAULT_ATTENDANCE_SETTLE_SECONDS,
    DEFAULT_FIRST_WEEKDAY,
    DEFAULT_LATE_GRACE_MINUTES,
    DEFAULT_LEAVE_SETTLE_SECONDS,
    DEFAULT_ORG_TIMEZONE,
)
from .database.connection import DBConfig, DatabaseConnection
from .holidays.mysql_holiday_repository import MySQLHolidayRepository
from .leaves.mysql_leave_repository import MySQLLeaveRepository
from .month_calendar.builder import MonthCalendarBuilder
from .month_calendar.events import ChangeEvents
from .month_calendar.refresh import CalendarRefreshController, SettlePolicy
from .month_calendar.sources import RepositoryCalendarSources
from .shifts.mysql_shift_repository import MySQLShiftRepository


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection
    clock: Clock

    attendance_repo: MySQLAttendanceRepository
    shifts_repo: MySQLShiftRepository
    leaves_repo: MySQLLeaveRepository
    holidays_repo: MySQLHolidayRepository

    attendance_service: AttendanceService
    calendar_sources: RepositoryCalendarSources
    calendar_builder: MonthCalendarBuilder
    change_events: ChangeEvents
    settle_policy: SettlePolicy

    def refresh_controller(self) -> CalendarRefreshController:
        """A controller for one displayed calendar; close() it when the view goes away."""

        return CalendarRefreshController(self.calendar_builder, self.change_events, policy=self.settle_policy)


def build_container(
    *,
    db_config: dict,
    org_timezone: str = DEFAULT_ORG_TIMEZONE,
    first_weekday: int = DEFAULT_FIRST_WEEKDAY,
    grace_minutes: int = DEFAULT_LATE_GRACE_MINUTES,
    evaluate_status: bool = False,
    attendance_settle_seconds: float = DEFAULT_ATTENDANCE_SETTLE_SECONDS,
    leave_settle_seconds: float = DEFAULT_LEAVE_SETTLE_SECONDS,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_settings(db_config))
    clock = Clock(org_timezone)

    attendance_repo = MySQLAttendanceRepository(conn)
    shifts_repo = MySQLShiftRepository(conn)
    leaves_repo = MySQLLeaveRepository(conn)
    holidays_repo = MySQLHolidayRepository(conn)

    attendance_service = AttendanceService(
        attendance_repo,
        shifts_repo,
        strategy_factory=AttendanceStrategyFactory(),
        clock=clock,
        grace_minutes=grace_minutes,
        evaluate_status=evaluate_status,
    )
    calendar_sources = RepositoryCalendarSources(attendance_service, leaves_repo, holidays_repo)
    calendar_builder = MonthCalendarBuilder(calendar_sources, clock=clock, first_weekday=first_weekday)

    return Container(
        conn=conn,
        clock=clock,
        attendance_repo=attendance_repo,
        shifts_repo=shifts_repo,
        leaves_repo=leaves_repo,
        holidays_repo=holidays_repo,
        attendance_service=attendance_service,
        calendar_sources=calendar_sources,
        calendar_builder=calendar_builder,
        change_events=ChangeEvents(),
        settle_policy=SettlePolicy(
            attendance_seconds=attendance_settle_seconds,
            leave_seconds=leave_settle_seconds,
        ),
    )


def build_container_from_settings(settings) -> Container:
    """Wire from a ``config.*`` settings module; shared by the app factory and scripts."""

    return build_container(
        db_config=getattr(settings, "DB_CONFIG"),
        org_timezone=getattr(settings, "ORG_TIMEZONE", DEFAULT_ORG_TIMEZONE),
        first_weekday=int(getattr(settings, "CALENDAR_FIRST_WEEKDAY", DEFAULT_FIRST_WEEKDAY)),
        grace_minutes=int(getattr(settings, "LATE_GRACE_MINUTES", DEFAULT_LATE_GRACE_MINUTES)),
        evaluate_status=bool(getattr(settings, "EVALUATE_ATTENDANCE_STATUS", False)),
        attendance_settle_seconds=float(
            getattr(settings, "ATTENDANCE_SETTLE_SECONDS", DEFAULT_ATTENDANCE_SETTLE_SECONDS)
        ),
        leave_settle_seconds=float(getattr(settings, "LEAVE_SETTLE_SECONDS", DEFAULT_LEAVE_SETTLE_SECONDS)),
    )
