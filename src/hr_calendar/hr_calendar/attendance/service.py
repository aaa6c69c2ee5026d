from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date, datetime, timedelta
from typing import Optional, Sequence

from ..common.datetime_utils import Clock
from ..core.constants import DEFAULT_LATE_GRACE_MINUTES
from ..core.exceptions import MalformedSessionError
from ..shifts.repository import ShiftRepository
from .factory import AttendanceStrategyFactory
from .model import AttendanceRecord
from .repository import AttendanceRepository
from .sessions import SessionSummary, summarize_sessions
from .strategies.base import StatusDecision

logger = logging.getLogger(__name__)


class AttendanceService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        shifts: ShiftRepository | None = None,
        *,
        strategy_factory: AttendanceStrategyFactory | None = None,
        clock: Clock | None = None,
        grace_minutes: int = DEFAULT_LATE_GRACE_MINUTES,
        evaluate_status: bool = False,
    ):
        self._attendance = attendance
        self._shifts = shifts
        self._factory = strategy_factory or AttendanceStrategyFactory()
        self._clock = clock or Clock()
        self._grace_minutes = int(grace_minutes)
        self._evaluate_status = evaluate_status

    def _local(self, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value
        return value.astimezone(self._clock.tz).replace(tzinfo=None)

    def evaluate(self, record: AttendanceRecord) -> StatusDecision:
        """Decide present/late/half day/absent from sessions and the user's shift."""

        summary = summarize_sessions(record.sessions)
        worked = record.total_hours if record.total_hours is not None else summary.total_worked
        worked_minutes = int(worked // timedelta(minutes=1))

        first_check_in = None
        if record.sessions:
            first_check_in = self._local(min(s.check_in for s in record.sessions))

        shift = self._shifts.get_for_user(record.user_id) if self._shifts else None
        strategy = self._factory.for_record(record=record, shift=shift)
        return strategy.decide(
            worked_minutes=worked_minutes,
            first_check_in=first_check_in,
            shift=shift,
            grace_minutes=self._grace_minutes,
        )

    def _with_status(self, record: AttendanceRecord) -> AttendanceRecord:
        """Fill in a missing label when evaluation is enabled.

        Days still in progress keep no label; the calendar then shows them as
        present from their sessions.
        """
        if record.status or not self._evaluate_status:
            return record
        if any(s.is_open for s in record.sessions):
            return record
        try:
            decision = self.evaluate(record)
        except MalformedSessionError as e:
            logger.warning("Cannot evaluate attendance %s for user %s: %s", record.work_date, record.user_id, e)
            return record
        return replace(record, status=decision.status.value)

    def list_for_range(self, user_id: int, start_date: date, end_date: date) -> list[AttendanceRecord]:
        rows: Sequence[AttendanceRecord] = self._attendance.list_for_user_range(
            user_id=int(user_id), start_date=start_date, end_date=end_date
        )
        return [self._with_status(r) for r in rows]

    def get_record(self, user_id: int, work_date: date) -> Optional[AttendanceRecord]:
        record = self._attendance.get_for_user_and_date(int(user_id), work_date)
        return self._with_status(record) if record else None

    def get_session_summary(self, user_id: int, work_date: date) -> Optional[SessionSummary]:
        record = self._attendance.get_for_user_and_date(int(user_id), work_date)
        if not record:
            return None
        return summarize_sessions(record.sessions)
