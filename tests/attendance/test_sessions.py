from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from src.hr_calendar.hr_calendar.attendance.model import Session
from src.hr_calendar.hr_calendar.attendance.sessions import (
    break_durations,
    session_duration,
    summarize_sessions,
)
from src.hr_calendar.hr_calendar.common.datetime_utils import format_duration
from src.hr_calendar.hr_calendar.core.exceptions import MalformedSessionError

IST = timezone(timedelta(hours=5, minutes=30))


def at(hour: int, minute: int = 0, second: int = 0, microsecond: int = 0) -> datetime:
    return datetime(2025, 3, 10, hour, minute, second, microsecond, tzinfo=IST)


def test_two_sessions_with_lunch_break():
    sessions = [Session(check_in=at(9), check_out=at(13)), Session(check_in=at(14), check_out=at(18))]

    summary = summarize_sessions(sessions)

    assert summary.breaks == (timedelta(hours=1),)
    assert format_duration(summary.breaks[0]) == "1:00:00"
    assert format_duration(summary.total_worked) == "8:00:00"
    assert summary.completed_count == 2
    assert summary.completion_percent == 100


def test_duration_is_exact_difference_for_closed_sessions():
    for minutes in (0, 1, 59, 61, 480, 725):
        s = Session(check_in=at(8), check_out=at(8) + timedelta(minutes=minutes, seconds=7))
        assert session_duration(s) == timedelta(minutes=minutes, seconds=7)


def test_duration_is_truncated_not_rounded():
    s = Session(check_in=at(9), check_out=at(10, 0, 59, 999_999))

    assert session_duration(s) == timedelta(hours=1, seconds=59)
    assert format_duration(session_duration(s)) == "1:00:59"


def test_open_session_is_in_progress_and_not_counted():
    sessions = [Session(check_in=at(9), check_out=at(12, 30)), Session(check_in=at(13))]

    summary = summarize_sessions(sessions)

    assert summary.durations[-1] is None
    assert summary.total_worked == timedelta(hours=3, minutes=30)
    assert summary.has_open_session
    assert summary.completion_percent == 50
    assert summary.to_dict()["sessions"] == ["3:30:00", "Ongoing"]


def test_break_after_open_session_is_undefined():
    sessions = [Session(check_in=at(9)), Session(check_in=at(14), check_out=at(15))]

    assert break_durations(sessions) == [None]


def test_zero_sessions():
    summary = summarize_sessions([])

    assert summary.durations == ()
    assert summary.breaks == ()
    assert summary.total_worked == timedelta()
    assert summary.completion_percent == 0
    assert not summary.has_open_session


def test_checkout_before_checkin_is_rejected():
    with pytest.raises(MalformedSessionError):
        session_duration(Session(check_in=at(17), check_out=at(8)))


def test_overlapping_sessions_are_rejected():
    sessions = [Session(check_in=at(9), check_out=at(13)), Session(check_in=at(12), check_out=at(18))]

    with pytest.raises(MalformedSessionError):
        summarize_sessions(sessions)


def test_timestamps_in_different_offsets_compare_as_instants():
    check_in = at(9)
    check_out = datetime(2025, 3, 10, 4, 30, tzinfo=timezone.utc)  # 10:00 IST

    assert session_duration(Session(check_in=check_in, check_out=check_out)) == timedelta(hours=1)
