"""Worked and break durations for the sessions of one day."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from typing import Optional, Sequence, Tuple

from ..common.datetime_utils import format_duration
from ..core.exceptions import MalformedSessionError
from .model import Session

ONE_SECOND = timedelta(seconds=1)
IN_PROGRESS = "Ongoing"


def _truncate(value: timedelta) -> timedelta:
    return timedelta(seconds=value // ONE_SECOND)


def session_duration(session: Session) -> Optional[timedelta]:
    """``check_out - check_in`` truncated to the second; None while the session is open."""

    if session.check_out is None:
        return None
    if session.check_out < session.check_in:
        raise MalformedSessionError(
            f"Check-out {session.check_out.isoformat()} is before check-in {session.check_in.isoformat()}"
        )
    return _truncate(session.check_out - session.check_in)


def break_durations(sessions: Sequence[Session]) -> list[Optional[timedelta]]:
    """Idle time between each adjacent pair of sessions.

    An entry is None when the earlier session has not checked out.
    """

    breaks: list[Optional[timedelta]] = []
    for prev, nxt in zip(sessions, sessions[1:]):
        if prev.check_out is None:
            breaks.append(None)
            continue
        if nxt.check_in < prev.check_out:
            raise MalformedSessionError(
                f"Session starting {nxt.check_in.isoformat()} overlaps the previous one ending {prev.check_out.isoformat()}"
            )
        breaks.append(_truncate(nxt.check_in - prev.check_out))
    return breaks


@dataclass(frozen=True)
class SessionSummary:
    durations: Tuple[Optional[timedelta], ...]
    breaks: Tuple[Optional[timedelta], ...]
    total_worked: timedelta
    total_break: timedelta
    completed_count: int

    @property
    def session_count(self) -> int:
        return len(self.durations)

    @property
    def has_open_session(self) -> bool:
        return self.completed_count < self.session_count

    @property
    def completion_percent(self) -> int:
        if not self.durations:
            return 0
        return round(self.completed_count * 100 / self.session_count)

    def to_dict(self) -> dict:
        return {
            "sessions": [format_duration(d) if d is not None else IN_PROGRESS for d in self.durations],
            "breaks": [format_duration(b) if b is not None else None for b in self.breaks],
            "total_worked": format_duration(self.total_worked),
            "total_break": format_duration(self.total_break),
            "session_count": self.session_count,
            "completed_count": self.completed_count,
            "completion_percent": self.completion_percent,
            "has_open_session": self.has_open_session,
        }


def summarize_sessions(sessions: Sequence[Session]) -> SessionSummary:
    """Per-session durations, breaks and day totals.

    The open session (if any) does not count toward ``total_worked``.
    """

    durations = tuple(session_duration(s) for s in sessions)
    breaks = tuple(break_durations(sessions))
    closed = [d for d in durations if d is not None]
    return SessionSummary(
        durations=durations,
        breaks=breaks,
        total_worked=sum(closed, timedelta()),
        total_break=sum((b for b in breaks if b is not None), timedelta()),
        completed_count=len(closed),
    )
