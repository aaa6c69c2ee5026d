from __future__ import annotations

from typing import Protocol, Sequence

from .model import LeaveApplication


class LeaveRepository(Protocol):
    def list_for_user(self, *, user_id: int) -> Sequence[LeaveApplication]:
        """All of the user's applications, newest first."""

        raise NotImplementedError
