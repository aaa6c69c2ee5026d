from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ...core.enums import AttendanceStatus
from ...shifts.model import Shift


@dataclass(frozen=True)
class StatusDecision:
    status: AttendanceStatus
    reason: Optional[str] = None


def describe_minutes(minutes: int) -> str:
    return f"{minutes // 60}h {minutes % 60}m"


class AttendanceStrategy(ABC):
    """Strategy Pattern: encapsulate how we decide a day's attendance status."""

    @abstractmethod
    def decide(
        self,
        *,
        worked_minutes: int,
        first_check_in: Optional[datetime],
        shift: Optional[Shift],
        grace_minutes: int,
    ) -> StatusDecision:
        raise NotImplementedError
