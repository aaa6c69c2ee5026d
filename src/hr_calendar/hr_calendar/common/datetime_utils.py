from __future__ import annotations

from datetime import date, datetime, timedelta, tzinfo
from typing import Optional
from zoneinfo import ZoneInfo

from ..core.constants import DEFAULT_ORG_TIMEZONE


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_duration(value: Optional[str]) -> Optional[timedelta]:
    """Parse an ``H:MM:SS`` (or ``H:MM``) string into a timedelta."""

    if value is None:
        return None
    parts = str(value).strip().split(":")
    if len(parts) < 2 or not all(p.strip().isdigit() for p in parts[:3]):
        raise ValueError(f"Invalid duration string: {value!r}")
    hours = int(parts[0])
    minutes = int(parts[1])
    seconds = int(parts[2]) if len(parts) >= 3 else 0
    return timedelta(hours=hours, minutes=minutes, seconds=seconds)


def format_duration(value: timedelta) -> str:
    """Render as ``H:MM:SS``, truncated to the second."""

    total = int(value // timedelta(seconds=1))
    sign = "-" if total < 0 else ""
    total = abs(total)
    return f"{sign}{total // 3600}:{(total % 3600) // 60:02d}:{total % 60:02d}"


class Clock:
    """Source of "now" anchored to the organization's timezone.

    Injected wherever the current date matters so tests can pin it.
    """

    def __init__(self, tz: str | tzinfo = DEFAULT_ORG_TIMEZONE):
        self.tz = ZoneInfo(tz) if isinstance(tz, str) else tz

    def now(self) -> datetime:
        return datetime.now(self.tz)

    def today(self) -> date:
        return self.now().date()

    def local_date(self, value: datetime) -> date:
        """Calendar date of a timestamp in the organization's timezone.

        Naive timestamps are taken to already be local.
        """

        if value.tzinfo is None:
            return value.date()
        return value.astimezone(self.tz).date()


class FixedClock(Clock):
    def __init__(self, now: datetime, tz: str | tzinfo = DEFAULT_ORG_TIMEZONE):
        super().__init__(tz)
        self._now = now if now.tzinfo else now.replace(tzinfo=self.tz)

    def now(self) -> datetime:
        return self._now
