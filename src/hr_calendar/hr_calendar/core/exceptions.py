from __future__ import annotations

from typing import Optional

from .enums import CalendarSource


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class MalformedSessionError(DomainError):
    """Raised when a session checks out before it checks in, or overlaps the next one."""


class InvalidRangeError(DomainError):
    """Raised when a leave application ends before it starts."""


class FetchFailure(DomainError):
    """A read collaborator failed (network, server, timeout: all treated alike)."""

    def __init__(self, source: CalendarSource, cause: Optional[BaseException] = None):
        self.source = CalendarSource(source)
        self.cause = cause
        detail = f": {cause}" if cause is not None else ""
        super().__init__(f"Failed to fetch {self.source.value} data{detail}")
