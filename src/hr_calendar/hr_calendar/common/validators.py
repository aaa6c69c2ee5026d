from __future__ import annotations

from ..core.exceptions import ValidationError


def require_month(value: int) -> int:
    if not 1 <= int(value) <= 12:
        raise ValidationError(f"Invalid month: {value}")
    return int(value)


def require_year(value: int) -> int:
    if not 1 <= int(value) <= 9999:
        raise ValidationError(f"Invalid year: {value}")
    return int(value)
