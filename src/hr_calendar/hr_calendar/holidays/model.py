from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass(frozen=True)
class Holiday:
    """Public holiday; applies to every user."""

    date: date
    title: str
    holiday_id: Optional[int] = None
