"""Rebuilds the displayed month when attendance or leave data changes elsewhere.

Events are debounced: each one pushes the rebuild deadline out to at least
``now + settle delay`` for its kind, and everything arriving before the
deadline collapses into a single rebuild. Every rebuild takes a new generation
number; a build that finishes after a newer one started is thrown away.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from functools import partial
from typing import Callable, Optional, Union

from ..core.constants import DEFAULT_ATTENDANCE_SETTLE_SECONDS, DEFAULT_LEAVE_SETTLE_SECONDS
from ..core.enums import ChangeKind
from .builder import MonthCalendarBuilder
from .events import ChangeEvents
from .model import MonthCalendar

logger = logging.getLogger(__name__)

Listener = Callable[[MonthCalendar], None]


@dataclass(frozen=True)
class SettlePolicy:
    """Seconds to wait after an event before the upstream store is trusted."""

    attendance_seconds: float = DEFAULT_ATTENDANCE_SETTLE_SECONDS
    leave_seconds: float = DEFAULT_LEAVE_SETTLE_SECONDS

    def delay_for(self, kind: Union[ChangeKind, str]) -> float:
        if ChangeKind(kind) is ChangeKind.LEAVE:
            return max(float(self.leave_seconds), 0.0)
        return max(float(self.attendance_seconds), 0.0)


class CalendarRefreshController:
    """Keeps the current ``MonthCalendar`` of one view up to date.

    Must be used from inside a running event loop.
    """

    def __init__(
        self,
        builder: MonthCalendarBuilder,
        events: ChangeEvents,
        *,
        policy: SettlePolicy | None = None,
    ):
        self._builder = builder
        self._policy = policy or SettlePolicy()
        self._view: Optional[tuple[int, Optional[int], Optional[int]]] = None
        self._calendar: Optional[MonthCalendar] = None
        self._generation = 0
        self._listeners: list[Listener] = []
        self._timer: Optional[asyncio.TimerHandle] = None
        self._deadline: Optional[float] = None
        self._tasks: set[asyncio.Task] = set()
        self._unsubscribe = [
            events.on_external_change(kind, partial(self._on_change, kind)) for kind in ChangeKind
        ]

    @property
    def current(self) -> Optional[MonthCalendar]:
        return self._calendar

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def pending(self) -> bool:
        return self._timer is not None

    def on_update(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def show(self, user_id: int, year: int | None = None, month: int | None = None) -> Optional[MonthCalendar]:
        """Switch the view (navigation) and build it right away."""

        self._view = (int(user_id), year, month)
        return await self._rebuild()

    async def refresh(self) -> Optional[MonthCalendar]:
        if self._view is None:
            return None
        return await self._rebuild()

    async def _rebuild(self) -> Optional[MonthCalendar]:
        self._generation += 1
        generation = self._generation
        user_id, year, month = self._view

        calendar = await self._builder.build(user_id, year, month)
        if generation != self._generation:
            logger.debug("Discarding calendar build %s, superseded by %s", generation, self._generation)
            return self._calendar

        self._calendar = calendar
        for listener in list(self._listeners):
            try:
                listener(calendar)
            except Exception:
                logger.exception("Calendar update listener failed")
        return calendar

    def _on_change(self, kind: ChangeKind) -> None:
        if self._view is None:
            return

        loop = asyncio.get_running_loop()
        deadline = loop.time() + self._policy.delay_for(kind)
        if self._deadline is not None and self._deadline > deadline:
            deadline = self._deadline
        if self._timer is not None:
            self._timer.cancel()

        logger.debug("%s change: rebuild scheduled in %.2fs", kind.value, deadline - loop.time())
        self._deadline = deadline
        self._timer = loop.call_at(deadline, self._fire)

    def _fire(self) -> None:
        self._timer = None
        self._deadline = None
        task = asyncio.ensure_future(self._background_refresh())
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _background_refresh(self) -> None:
        try:
            await self.refresh()
        except Exception:
            logger.exception("Calendar refresh failed")

    async def wait_idle(self) -> None:
        """Wait until no rebuild is scheduled or running."""

        while self._timer is not None or self._tasks:
            if self._tasks:
                await asyncio.gather(*list(self._tasks))
            else:
                await asyncio.sleep(max(self._deadline - asyncio.get_running_loop().time(), 0))

    def close(self) -> None:
        for unsubscribe in self._unsubscribe:
            unsubscribe()
        self._unsubscribe = []
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
            self._deadline = None
        for task in list(self._tasks):
            task.cancel()
        self._listeners.clear()
