from __future__ import annotations

import logging
from typing import Callable, Union

from ..core.enums import ChangeKind

logger = logging.getLogger(__name__)

Handler = Callable[[], None]


class ChangeEvents:
    """In-process subscription point for "attendance changed" / "leave decision changed"."""

    def __init__(self):
        self._handlers: dict[ChangeKind, list[Handler]] = {kind: [] for kind in ChangeKind}

    def on_external_change(self, kind: Union[ChangeKind, str], handler: Handler) -> Callable[[], None]:
        """Register ``handler``; the returned callable removes it again."""

        kind = ChangeKind(kind)
        self._handlers[kind].append(handler)

        def unsubscribe() -> None:
            handlers = self._handlers[kind]
            if handler in handlers:
                handlers.remove(handler)

        return unsubscribe

    def publish(self, kind: Union[ChangeKind, str]) -> None:
        kind = ChangeKind(kind)
        logger.debug("External change: %s", kind.value)
        for handler in list(self._handlers[kind]):
            try:
                handler()
            except Exception:
                logger.exception("Change handler for %s failed", kind.value)
