"""Deferred settle queue for buffer notifications and the lost-focus poll."""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass, field

from .view import Coordinate


@dataclass
class SettleBatch:
    """Coalesced notifications of one burst."""

    cursors: dict[int, Coordinate] = field(default_factory=dict)
    changed_buffers: set[int] = field(default_factory=set)

    def __bool__(self) -> bool:
        return bool(self.cursors or self.changed_buffers)


class NotificationQueue:
    """Collect cursor/text notifications until the host asks to settle.

    Repeated notifications for one buffer collapse: the last cursor wins and
    a text change is recorded once, so a burst settles in one pass.
    """

    def __init__(self) -> None:
        self._pending = SettleBatch()

    @property
    def has_pending(self) -> bool:
        return bool(self._pending)

    def cursor_moved(self, buffer: int, line: int, col: int = 0) -> None:
        self._pending.cursors[buffer] = Coordinate(line, col)

    def text_changed(self, buffer: int) -> None:
        self._pending.changed_buffers.add(buffer)

    def drain(self) -> SettleBatch:
        batch, self._pending = self._pending, SettleBatch()
        return batch


@dataclass
class FocusWatch:
    """Interval gate for the lost-focus check, driven by the host loop."""

    interval_seconds: float = 1.0
    monotonic: Callable[[], float] = time.monotonic
    last_poll: float | None = None

    def start(self) -> None:
        self.last_poll = self.monotonic()

    def stop(self) -> None:
        self.last_poll = None

    @property
    def running(self) -> bool:
        return self.last_poll is not None

    def due(self) -> bool:
        """Return whether a check should run now, advancing the poll clock."""
        if self.last_poll is None:
            return False
        now = self.monotonic()
        if (now - self.last_poll) < self.interval_seconds:
            return False
        self.last_poll = now
        return True


__all__ = [
    "SettleBatch",
    "NotificationQueue",
    "FocusWatch",
]
