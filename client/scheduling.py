"""Timer primitives used to debounce controller input."""

from __future__ import annotations

import asyncio
from typing import Callable, Protocol


class TimerHandle(Protocol):
    def cancel(self) -> None:
        """Prevent the scheduled callback from running."""


class Scheduler(Protocol):
    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        """Run `callback` once after `delay` seconds."""


class LoopScheduler:
    """Scheduler backed by the running asyncio event loop."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        return asyncio.get_running_loop().call_later(delay, callback)


class Debouncer:
    """Run a callback once input has been quiet for `delay_seconds`.

    Every `trigger()` cancels the pending callback and schedules a new one, so
    only the last trigger of a burst fires.
    """

    def __init__(
        self,
        callback: Callable[[], None],
        *,
        delay_seconds: float,
        scheduler: Scheduler | None = None,
    ) -> None:
        self._callback = callback
        self._delay_seconds = delay_seconds
        self._scheduler = scheduler or LoopScheduler()
        self._handle: TimerHandle | None = None

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def trigger(self) -> None:
        self.cancel()
        self._handle = self._scheduler.call_later(self._delay_seconds, self._fire)

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _fire(self) -> None:
        self._handle = None
        self._callback()
