"""Debounced value propagation.

Each ``submit`` supersedes whatever was pending: the previous timer is
cancelled and a generation counter moves on, so a stale timer that still
fires is ignored.
"""

from __future__ import annotations

import threading
from typing import Any, Callable, Generic, TypeVar

T = TypeVar("T")

TimerFactory = Callable[[float, Callable[[], None]], Any]


class Debouncer(Generic[T]):
    def __init__(
        self,
        interval: float,
        callback: Callable[[T], None],
        *,
        timer_factory: TimerFactory = threading.Timer,
    ) -> None:
        self.interval = interval
        self.callback = callback
        self.timer_factory = timer_factory
        self.lock = threading.Lock()
        self._generation = 0
        self._timer = None
        self._pending: tuple[int, T] | None = None

    @property
    def pending(self) -> bool:
        with self.lock:
            return self._pending is not None

    def submit(self, value: T) -> None:
        with self.lock:
            if self._timer is not None:
                self._timer.cancel()
            self._generation += 1
            generation = self._generation
            self._pending = (generation, value)
            timer = self.timer_factory(self.interval, lambda: self._fire(generation))
            if hasattr(timer, "daemon"):
                timer.daemon = True
            self._timer = timer
        timer.start()

    def _take(self, generation: int | None) -> tuple[bool, T | None]:
        with self.lock:
            if self._pending is None:
                return False, None
            pending_generation, value = self._pending
            if generation is not None and generation != pending_generation:
                return False, None
            self._pending = None
            self._timer = None
            return True, value

    def _fire(self, generation: int) -> None:
        ready, value = self._take(generation)
        if ready:
            self.callback(value)

    def flush(self) -> bool:
        """Deliver the pending value now. Returns False when nothing was pending."""
        with self.lock:
            timer = self._timer
        if timer is not None:
            timer.cancel()
        ready, value = self._take(None)
        if ready:
            self.callback(value)
        return ready

    def cancel(self) -> None:
        with self.lock:
            if self._timer is not None:
                self._timer.cancel()
            self._timer = None
            self._pending = None
