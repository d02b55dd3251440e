"""
Trailing debounce on top of an asyncio-style scheduler.

Any object with ``call_later(delay, callback)`` returning a handle with
``cancel()`` can act as the scheduler. The running asyncio event loop is the
default; without one, a daemon timer thread is used.
"""

import asyncio
import threading
from typing import Any, Callable, Optional


class ThreadTimerScheduler:
    """call_later provider backed by threading.Timer, for code without an event loop."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> threading.Timer:
        timer = threading.Timer(delay, callback)
        timer.daemon = True
        timer.start()
        return timer


class Debouncer:
    """
    Runs a callback once a quiet period has passed since the latest trigger.

    Every trigger cancels the pending call and schedules a new one, so a burst
    of triggers collapses into a single call after the last of them.
    """

    def __init__(self, delay: float, callback: Callable[[], None], scheduler: Optional[Any] = None):
        """
        Initialize the debouncer.

        Args:
            delay: Quiet period in seconds
            callback: Function to run when the quiet period elapses
            scheduler: Object providing call_later; the running event loop, or a
                timer thread outside of one, when omitted
        """
        self.delay = delay
        self.callback = callback
        self.scheduler = scheduler
        self._handle: Optional[Any] = None

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def trigger(self) -> None:
        """(Re)start the quiet period."""
        self.cancel()
        self._handle = self._resolve_scheduler().call_later(self.delay, self._fire)

    def cancel(self) -> None:
        """Drop the pending call, if any."""
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _fire(self) -> None:
        self._handle = None
        self.callback()

    def _resolve_scheduler(self) -> Any:
        if self.scheduler is not None:
            return self.scheduler
        try:
            return asyncio.get_running_loop()
        except RuntimeError:
            return ThreadTimerScheduler()
