"""Hand callbacks from worker threads to the Tk main loop.

Tk widgets must only be touched from the thread running ``mainloop``. Worker
threads post callbacks here; the UI drains the queue on an ``after`` timer.
The window passes its ``after``/``after_cancel`` methods so timer state lives
in one place and is cancelled when the app closes.
"""

from __future__ import annotations

import logging
import queue
from typing import Callable, Optional

ScheduleFn = Callable[[int, Callable[[], None]], str]
CancelFn = Callable[[str], None]


class UiCallQueue:
    """Thread-safe callback queue drained periodically on the UI thread."""

    def __init__(
        self,
        schedule: ScheduleFn,
        cancel: CancelFn,
        *,
        interval_ms: int = 30,
        max_batch: int = 50,
    ) -> None:
        self._log = logging.getLogger(__name__)
        self._schedule = schedule
        self._cancel = cancel
        self._interval_ms = max(1, int(interval_ms))
        self._max_batch = max(1, int(max_batch))
        self._pending: "queue.SimpleQueue[Callable[[], None]]" = queue.SimpleQueue()
        self._token: Optional[str] = None

    def post(self, callback: Callable[[], None]) -> None:
        """Queue ``callback`` for the UI thread. Safe from any thread."""
        self._pending.put(callback)

    def start(self) -> None:
        if self._token is None:
            self._token = self._schedule(self._interval_ms, self._tick)

    def stop(self) -> None:
        token, self._token = self._token, None
        if token is not None:
            self._cancel(token)

    def drain(self) -> int:
        """Run up to ``max_batch`` queued callbacks; return how many ran."""
        ran = 0
        while ran < self._max_batch:
            try:
                callback = self._pending.get_nowait()
            except queue.Empty:
                break
            ran += 1
            try:
                callback()
            except Exception:
                self._log.exception("UI callback failed")
        return ran

    def _tick(self) -> None:
        self._token = None
        self.drain()
        self.start()


__all__ = ["UiCallQueue"]
