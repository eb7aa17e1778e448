"""
Process-wide cooldown between accepted analyze requests.
"""
from __future__ import annotations

import threading
import time
from typing import Callable, Optional


class CooldownGate:
    """
    Accepts at most one request per cooldown window.

    There is a single clock for the whole process, not one per client. The
    check and the update of the last-accepted mark happen under one lock.
    """

    def __init__(self, window_seconds: float, clock: Callable[[], float] = time.monotonic):
        self.window_seconds = window_seconds
        self._clock = clock
        self._last_accepted: Optional[float] = None
        self._lock = threading.Lock()

    def try_acquire(self) -> bool:
        """Record the request and return True, or return False if too soon."""
        with self._lock:
            now = self._clock()
            if self._last_accepted is not None and now - self._last_accepted < self.window_seconds:
                return False
            self._last_accepted = now
            return True

    def retry_after(self) -> float:
        """Seconds until the next request would be accepted."""
        with self._lock:
            if self._last_accepted is None:
                return 0.0
            return max(0.0, self.window_seconds - (self._clock() - self._last_accepted))
