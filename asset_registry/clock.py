"""Time sources for listing expiry checks (unix seconds)."""

import threading
import time
from typing import Callable

Clock = Callable[[], int]


def system_clock() -> int:
    """Current wall-clock time in whole seconds."""
    return int(time.time())


class ManualClock:
    """Clock that only moves when told to; used by tests and simulations."""

    def __init__(self, start: int | None = None) -> None:
        self._now = system_clock() if start is None else start
        self._lock = threading.Lock()

    def __call__(self) -> int:
        return self._now

    def advance(self, seconds: int) -> int:
        """Move forward by ``seconds`` and return the new time."""
        if seconds < 0:
            raise ValueError("ManualClock cannot go backwards")
        with self._lock:
            self._now += seconds
            return self._now

    def set(self, timestamp: int) -> None:
        with self._lock:
            self._now = timestamp
