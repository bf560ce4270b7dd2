"""
Clock abstraction for deterministic testing

The generator reads wall-clock milliseconds through a ClockProvider so tests
can freeze time, move it backwards, or script the exact sequence of readings
seen while the generator spins on an exhausted millisecond.

Fun fact: time.time() on some platforms only ticks every 15.6 ms. The
nanosecond counter avoids float rounding when converting to milliseconds.
"""

import threading
import time
from collections import deque
from typing import Protocol


class ClockProvider(Protocol):
    """Protocol for wall-clock sources - allows deterministic testing"""

    def now_millis(self) -> int:
        """Return milliseconds elapsed since 1970-01-01T00:00:00Z"""
        ...


class SystemClock:
    """Production clock backed by the system wall clock"""

    def now_millis(self) -> int:
        return time.time_ns() // 1_000_000


class TestClock:
    """
    Controllable clock for deterministic tests

    Readings queued with schedule() are returned once each, in order, before
    the clock falls back to its current fixed value.
    """

    __test__ = False

    def __init__(self, initial_millis: int = 0) -> None:
        """
        Initialize with optional fixed time

        Args:
            initial_millis: Starting time in ms since 1970 (defaults to epoch)
        """
        self._current = initial_millis
        self._scheduled: deque[int] = deque()
        self._lock = threading.Lock()
        self.reads = 0

    def now_millis(self) -> int:
        with self._lock:
            self.reads += 1
            if self._scheduled:
                self._current = self._scheduled.popleft()
            return self._current

    def set_millis(self, millis: int) -> None:
        """Set current time to a specific value"""
        with self._lock:
            self._current = millis

    def advance_millis(self, millis: int = 1) -> None:
        """Advance (or, with a negative value, rewind) the clock"""
        with self._lock:
            self._current += millis

    def schedule(self, *readings: int) -> None:
        """Queue successive readings; the last one becomes the current time"""
        with self._lock:
            self._scheduled.extend(readings)


# Global default clock
default_clock: ClockProvider = SystemClock()
