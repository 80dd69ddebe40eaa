"""Logical clocks read by expiry and validation logic."""

import threading
import time


class LogicalClock:
    """
    Source of the current logical time as a non-decreasing integer.
    """

    def now(self) -> int:
        raise NotImplementedError


class SystemClock(LogicalClock):
    """
    Wall clock in whole Unix seconds that never runs backwards.
    """

    def __init__(self):
        self._last = 0
        self._lock = threading.Lock()

    def now(self) -> int:
        with self._lock:
            self._last = max(self._last, int(time.time()))
            return self._last


class ManualClock(LogicalClock):
    """
    Clock advanced explicitly by its host, e.g. one tick per block or test step.
    """

    def __init__(self, start: int = 0):
        self._value = start

    def now(self) -> int:
        return self._value

    def advance(self, ticks: int = 1) -> int:
        if ticks < 0:
            raise ValueError("Logical clock cannot move backwards")
        self._value += ticks
        return self._value

    def set(self, value: int) -> None:
        if value < self._value:
            raise ValueError("Logical clock cannot move backwards")
        self._value = value
