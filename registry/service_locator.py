"""Service locator for process-wide registry components."""

from typing import Optional

from registry.clock import LogicalClock, SystemClock

_clock: Optional[LogicalClock] = None


def set_clock(clock: LogicalClock):
    """Set global logical clock instance"""
    global _clock
    _clock = clock


def get_clock() -> LogicalClock:
    """Get global logical clock instance, creating a system clock on first use"""
    global _clock
    if _clock is None:
        _clock = SystemClock()
    return _clock
