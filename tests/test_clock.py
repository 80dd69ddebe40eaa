"""Tests for logical clocks."""

import pytest

from registry.clock import ManualClock, SystemClock
from registry.service_locator import get_clock, set_clock


class TestManualClock:
    def test_advance_and_set(self):
        clock = ManualClock(start=5)
        assert clock.now() == 5
        assert clock.advance(3) == 8
        clock.set(20)
        assert clock.now() == 20

    def test_cannot_move_backwards(self):
        clock = ManualClock(start=10)
        with pytest.raises(ValueError):
            clock.advance(-1)
        with pytest.raises(ValueError):
            clock.set(9)


class TestSystemClock:
    def test_never_decreases(self, monkeypatch):
        clock = SystemClock()
        monkeypatch.setattr("registry.clock.time.time", lambda: 500.7)
        assert clock.now() == 500
        monkeypatch.setattr("registry.clock.time.time", lambda: 400.0)
        assert clock.now() == 500


class TestServiceLocator:
    def test_set_and_get_clock(self, monkeypatch):
        monkeypatch.setattr("registry.service_locator._clock", None)
        assert isinstance(get_clock(), SystemClock)

        manual = ManualClock()
        set_clock(manual)
        assert get_clock() is manual
