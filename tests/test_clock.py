import pytest

from multi_stopwatch.clock import ManualClock, MonotonicClock

def test_monotonic_clock_moves_forward() -> None:
    clock = MonotonicClock()
    a = clock.now()
    b = clock.now()
    assert b >= a
    assert clock.since(a) >= 0.0

def test_manual_clock_only_moves_when_advanced() -> None:
    clock = ManualClock(start=5.0)
    assert clock.now() == 5.0
    assert clock.now() == 5.0
    assert clock.advance(2.5) == 7.5
    assert clock.since(5.0) == 2.5

def test_manual_clock_rejects_going_backwards() -> None:
    clock = ManualClock()
    with pytest.raises(ValueError):
        clock.advance(-1.0)
    assert clock.now() == 0.0
