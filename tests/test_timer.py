import threading

import pytest

from multi_stopwatch.clock import ManualClock
from multi_stopwatch.timer import CancellationToken, Interval, Timer, TimerState

def fakeSpawn(calls: list):
    def spawn(label: str, interval: Interval, token: CancellationToken) -> threading.Thread:
        calls.append((label, interval, token))
        return threading.Thread(target=lambda: None)
    return spawn

def test_token_cancels_once() -> None:
    token = CancellationToken()
    assert not token.cancelled
    assert token.cancel() is True
    assert token.cancelled
    assert token.cancel() is False
    assert token.cancelled

def test_token_wait_returns_on_cancel() -> None:
    token = CancellationToken()
    assert token.wait(0.01) is False
    threading.Timer(0.05, token.cancel).start()
    assert token.wait(5.0) is True

def test_interval_never_goes_below_carried() -> None:
    interval = Interval(carried=3.0, started_at=10.0)
    assert interval.elapsedAt(12.0) == 5.0
    assert interval.elapsedAt(9.0) == 3.0

def test_new_timer_is_stopped_at_zero() -> None:
    timer = Timer('A', ManualClock())
    assert timer.label == 'A'
    assert timer.state is TimerState.STOPPED
    assert timer.elapsed() == 0.0
    assert timer.token is None
    assert timer.worker is None

def test_begin_and_end_accumulate() -> None:
    clock = ManualClock()
    calls: list = []
    timer = Timer('A', clock)

    timer.begin(fakeSpawn(calls))
    assert timer.running
    clock.advance(4.0)
    assert timer.elapsed() == 4.0
    first_token = timer.token
    timer.end()
    assert first_token is not None and first_token.cancelled
    assert timer.state is TimerState.STOPPED
    assert timer.accumulated == 4.0

    clock.advance(100.0)    # stopped time does not count
    assert timer.elapsed() == 4.0

    timer.begin(fakeSpawn(calls))
    clock.advance(1.5)
    assert timer.elapsed() == 5.5
    timer.end()
    assert timer.accumulated == 5.5

    (_, i0, t0), (_, i1, t1) = calls
    assert i0 == Interval(carried=0.0, started_at=0.0)
    assert i1 == Interval(carried=4.0, started_at=104.0)
    assert t0 is not t1

def test_failed_spawn_leaves_timer_untouched() -> None:
    timer = Timer('A', ManualClock())
    def boom(*_):
        raise RuntimeError('no threads today')
    with pytest.raises(RuntimeError):
        timer.begin(boom)
    assert timer.state is TimerState.STOPPED
    assert timer.last_started_at is None
    assert timer.token is None
