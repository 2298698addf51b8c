import threading

import pytest

from multi_stopwatch.broadcaster import ElapsedFields, UpdateBroadcaster
from multi_stopwatch.clock import ManualClock, MonotonicClock
from multi_stopwatch.registry import TimerRegistry

class RecordingSink:
    def __init__(self) -> None:
        self.reports: list[tuple[str, ElapsedFields]] = []
        self.lock = threading.Lock()

    def __call__(self, label: str, fields: ElapsedFields) -> None:
        with self.lock:
            self.reports.append((label, fields))

    def of(self, label: str) -> list[ElapsedFields]:
        with self.lock:
            return [f for l, f in self.reports if l == label]

@pytest.fixture
def clock() -> ManualClock:
    return ManualClock(start=100.0)

@pytest.fixture
def registry(clock: ManualClock):
    # interval long enough that no tick fires during a test
    r = TimerRegistry(UpdateBroadcaster(clock, interval=60.0), join_timeout=5.0)
    yield r
    r.shutdown()

@pytest.fixture
def live_registry():
    r = TimerRegistry(UpdateBroadcaster(MonotonicClock(), interval=0.05), join_timeout=5.0)
    yield r
    r.shutdown()

@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()

def loopThreads(label: str) -> list[threading.Thread]:
    return [
        t for t in threading.enumerate()
        if t.name == f'stopwatch:{label}' and t.is_alive()
    ]
