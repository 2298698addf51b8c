from __future__ import annotations

import threading
import typing as tp
from dataclasses import dataclass
from enum import Enum

from .clock import Clock

class TimerState(Enum):
    STOPPED = 'Stopped'
    RUNNING = 'Running'

class CancellationToken:
    '''
    Single-use stop signal for exactly one update loop.
    Cancelling twice is a no-op.
    '''
    def __init__(self) -> None:
        self.__event = threading.Event()
        self.__lock = threading.Lock()

    def cancel(self) -> bool:
        '''
        Returns whether this call is the one that cancelled.
        '''
        with self.__lock:
            if self.__event.is_set():
                return False
            self.__event.set()
            return True

    @property
    def cancelled(self) -> bool:
        return self.__event.is_set()

    def wait(self, timeout: float | None = None) -> bool:
        '''
        Blocks until cancelled or `timeout` expires, whichever
        comes first. Returns `True` iff cancelled.
        '''
        return self.__event.wait(timeout)

@dataclass(frozen=True)
class Interval:
    '''
    What an update loop needs to know about one running interval.
    Immutable, so the loop never reads the timer's live fields.
    '''
    carried: float
    started_at: float

    def elapsedAt(self, now: float) -> float:
        return self.carried + max(0.0, now - self.started_at)

Spawner = tp.Callable[[str, Interval, CancellationToken], threading.Thread]

class Timer:
    def __init__(self, label: str, clock: Clock) -> None:
        self.__label = label
        self.__clock = clock

        self.accumulated = 0.0
        self.last_started_at: float | None = None
        self.state = TimerState.STOPPED
        self.__token: CancellationToken | None = None
        self.__worker: threading.Thread | None = None

    @property
    def label(self) -> str:
        return self.__label

    @property
    def token(self) -> CancellationToken | None:
        return self.__token

    @property
    def worker(self) -> threading.Thread | None:
        return self.__worker

    @property
    def running(self) -> bool:
        return self.state is TimerState.RUNNING

    def elapsed(self) -> float:
        if self.state is TimerState.RUNNING:
            assert self.last_started_at is not None
            return self.accumulated + max(
                0.0, self.__clock.since(self.last_started_at),
            )
        return self.accumulated

    def begin(self, spawn: Spawner) -> None:
        '''
        STOPPED -> RUNNING. `accumulated` carries over, so this is
        both the first start and every restart.
        If `spawn` raises, nothing about the timer has changed.
        '''
        assert self.state is TimerState.STOPPED
        started_at = self.__clock.now()
        token = CancellationToken()
        worker = spawn(self.__label, Interval(
            carried=self.accumulated, started_at=started_at,
        ), token)
        self.last_started_at = started_at
        self.__token = token
        self.__worker = worker
        self.state = TimerState.RUNNING

    def end(self) -> threading.Thread | None:
        '''
        RUNNING -> STOPPED. Cancels the update loop before taking
        the final reading. Returns the loop's thread for the
        caller to join.
        '''
        assert self.state is TimerState.RUNNING
        assert self.__token is not None
        assert self.last_started_at is not None
        self.__token.cancel()
        self.accumulated += max(0.0, self.__clock.since(self.last_started_at))
        self.last_started_at = None
        self.state = TimerState.STOPPED
        worker = self.__worker
        self.__worker = None
        return worker

    def __repr__(self) -> str:
        return f'<Timer {self.__label!r} {self.state.value} {self.elapsed():.3f}s>'
