from __future__ import annotations

import logging
import threading
import typing as tp
from datetime import timedelta

from .broadcaster import Sink, UpdateBroadcaster
from .clock import Clock
from .errors import (
    AlreadyRunning, AlreadyStopped, DuplicateLabel, InvalidLabel,
    NotRunning, NotStopped, TimerNotFound, UseRestart,
)
from .timer import Timer, TimerState

log = logging.getLogger(__name__)

class TimerRegistry:
    '''
    Sole owner of every `Timer`. All mutations happen under one
    lock. Update loops are joined outside it, so a sink may call
    back in.
    '''
    def __init__(
        self, broadcaster: UpdateBroadcaster,
        join_timeout: float | None = 5.0,
    ) -> None:
        '''
        `join_timeout`: how long `stopTimer` waits for the update
        loop to exit. `None` waits forever.
        '''
        self.broadcaster = broadcaster
        self.join_timeout = join_timeout

        self.__timers: dict[str, Timer] = {}
        self.__lock = threading.Lock()

    @property
    def clock(self) -> Clock:
        return self.broadcaster.clock

    @staticmethod
    def normalizeLabel(label: str) -> str:
        stripped = label.strip()
        if not stripped:
            raise InvalidLabel(label)
        return stripped

    def create(self, label: str) -> Timer:
        label = self.normalizeLabel(label)
        with self.__lock:
            if label in self.__timers:
                raise DuplicateLabel(label)
            timer = Timer(label, self.clock)
            self.__timers[label] = timer
            return timer

    def get(self, label: str) -> Timer:
        label = self.normalizeLabel(label)
        with self.__lock:
            try:
                return self.__timers[label]
            except KeyError:
                raise TimerNotFound(label) from None

    def remove(self, label: str) -> timedelta:
        label = self.normalizeLabel(label)
        with self.__lock:
            try:
                timer = self.__timers.pop(label)
            except KeyError:
                raise TimerNotFound(label) from None
            worker = timer.end() if timer.running else None
            elapsed = timer.accumulated
        self.__join(worker)
        log.info('Timer %r removed at %.3f s.', label, elapsed)
        return timedelta(seconds=elapsed)

    def labels(self) -> list[str]:
        with self.__lock:
            return list(self.__timers)

    def __contains__(self, label: object) -> bool:
        if not isinstance(label, str):
            return False
        with self.__lock:
            return label.strip() in self.__timers

    def __len__(self) -> int:
        with self.__lock:
            return len(self.__timers)

    def stateOf(self, label: str) -> TimerState:
        return self.get(label).state

    def elapsedOf(self, label: str) -> timedelta:
        label = self.normalizeLabel(label)
        with self.__lock:
            try:
                timer = self.__timers[label]
            except KeyError:
                raise TimerNotFound(label) from None
            return timedelta(seconds=timer.elapsed())

    def startTimer(self, label: str) -> None:
        label = self.normalizeLabel(label)
        with self.__lock:
            existing = self.__timers.get(label)
            if existing is not None:
                if existing.running:
                    raise AlreadyRunning(label)
                raise UseRestart(label)
            timer = Timer(label, self.clock)
            timer.begin(self.broadcaster.spawn)
            self.__timers[label] = timer
        log.info('Timer %r started.', label)

    def stopTimer(self, label: str) -> timedelta:
        label = self.normalizeLabel(label)
        with self.__lock:
            timer = self.__timers.get(label)
            if timer is None:
                raise NotRunning(label)
            if not timer.running:
                raise AlreadyStopped(label)
            worker = timer.end()
            elapsed = timer.accumulated
        self.__join(worker)
        log.info('Timer %r stopped at %.3f s.', label, elapsed)
        return timedelta(seconds=elapsed)

    def restartTimer(self, label: str) -> None:
        label = self.normalizeLabel(label)
        with self.__lock:
            timer = self.__timers.get(label)
            if timer is None:
                raise NotStopped(label)
            if timer.running:
                raise AlreadyRunning(label)
            timer.begin(self.broadcaster.spawn)
            carried = timer.accumulated
        log.info('Timer %r restarted from %.3f s.', label, carried)

    def subscribe(self, sink: Sink) -> tp.Callable[[], None]:
        return self.broadcaster.subscribe(sink)

    def shutdown(self) -> None:
        with self.__lock:
            workers = [
                timer.end() for timer in self.__timers.values()
                if timer.running
            ]
        for worker in workers:
            self.__join(worker)
        if workers:
            log.info('Stopped %d running timer(s) on shutdown.', len(workers))

    def __join(self, worker: threading.Thread | None) -> None:
        if worker is None or worker is threading.current_thread():
            return
        worker.join(self.join_timeout)
        if worker.is_alive():
            log.warning(
                'Update loop %s did not exit within %s s.',
                worker.name, self.join_timeout,
            )
