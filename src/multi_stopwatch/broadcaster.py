from __future__ import annotations

import logging
import threading
import time
import typing as tp

from pydantic import BaseModel, ConfigDict, NonNegativeInt

from .clock import Clock
from .timer import CancellationToken, Interval

log = logging.getLogger(__name__)

DEFAULT_INTERVAL = 0.5  # seconds

class ElapsedFields(BaseModel):
    hours: NonNegativeInt
    minutes: NonNegativeInt
    seconds: NonNegativeInt

    model_config = ConfigDict(
        frozen=True,
    )

    @classmethod
    def fromSeconds(cls, elapsed: float) -> ElapsedFields:
        total = max(0, int(elapsed))
        return cls(
            hours=total // 3600,
            minutes=total // 60 % 60,
            seconds=total % 60,
        )

    def totalSeconds(self) -> int:
        return self.hours * 3600 + self.minutes * 60 + self.seconds

    def render(self) -> str:
        return f'{self.hours:02d}:{self.minutes:02d}:{self.seconds:02d}'

Sink = tp.Callable[[str, ElapsedFields], None]

class UpdateBroadcaster:
    '''
    Owns the sinks and runs one polling loop per running interval.
    Sinks may be called from any loop thread. Marshalling onto a
    UI thread is the sink's job.
    '''
    def __init__(
        self, clock: Clock, interval: float = DEFAULT_INTERVAL,
    ) -> None:
        if interval <= 0:
            raise ValueError(f'Polling interval must be positive, got {interval}.')
        self.clock = clock
        self.interval = interval

        self.__sinks: list[Sink] = []
        self.__lock = threading.Lock()

    def subscribe(self, sink: Sink) -> tp.Callable[[], None]:
        with self.__lock:
            self.__sinks.append(sink)
        return lambda: self.unsubscribe(sink)

    def unsubscribe(self, sink: Sink) -> None:
        with self.__lock:
            try:
                self.__sinks.remove(sink)
            except ValueError:
                pass

    def publish(
        self, label: str, elapsed: float,
        token: CancellationToken | None = None,
    ) -> ElapsedFields:
        '''
        Once `token` is cancelled, the remaining sinks of this
        round are skipped.
        '''
        fields = ElapsedFields.fromSeconds(elapsed)
        with self.__lock:
            sinks = tuple(self.__sinks)
        for sink in sinks:
            if token is not None and token.cancelled:
                break
            try:
                sink(label, fields)
            except Exception:
                log.exception('Sink %r failed on timer %r.', sink, label)
        return fields

    def spawn(
        self, label: str, interval: Interval, token: CancellationToken,
    ) -> threading.Thread:
        worker = threading.Thread(
            target=self.pollLoop, args=(label, interval, token),
            name=f'stopwatch:{label}', daemon=True,
        )
        worker.start()
        return worker

    def pollLoop(
        self, label: str, interval: Interval, token: CancellationToken,
    ) -> None:
        log.debug('Update loop for %r started.', label)
        # ticks are scheduled on real time, independent of sink latency
        next_tick = time.monotonic() + self.interval
        while not token.wait(max(0.0, next_tick - time.monotonic())):
            self.publish(label, interval.elapsedAt(self.clock.now()), token)
            next_tick += self.interval
            now = time.monotonic()
            if next_tick <= now:    # sinks overran; skip missed ticks
                next_tick += (now - next_tick) // self.interval * self.interval + self.interval
        log.debug('Update loop for %r exited.', label)
