from .broadcaster import ElapsedFields, UpdateBroadcaster
from .clock import Clock, ManualClock, MonotonicClock
from .commands import CommandDispatcher, Reply
from .config import Settings
from .errors import (
    AlreadyRunning, AlreadyStopped, DuplicateLabel, InvalidLabel,
    NotRunning, NotStopped, TimerError, TimerNotFound, UseRestart,
)
from .registry import TimerRegistry
from .timer import CancellationToken, Timer, TimerState

__all__ = [
    "ElapsedFields", "UpdateBroadcaster",
    "Clock", "ManualClock", "MonotonicClock",
    "CommandDispatcher", "Reply",
    "Settings",
    "AlreadyRunning", "AlreadyStopped", "DuplicateLabel", "InvalidLabel",
    "NotRunning", "NotStopped", "TimerError", "TimerNotFound", "UseRestart",
    "TimerRegistry",
    "CancellationToken", "Timer", "TimerState",
]
