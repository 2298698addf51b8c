from __future__ import annotations

import logging

from pydantic import BaseModel, ConfigDict

from .broadcaster import ElapsedFields
from .errors import TimerError
from .registry import TimerRegistry

log = logging.getLogger(__name__)

TIMER_VERBS = ('start', 'stop', 'restart', 'remove')
EXIT_VERBS = ('exit', 'quit')

INVALID_INPUT = 'Invalid input. Please enter a command and a timer name.'
INVALID_COMMAND = "Invalid command. Please enter 'start', 'stop', 'restart', 'remove' or 'exit'."

class CommandError(ValueError):
    pass

class Command(BaseModel):
    verb: str
    label: str | None

    model_config = ConfigDict(
        frozen=True,
    )

    @classmethod
    def parse(cls, line: str) -> Command:
        '''
        `<verb> <label>`. The label is everything after the first
        run of whitespace, so it may contain spaces.
        '''
        parts = line.strip().split(None, 1)
        if not parts:
            raise CommandError(INVALID_INPUT)
        verb = parts[0].lower()
        if verb in EXIT_VERBS:
            return cls(verb='exit', label=None)
        if verb not in TIMER_VERBS:
            raise CommandError(INVALID_COMMAND)
        if len(parts) < 2:
            raise CommandError(INVALID_INPUT)
        return cls(verb=verb, label=parts[1].strip())

class Reply(BaseModel):
    ok: bool
    message: str
    exit: bool = False

    model_config = ConfigDict(
        frozen=True,
    )

class CommandDispatcher:
    def __init__(self, registry: TimerRegistry) -> None:
        self.registry = registry

    def dispatch(self, line: str) -> Reply:
        try:
            command = Command.parse(line)
        except CommandError as e:
            return Reply(ok=False, message=str(e))
        return self.execute(command)

    def execute(self, command: Command) -> Reply:
        if command.verb == 'exit':
            return Reply(ok=True, message='Exiting application.', exit=True)
        label = command.label
        assert label is not None
        try:
            match command.verb:
                case 'start':
                    self.registry.startTimer(label)
                    return Reply(ok=True, message=f"Timer '{label}' started")
                case 'stop':
                    elapsed = self.registry.stopTimer(label)
                    return Reply(ok=True, message=(
                        f"Timer '{label}' stopped at {self.__render(elapsed.total_seconds())}"
                    ))
                case 'restart':
                    self.registry.restartTimer(label)
                    return Reply(ok=True, message=f"Timer '{label}' restarted")
                case 'remove':
                    elapsed = self.registry.remove(label)
                    return Reply(ok=True, message=(
                        f"Timer '{label}' removed at {self.__render(elapsed.total_seconds())}"
                    ))
                case _:
                    raise ValueError(f'Unknown verb: {command.verb}')
        except TimerError as e:
            log.info('Rejected %r on %r: %s', command.verb, label, type(e).__name__)
            return Reply(ok=False, message=str(e))

    @staticmethod
    def __render(seconds: float) -> str:
        return ElapsedFields.fromSeconds(seconds).render()
