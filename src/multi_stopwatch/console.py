import sys
import threading
import typing as tp

from .broadcaster import ElapsedFields
from .commands import CommandDispatcher

PROMPT = 'Enter command and timer name (e.g., start Timer1): '

class Console:
    '''
    Line-based front end. Running timers overwrite the current
    line with `\\rTimer 'X': HH:MM:SS`.
    '''
    def __init__(
        self,
        dispatcher: CommandDispatcher,
        stdin: tp.TextIO | None = None,
        stdout: tp.TextIO | None = None,
    ) -> None:
        self.dispatcher = dispatcher
        self.stdin = stdin or sys.stdin
        self.stdout = stdout or sys.stdout

        self.__lock = threading.Lock()

    def write(self, text: str) -> None:
        with self.__lock:
            self.stdout.write(text)
            self.stdout.flush()

    def onTick(self, label: str, fields: ElapsedFields) -> None:
        self.write(f"\rTimer '{label}': {fields.render()}")

    def run(self) -> None:
        registry = self.dispatcher.registry
        unsubscribe = registry.subscribe(self.onTick)
        try:
            while True:
                self.write(PROMPT)
                line = self.stdin.readline()
                if not line:    # EOF
                    self.write('\n')
                    break
                if not line.strip():
                    continue
                reply = self.dispatcher.dispatch(line)
                self.write(reply.message + '\n')
                if reply.exit:
                    break
        finally:
            unsubscribe()
            registry.shutdown()
