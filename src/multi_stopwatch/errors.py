class TimerError(Exception):
    '''
    Base of every recoverable stopwatch error. `label` names the 
    timer the failed operation was about.
    '''
    template = 'Timer {label!r}: operation failed.'

    def __init__(self, label: str) -> None:
        super().__init__(label)
        self.label = label
    
    def __str__(self) -> str:
        return self.template.format(label=self.label)

class InvalidLabel(TimerError):
    template = 'Invalid input. Please enter a command and a timer name.'

class DuplicateLabel(TimerError):
    template = 'Timer {label!r} already exists.'

class TimerNotFound(TimerError):
    template = 'No timer named {label!r}.'

class NotRunning(TimerError):
    template = 'No active timer to stop.'

class AlreadyStopped(NotRunning):
    template = 'Timer {label!r} is already stopped.'

class NotStopped(TimerError):
    template = 'No stopped timer named {label!r} to restart.'

class AlreadyRunning(NotStopped):
    template = 'Timer is already running. Please stop it before starting a new one.'

class UseRestart(TimerError):
    template = 'Timer {label!r} is stopped. Use "restart {label}" to resume it.'
