import typing as tp

from rich.text import Text
from textual import on
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import VerticalScroll
from textual.message import Message
from textual.widgets import Footer, Header, Input, Static

from .broadcaster import ElapsedFields
from .commands import CommandDispatcher
from .errors import TimerNotFound
from .registry import TimerRegistry
from .timer import TimerState
from .widgets import TimerPanel, titled

class TimerTicked(Message):
    def __init__(self, label: str, fields: ElapsedFields) -> None:
        super().__init__()
        self.label = label
        self.fields = fields

class UI(App):
    CSS = '''
    #feedback {
        height: 1;
        margin: 0 1;
    }
    #timer-view {
        height: 1fr;
    }
    '''
    BINDINGS = [
        Binding("ctrl+q", "quit", "Quit."),
        Binding("escape", "clear_command", "Clear."),
    ]

    def __init__(
        self,
        registry: TimerRegistry,
        dispatcher: CommandDispatcher | None = None,
    ) -> None:
        super().__init__()

        self.registry = registry
        self.dispatcher = dispatcher or CommandDispatcher(registry)
        self.panels: dict[str, TimerPanel] = {}
        self.unsubscribe: tp.Callable[[], None] | None = None

        self.title = "Stopwatches"

    def run(self, *args, **kw) -> tp.Any | None:
        try:
            return super().run(*args, **kw)
        finally:
            self.registry.shutdown()

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        yield Input(
            placeholder="start NAME | stop NAME | restart NAME | remove NAME | exit",
            id="command-input",
        )
        yield Static('', id="feedback")
        yield titled(VerticalScroll(id="timer-view"), 'Timers')
        yield Footer()

    def on_mount(self) -> None:
        self.unsubscribe = self.registry.subscribe(self.onTick)
        self.query_one('#command-input', Input).focus()

    def onTick(self, label: str, fields: ElapsedFields) -> None:
        # Runs on update-loop threads. post_message is thread-safe.
        self.post_message(TimerTicked(label, fields))

    @on(TimerTicked)
    def showTick(self, message: TimerTicked) -> None:
        panel = self.panels.get(message.label)
        if panel is None:
            return
        try:
            state = self.registry.stateOf(message.label)
        except TimerNotFound:
            return
        if state is not TimerState.RUNNING:
            return  # queued before the stop
        panel.elapsed = message.fields
        panel.running = True

    @on(Input.Submitted, '#command-input')
    async def onCommand(self, event: Input.Submitted) -> None:
        reply = self.dispatcher.dispatch(event.value)
        self.query_one('#feedback', Static).update(Text(reply.message))
        if reply.exit:
            self.exit()
            return
        if reply.ok:
            event.input.value = ''
        await self.syncPanels()

    async def syncPanels(self) -> None:
        labels = self.registry.labels()
        for label in [x for x in self.panels if x not in labels]:
            await self.panels.pop(label).remove()
        view = self.query_one('#timer-view', VerticalScroll)
        for label in labels:
            try:
                running = self.registry.stateOf(label) is TimerState.RUNNING
                seconds = self.registry.elapsedOf(label).total_seconds()
            except TimerNotFound:
                continue
            panel = self.panels.get(label)
            if panel is None:
                panel = TimerPanel(label)
                self.panels[label] = panel
                await view.mount(panel)
            panel.showElapsed(seconds, running)

    def action_clear_command(self) -> None:
        self.query_one('#command-input', Input).value = ''

    def exit(self, result=None, return_code: int = 0, message=None) -> None:
        if self.unsubscribe is not None:
            self.unsubscribe()
            self.unsubscribe = None
        self.registry.shutdown()
        return super().exit(result, return_code, message)
