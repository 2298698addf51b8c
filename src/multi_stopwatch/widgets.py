from rich.text import Text
from textual.app import RenderResult
from textual.reactive import reactive
from textual.widget import Widget

from .broadcaster import ElapsedFields

def titled(w: Widget, /, title: str) -> Widget:
    w.styles.border = ('round', '#999')
    w.border_title = title
    w.styles.padding = (0, 1)
    return w

class TimerPanel(Widget):
    elapsed: reactive[ElapsedFields] = reactive(ElapsedFields.fromSeconds(0))
    running: reactive[bool] = reactive(True)

    DEFAULT_CSS = '''
    TimerPanel {
        height: 1;
    }
    TimerPanel.-stopped {
        text-style: dim;
    }
    '''

    def __init__(self, label: str, *args, **kw) -> None:
        super().__init__(*args, **kw)

        self.timer_label = label

    def render(self) -> RenderResult:
        # plain Text, labels are user input and must not parse as markup
        text = f"Timer '{self.timer_label}': {self.elapsed.render()}"
        if not self.running:
            text += ' (stopped)'
        return Text(text)

    def watch_running(self, _, running: bool) -> None:
        self.set_class(not running, '-stopped')

    def showElapsed(self, seconds: float, running: bool) -> None:
        self.elapsed = ElapsedFields.fromSeconds(seconds)
        self.running = running
