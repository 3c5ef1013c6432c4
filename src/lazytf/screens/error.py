"""Error screen: modal that reports a problem until acknowledged."""

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Label


class ErrorScreen(ModalScreen[None]):
    """Modal showing an error message; Enter or Escape closes it."""

    BINDINGS = [
        Binding("escape", "close", show=False),
        Binding("enter", "close", show=False),
    ]

    def __init__(self, title: str, message: str) -> None:
        super().__init__()
        self._title = title or "❌ Error"
        self._message = message

    def compose(self) -> ComposeResult:
        with Vertical(id="error-container"):
            yield Label(self._title, id="error-title", markup=False)
            yield Label(self._message, id="error-message", markup=False)
            yield Button("OK (Enter)", variant="error", id="error-ok")

    def on_mount(self) -> None:
        self.query_one("#error-ok", Button).focus()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        self.dismiss(None)

    def action_close(self) -> None:
        self.dismiss(None)
