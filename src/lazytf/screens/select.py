"""Select screen: pick one entry from a list."""

from textual.app import ComposeResult
from textual.binding import Binding
from textual.screen import ModalScreen
from textual.widgets import Label, ListItem, ListView, Static


class SelectScreen(ModalScreen[int | None]):
    """Modal that lets the user choose one of *items*.

    Dismisses with the index of the chosen item on Enter, or ``None`` on
    Escape/q.
    """

    BINDINGS = [
        Binding("escape", "cancel", show=False),
        Binding("q", "cancel", show=False),
        Binding("j", "cursor_down", show=False),
        Binding("k", "cursor_up", show=False),
    ]

    DEFAULT_CSS = """
    SelectScreen {
        align: center middle;
        layout: vertical;
    }
    """

    def __init__(self, title: str, items: tuple[str, ...] | list[str], message: str = "") -> None:
        super().__init__()
        self._title = title
        self._items = list(items)
        self._message = message

    def compose(self) -> ComposeResult:
        yield Static(f"  {self._title}", id="select-title", markup=False)
        if self._message:
            yield Label(self._message, id="select-message", markup=False)
        yield ListView(
            *[ListItem(Label(f"  {item}", markup=False)) for item in self._items],
            id="select-list",
        )
        yield Static("  Enter to select · Esc/q to cancel", id="select-hint")

    def on_mount(self) -> None:
        self.query_one("#select-list", ListView).focus()

    def on_list_view_selected(self, event: ListView.Selected) -> None:
        event.stop()
        index = event.list_view.index
        if index is not None:
            self.dismiss(index)

    def action_cursor_down(self) -> None:
        self.query_one("#select-list", ListView).action_cursor_down()

    def action_cursor_up(self) -> None:
        self.query_one("#select-list", ListView).action_cursor_up()

    def action_cancel(self) -> None:
        self.dismiss(None)
